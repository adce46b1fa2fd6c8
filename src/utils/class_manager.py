"""Class management utilities."""

import logging
from datetime import datetime
from typing import List, Optional

import pytz

from core.exceptions import ForbiddenError, NotFoundError, ValidationError
from models.class_model import ClassModel
from models.course import CourseModel
from models.module import ModuleModel
from models.user import UserModel
from schemas.class_schema import CreateClassRequest
from schemas.user import Role, TokenClaims
from utils.base_manager import BaseManager
from utils.scoping import apply_scope, class_predicate

logger = logging.getLogger(__name__)


class ClassManager(BaseManager):
    """Manages scheduled classes."""

    def create_class(self, req: CreateClassRequest, identity: TokenClaims) -> ClassModel:
        """Create a class under a module or course.

        A lecturer may only create classes for a module assigned to them, and
        always becomes the class lecturer. PRL and PL may name any lecturer;
        otherwise the module's lecturer is used.

        Args:
            req: Class fields.
            identity: The caller's token claims.

        Returns:
            The created ClassModel.

        Raises:
            ValidationError: If a referenced module, course or lecturer is missing.
            ForbiddenError: If a lecturer targets someone else's module.
        """
        module = self._get_module(req.module_id) if req.module_id is not None else None
        course_id = req.course_id
        if course_id is None and module is not None:
            course_id = module.course_id
        if course_id is not None and not (
            self.db.query(CourseModel).filter(CourseModel.id == course_id).first()
        ):
            raise ValidationError(f"Course '{course_id}' not found")

        if identity.role == Role.LECTURER:
            if module is None:
                raise ValidationError("Lecturers must create classes under a module")
            if module.lecturer_id != identity.id:
                raise ForbiddenError("You can only create classes for your own modules")
            lecturer_id: Optional[int] = identity.id
        elif req.lecturer_id is not None:
            lecturer = (
                self.db.query(UserModel).filter(UserModel.id == req.lecturer_id).first()
            )
            if not lecturer or lecturer.role != Role.LECTURER.value:
                raise ValidationError(f"Lecturer '{req.lecturer_id}' not found")
            lecturer_id = req.lecturer_id
        else:
            lecturer_id = module.lecturer_id if module is not None else None

        class_model = ClassModel(
            name=req.name,
            module_id=req.module_id,
            course_id=course_id,
            venue=req.venue,
            scheduled_time=req.scheduled_time,
            lecturer_id=lecturer_id,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(class_model)
        self._commit()
        self.db.refresh(class_model)
        logger.info("Created class %s by user %s", class_model.id, identity.id)
        return class_model

    def get_visible_class(self, class_id: int, identity: TokenClaims) -> ClassModel:
        query = apply_scope(
            self.db.query(ClassModel).filter(ClassModel.id == class_id),
            class_predicate(identity),
        )
        model = query.first()
        if not model:
            raise NotFoundError("Class", class_id)
        return model

    def list_classes(self, identity: TokenClaims) -> List[ClassModel]:
        query = apply_scope(self.db.query(ClassModel), class_predicate(identity))
        return query.order_by(ClassModel.id).all()

    def _get_module(self, module_id: int) -> ModuleModel:
        module = self.db.query(ModuleModel).filter(ModuleModel.id == module_id).first()
        if not module:
            raise ValidationError(f"Module '{module_id}' not found")
        return module
