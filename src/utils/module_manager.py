"""Module, lecturer assignment, and enrollment management."""

import logging
from datetime import datetime
from typing import List, Optional

import pytz

from core.exceptions import ConflictError, NotFoundError, ValidationError
from models.course import CourseModel
from models.enrollment import EnrollmentModel
from models.module import ModuleModel
from models.user import UserModel
from schemas.course import CreateModuleRequest
from schemas.user import Role, TokenClaims
from utils.base_manager import BaseManager
from utils.scoping import apply_scope, module_predicate

logger = logging.getLogger(__name__)


class ModuleManager(BaseManager):
    """Manages modules, their lecturers, and student enrollments."""

    def create_module(self, req: CreateModuleRequest) -> ModuleModel:
        """Create a module under an existing course.

        Args:
            req: Module fields. ``lecturer_id`` is optional.

        Returns:
            The created ModuleModel.

        Raises:
            ValidationError: If the course or lecturer does not exist.
            ConflictError: If the module code is already used.
        """
        if not self.db.query(CourseModel).filter(CourseModel.id == req.course_id).first():
            raise ValidationError(f"Course '{req.course_id}' not found")
        if req.lecturer_id is not None:
            self._require_lecturer(req.lecturer_id)
        if self.db.query(ModuleModel).filter(ModuleModel.code == req.code).first():
            raise ConflictError(f"Module code '{req.code}' already exists")

        model = ModuleModel(
            name=req.name,
            code=req.code,
            description=req.description,
            course_id=req.course_id,
            lecturer_id=req.lecturer_id,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self._commit(f"Module code '{req.code}' already exists")
        self.db.refresh(model)
        logger.info("Created module %s (%s)", model.id, model.code)
        return model

    def assign_lecturer(self, module_id: int, lecturer_id: int) -> ModuleModel:
        """Reassign a module's lecturer. The last write wins.

        Raises:
            NotFoundError: If the module does not exist.
            ValidationError: If the user is not a lecturer.
        """
        model = self.get_module(module_id)
        self._require_lecturer(lecturer_id)
        model.lecturer_id = lecturer_id
        self._commit()
        self.db.refresh(model)
        logger.info("Assigned lecturer %s to module %s", lecturer_id, module_id)
        return model

    def get_module(self, module_id: int) -> ModuleModel:
        model = self.db.query(ModuleModel).filter(ModuleModel.id == module_id).first()
        if not model:
            raise NotFoundError("Module", module_id)
        return model

    def list_modules(
        self, identity: TokenClaims, course_id: Optional[int] = None
    ) -> List[ModuleModel]:
        query = apply_scope(self.db.query(ModuleModel), module_predicate(identity))
        if course_id is not None:
            query = query.filter(ModuleModel.course_id == course_id)
        return query.order_by(ModuleModel.id).all()

    def list_all_modules(self) -> List[ModuleModel]:
        return self.db.query(ModuleModel).order_by(ModuleModel.id).all()

    def enroll(self, module_id: int, student_id: int) -> EnrollmentModel:
        """Enroll a student in a module. Enrolling twice is a no-op.

        Raises:
            NotFoundError: If the module does not exist.
            ValidationError: If the user is not a student.
        """
        self.get_module(module_id)
        student = self.db.query(UserModel).filter(UserModel.id == student_id).first()
        if not student or student.role != Role.STUDENT.value:
            raise ValidationError(f"Student '{student_id}' not found")

        existing = (
            self.db.query(EnrollmentModel)
            .filter(
                EnrollmentModel.module_id == module_id,
                EnrollmentModel.student_id == student_id,
            )
            .first()
        )
        if existing:
            return existing

        model = EnrollmentModel(
            module_id=module_id,
            student_id=student_id,
            enrolled_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self._commit("Student is already enrolled")
        self.db.refresh(model)
        logger.info("Enrolled student %s in module %s", student_id, module_id)
        return model

    def _require_lecturer(self, lecturer_id: int) -> UserModel:
        user = self.db.query(UserModel).filter(UserModel.id == lecturer_id).first()
        if not user or user.role != Role.LECTURER.value:
            raise ValidationError(f"Lecturer '{lecturer_id}' not found")
        return user
