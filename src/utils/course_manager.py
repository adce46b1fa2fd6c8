"""Course management utilities."""

import logging
from datetime import datetime
from typing import List

import pytz

from core.exceptions import ConflictError, NotFoundError
from models.course import CourseModel
from schemas.course import CreateCourseRequest
from schemas.user import TokenClaims
from utils.base_manager import BaseManager
from utils.scoping import apply_scope, course_predicate

logger = logging.getLogger(__name__)


class CourseManager(BaseManager):
    """Manages course creation and role-scoped listing."""

    def create_course(self, req: CreateCourseRequest, created_by: int) -> CourseModel:
        """Create a new course.

        Raises:
            ConflictError: If the course code is already used.
        """
        if self.db.query(CourseModel).filter(CourseModel.code == req.code).first():
            raise ConflictError(f"Course code '{req.code}' already exists")

        model = CourseModel(
            name=req.name,
            code=req.code,
            faculty_id=req.faculty_id,
            total_registered_students=req.total_registered_students,
            created_by=created_by,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self._commit(f"Course code '{req.code}' already exists")
        self.db.refresh(model)
        logger.info("Created course %s (%s)", model.id, model.code)
        return model

    def list_courses(self, identity: TokenClaims) -> List[CourseModel]:
        query = apply_scope(self.db.query(CourseModel), course_predicate(identity))
        return query.order_by(CourseModel.id).all()

    def get_visible_course(self, course_id: int, identity: TokenClaims) -> CourseModel:
        """Get a course the caller may see; invisible courses look absent."""
        query = apply_scope(
            self.db.query(CourseModel).filter(CourseModel.id == course_id),
            course_predicate(identity),
        )
        model = query.first()
        if not model:
            raise NotFoundError("Course", course_id)
        return model
