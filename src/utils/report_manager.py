"""Lecture report management utilities.

This module creates reports under the caller's identity, resolves class
sizes, lists reports through role scoping, and records PRL feedback.
"""

import logging
from datetime import datetime
from typing import List, Optional

import pytz

from core.exceptions import NotFoundError, ValidationError
from models.class_model import ClassModel
from models.course import CourseModel
from models.enrollment import EnrollmentModel
from models.module import ModuleModel
from models.report import ReportModel
from schemas.report import CreateReportRequest
from schemas.user import TokenClaims
from utils.base_manager import BaseManager
from utils.scoping import apply_scope, report_predicate

logger = logging.getLogger(__name__)


class ReportManager(BaseManager):
    """Manages lecture reports."""

    def create_report(
        self, req: CreateReportRequest, identity: TokenClaims
    ) -> ReportModel:
        """Create a report owned by the calling lecturer.

        The lecturer id always comes from ``identity``. The class size is
        looked up once here and never recomputed. The lookup and the insert
        are separate statements.

        Args:
            req: Report fields from the request body.
            identity: The caller's token claims.

        Returns:
            The created ReportModel.

        Raises:
            ValidationError: If ``module_id`` or ``class_id`` does not exist.
        """
        class_model = None
        if req.class_id is not None:
            class_model = (
                self.db.query(ClassModel).filter(ClassModel.id == req.class_id).first()
            )
            if not class_model:
                raise ValidationError(f"Class '{req.class_id}' not found")

        module_id = req.module_id
        if module_id is None and class_model is not None:
            module_id = class_model.module_id

        module = None
        if module_id is not None:
            module = self.db.query(ModuleModel).filter(ModuleModel.id == module_id).first()
            if not module:
                raise ValidationError(f"Module '{module_id}' not found")

        model = ReportModel(
            faculty_name=req.faculty_name,
            class_name=req.class_name or (class_model.name if class_model else None),
            week=req.week,
            lecture_date=req.lecture_date,
            course_name=req.course_name,
            course_code=req.course_code,
            lecturer_name=req.lecturer_name or identity.name,
            lecturer_id=identity.id,
            students_present=req.students_present,
            total_students=self.resolve_total_students(module, req.course_code),
            venue=req.venue or (class_model.venue if class_model else None),
            scheduled_time=req.scheduled_time
            or (class_model.scheduled_time if class_model else None),
            topic_taught=req.topic_taught,
            learning_outcomes=req.learning_outcomes,
            recommendations=req.recommendations,
            module_id=module_id,
            class_id=req.class_id,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self._commit()
        self.db.refresh(model)
        logger.info("Lecturer %s created report %s", identity.id, model.id)
        return model

    def resolve_total_students(
        self, module: Optional[ModuleModel], course_code: Optional[str]
    ) -> int:
        """Number of students expected at a lecture.

        Enrollments in the module win; a module without enrollments falls
        back to its course's registered count; with no module, the course
        named by ``course_code`` is used. Unknown everything yields 0.
        """
        if module is not None:
            enrolled = (
                self.db.query(EnrollmentModel)
                .filter(EnrollmentModel.module_id == module.id)
                .count()
            )
            if enrolled:
                return enrolled
            course = (
                self.db.query(CourseModel).filter(CourseModel.id == module.course_id).first()
            )
            return course.total_registered_students if course else 0

        if course_code:
            course = (
                self.db.query(CourseModel).filter(CourseModel.code == course_code).first()
            )
            if course:
                return course.total_registered_students
        return 0

    def list_reports(self, identity: TokenClaims) -> List[ReportModel]:
        query = apply_scope(self.db.query(ReportModel), report_predicate(identity))
        return query.order_by(ReportModel.id.desc()).all()

    def list_all_reports(self) -> List[ReportModel]:
        return self.db.query(ReportModel).order_by(ReportModel.id.desc()).all()

    def get_report(self, report_id: int) -> ReportModel:
        model = self.db.query(ReportModel).filter(ReportModel.id == report_id).first()
        if not model:
            raise NotFoundError("Report", report_id)
        return model

    def get_visible_report(self, report_id: int, identity: TokenClaims) -> ReportModel:
        query = apply_scope(
            self.db.query(ReportModel).filter(ReportModel.id == report_id),
            report_predicate(identity),
        )
        model = query.first()
        if not model:
            raise NotFoundError("Report", report_id)
        return model

    def set_feedback(self, report_id: int, feedback: str) -> ReportModel:
        """Set the PRL feedback on a report. No other field changes.

        Raises:
            NotFoundError: If the report does not exist.
        """
        model = self.get_report(report_id)
        model.prl_feedback = feedback
        self._commit()
        self.db.refresh(model)
        logger.info("Feedback recorded on report %s", report_id)
        return model
