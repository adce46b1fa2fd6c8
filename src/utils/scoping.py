"""Role-based row visibility.

Each ``*_predicate`` returns the SQLAlchemy filter narrowing a table to the
rows the caller may see, or ``None`` when the caller sees every row.

- Courses: lecturers see courses holding at least one of their modules.
- Modules: lecturers see their own modules, students their enrolled modules.
- Reports: lecturers see their own reports, students reports on enrolled modules.
- Classes: lecturers see classes of their own modules.
- Ratings: ratings on visible reports.

PRL and PL see everything.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.orm import Query
from sqlalchemy.sql.elements import ColumnElement

from models import (
    ClassModel,
    CourseModel,
    EnrollmentModel,
    ModuleModel,
    RatingModel,
    ReportModel,
)
from schemas.user import Role, TokenClaims


def _lecturer_module_ids(lecturer_id: int):
    return select(ModuleModel.id).where(ModuleModel.lecturer_id == lecturer_id)


def _enrolled_module_ids(student_id: int):
    return select(EnrollmentModel.module_id).where(
        EnrollmentModel.student_id == student_id
    )


def course_predicate(identity: TokenClaims) -> Optional[ColumnElement]:
    if identity.role == Role.LECTURER:
        return CourseModel.id.in_(
            select(ModuleModel.course_id).where(ModuleModel.lecturer_id == identity.id)
        )
    return None


def module_predicate(identity: TokenClaims) -> Optional[ColumnElement]:
    if identity.role == Role.LECTURER:
        return ModuleModel.lecturer_id == identity.id
    if identity.role == Role.STUDENT:
        return ModuleModel.id.in_(_enrolled_module_ids(identity.id))
    return None


def report_predicate(identity: TokenClaims) -> Optional[ColumnElement]:
    if identity.role == Role.LECTURER:
        return ReportModel.lecturer_id == identity.id
    if identity.role == Role.STUDENT:
        return ReportModel.module_id.in_(_enrolled_module_ids(identity.id))
    return None


def class_predicate(identity: TokenClaims) -> Optional[ColumnElement]:
    if identity.role == Role.LECTURER:
        return ClassModel.module_id.in_(_lecturer_module_ids(identity.id))
    return None


def rating_predicate(identity: TokenClaims) -> Optional[ColumnElement]:
    visible_reports = report_predicate(identity)
    if visible_reports is None:
        return None
    return RatingModel.report_id.in_(select(ReportModel.id).where(visible_reports))


def apply_scope(query: Query, predicate: Optional[ColumnElement]) -> Query:
    """Narrow ``query`` by ``predicate`` unless the caller sees all rows."""
    if predicate is None:
        return query
    return query.filter(predicate)
