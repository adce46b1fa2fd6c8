"""Keyword search over role-scoped tables."""

from typing import Any, Callable, Dict, List, NamedTuple, Optional, Type

from pydantic import BaseModel
from sqlalchemy import or_

from core.exceptions import ValidationError
from models import ClassModel, CourseModel, ModuleModel, ReportModel
from schemas.class_schema import ClassInfo
from schemas.course import CourseInfo, ModuleInfo
from schemas.report import ReportInfo
from schemas.user import TokenClaims
from utils.base_manager import BaseManager
from utils.scoping import (
    apply_scope,
    class_predicate,
    course_predicate,
    module_predicate,
    report_predicate,
)


class SearchTarget(NamedTuple):
    model: Any
    columns: List[Any]
    predicate: Callable[[TokenClaims], Optional[Any]]
    schema: Type[BaseModel]


SEARCH_TARGETS: Dict[str, SearchTarget] = {
    "reports": SearchTarget(
        ReportModel,
        [
            ReportModel.faculty_name,
            ReportModel.course_name,
            ReportModel.topic_taught,
            ReportModel.class_name,
        ],
        report_predicate,
        ReportInfo,
    ),
    "courses": SearchTarget(
        CourseModel, [CourseModel.name, CourseModel.code], course_predicate, CourseInfo
    ),
    "modules": SearchTarget(
        ModuleModel, [ModuleModel.name, ModuleModel.code], module_predicate, ModuleInfo
    ),
    "classes": SearchTarget(ClassModel, [ClassModel.name], class_predicate, ClassInfo),
}


class SearchManager(BaseManager):
    """Case-insensitive substring search, narrowed by the caller's role."""

    def search(self, target: str, text: str, identity: TokenClaims) -> List[BaseModel]:
        """Search one table.

        Args:
            target: One of ``SEARCH_TARGETS``.
            text: Substring to look for.
            identity: The caller's token claims.

        Returns:
            Matching rows as schema objects.

        Raises:
            ValidationError: On an unknown target or empty query.
        """
        spec = SEARCH_TARGETS.get(target)
        if spec is None:
            raise ValidationError(f"Invalid search type: {target}")
        text = (text or "").strip()
        if not text:
            raise ValidationError("Search query cannot be empty")

        pattern = f"%{text}%"
        query = self.db.query(spec.model).filter(
            or_(*[column.ilike(pattern) for column in spec.columns])
        )
        query = apply_scope(query, spec.predicate(identity))
        return [
            spec.schema.model_validate(row)
            for row in query.order_by(spec.model.id).all()
        ]
