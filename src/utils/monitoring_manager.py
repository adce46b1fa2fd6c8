"""Monitoring metrics and activity logs."""

import logging
from datetime import datetime
from typing import Any, Dict, List

import pytz

from models.monitoring_log import MonitoringLogModel
from models.user import UserModel
from schemas.course import ModuleInfo
from schemas.rating import RatingInfo
from schemas.report import ReportInfo
from schemas.user import Role, TokenClaims
from utils import aggregation
from utils.base_manager import BaseManager
from utils.module_manager import ModuleManager
from utils.rating_manager import RatingManager
from utils.report_manager import ReportManager

logger = logging.getLogger(__name__)


def _report_rows(models) -> List[Dict[str, Any]]:
    return [ReportInfo.model_validate(m).model_dump() for m in models]


def _rating_rows(models) -> List[Dict[str, Any]]:
    return [RatingInfo.model_validate(m).model_dump() for m in models]


def _module_rows(models) -> List[Dict[str, Any]]:
    return [ModuleInfo.model_validate(m).model_dump() for m in models]


class MonitoringManager(BaseManager):
    """Feeds store rows into the aggregation functions."""

    def program_summary(self) -> Dict[str, Any]:
        """Program-wide metrics over every report, module and rating."""
        reports = _report_rows(ReportManager(self.db).list_all_reports())
        modules = _module_rows(ModuleManager(self.db).list_all_modules())
        ratings = _rating_rows(RatingManager(self.db).list_all_ratings())
        lecturer_ids = [
            row.id
            for row in self.db.query(UserModel.id)
            .filter(UserModel.role == Role.LECTURER.value)
            .all()
        ]
        return aggregation.program_summary(reports, modules, ratings, lecturer_ids)

    def attendance_summary(self, identity: TokenClaims) -> Dict[str, Any]:
        reports = _report_rows(ReportManager(self.db).list_reports(identity))
        return {
            "avg_attendance": aggregation.avg_attendance(reports),
            "report_count": len(reports),
        }

    def lecturer_summary(self, identity: TokenClaims) -> Dict[str, Any]:
        reports = _report_rows(ReportManager(self.db).list_reports(identity))
        ratings = _rating_rows(RatingManager(self.db).list_lecturer_ratings(identity.id))
        return aggregation.lecturer_summary(reports, ratings)

    def student_attendance(self, identity: TokenClaims) -> List[Dict[str, Any]]:
        reports = _report_rows(ReportManager(self.db).list_reports(identity))
        return aggregation.student_attendance_rows(reports)

    def student_progress(self, identity: TokenClaims) -> List[Dict[str, Any]]:
        modules = _module_rows(ModuleManager(self.db).list_modules(identity))
        reports = _report_rows(ReportManager(self.db).list_reports(identity))
        return aggregation.student_progress(modules, reports)

    def log_action(self, user_id: int, action: str) -> MonitoringLogModel:
        model = MonitoringLogModel(
            user_id=user_id,
            action=action,
            created_at=datetime.now(pytz.utc).isoformat(),
        )
        self.db.add(model)
        self._commit()
        self.db.refresh(model)
        return model

    def list_logs(self, limit: int = 200) -> List[MonitoringLogModel]:
        return (
            self.db.query(MonitoringLogModel)
            .order_by(MonitoringLogModel.id.desc())
            .limit(limit)
            .all()
        )
