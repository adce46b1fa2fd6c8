"""Student self-service routes."""

from fastapi import APIRouter, Depends, Response

import config
from core.dependencies import MonitoringManagerDep, RatingManagerDep
from core.auth import authorize
from schemas.monitoring import ModuleProgress, StudentAttendanceRow
from schemas.rating import RatingInfo
from schemas.user import TokenClaims
from utils.export import RATING_COLUMNS, rows_to_xlsx

router = APIRouter(prefix="/api/students/me", tags=["Student"])


@router.get("/attendance", summary="Attendance on my modules")
def my_attendance(
    monitoring_manager: MonitoringManagerDep,
    identity: TokenClaims = Depends(authorize("students:self")),
) -> dict:
    rows = monitoring_manager.student_attendance(identity)
    return {
        "success": True,
        "attendance": [StudentAttendanceRow(**row) for row in rows],
    }


@router.get("/progress", summary="Progress per enrolled module")
def my_progress(
    monitoring_manager: MonitoringManagerDep,
    identity: TokenClaims = Depends(authorize("students:self")),
) -> dict:
    rows = monitoring_manager.student_progress(identity)
    return {"success": True, "progress": [ModuleProgress(**row) for row in rows]}


@router.get("/feedback", summary="Ratings I submitted")
def my_feedback(
    rating_manager: RatingManagerDep,
    identity: TokenClaims = Depends(authorize("students:self")),
) -> dict:
    models = rating_manager.list_user_ratings(identity.id)
    return {"success": True, "feedback": [RatingInfo.model_validate(m) for m in models]}


@router.get("/feedback/export", summary="Export my ratings to Excel")
def export_my_feedback(
    rating_manager: RatingManagerDep,
    identity: TokenClaims = Depends(authorize("students:self")),
) -> Response:
    rows = [
        RatingInfo.model_validate(m).model_dump()
        for m in rating_manager.list_user_ratings(identity.id)
    ]
    content = rows_to_xlsx(rows, RATING_COLUMNS, "Feedback")
    return Response(
        content=content,
        media_type=config.XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=feedback.xlsx"},
    )
