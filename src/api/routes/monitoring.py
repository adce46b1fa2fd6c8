"""Monitoring routes: dashboard metrics and the activity log."""

from fastapi import APIRouter, Depends

from core.auth import IdentityDep, authorize
from core.dependencies import MonitoringManagerDep
from schemas.monitoring import (
    AttendanceMonitoring,
    CreateLogRequest,
    LecturerMonitoring,
    MonitoringLogInfo,
    ProgramMonitoring,
)
from schemas.user import TokenClaims

router = APIRouter(prefix="/api/monitoring", tags=["Monitoring"])


@router.get("/program", response_model=ProgramMonitoring, summary="Program metrics")
def program_monitoring(
    monitoring_manager: MonitoringManagerDep,
    identity: TokenClaims = Depends(authorize("monitoring:program")),
) -> ProgramMonitoring:
    """Program-wide metrics for the PL dashboard.

    Returns:
        ProgramMonitoring with average attendance, curriculum coverage,
        student satisfaction, report completion rate and per-lecturer
        attendance percentages.
    """
    return ProgramMonitoring(**monitoring_manager.program_summary())


@router.get(
    "/attendance", response_model=AttendanceMonitoring, summary="Attendance metrics"
)
def attendance_monitoring(
    monitoring_manager: MonitoringManagerDep,
    identity: TokenClaims = Depends(authorize("monitoring:attendance")),
) -> AttendanceMonitoring:
    return AttendanceMonitoring(**monitoring_manager.attendance_summary(identity))


@router.get(
    "/lecturer", response_model=LecturerMonitoring, summary="My teaching metrics"
)
def lecturer_monitoring(
    monitoring_manager: MonitoringManagerDep,
    identity: TokenClaims = Depends(authorize("monitoring:lecturer")),
) -> LecturerMonitoring:
    return LecturerMonitoring(**monitoring_manager.lecturer_summary(identity))


@router.post("/logs", summary="Record an activity")
def log_activity(
    req: CreateLogRequest,
    monitoring_manager: MonitoringManagerDep,
    identity: IdentityDep,
) -> dict:
    model = monitoring_manager.log_action(identity.id, req.action)
    return {"success": True, "log": MonitoringLogInfo.model_validate(model)}


@router.get("/logs", summary="List recent activity")
def list_activity(
    monitoring_manager: MonitoringManagerDep,
    identity: TokenClaims = Depends(authorize("monitoring:logs")),
) -> dict:
    models = monitoring_manager.list_logs()
    return {
        "success": True,
        "logs": [MonitoringLogInfo.model_validate(m) for m in models],
    }
