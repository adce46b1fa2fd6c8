"""Lecture report routes.

Reports are written by lecturers, reviewed by PRLs, and read by everyone
through role scoping.
"""

import logging

from fastapi import APIRouter, Depends, Query, Response

import config
from core.auth import IdentityDep, authorize
from core.dependencies import RatingManagerDep, ReportManagerDep, SearchManagerDep
from schemas.rating import RatingInfo
from schemas.report import CreateReportRequest, FeedbackRequest, ReportInfo
from schemas.user import TokenClaims
from utils.export import REPORT_COLUMNS, rows_to_xlsx

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/reports", tags=["Report"])


@router.get("", summary="List reports")
def list_reports(
    report_manager: ReportManagerDep,
    identity: IdentityDep,
) -> dict:
    models = report_manager.list_reports(identity)
    return {"success": True, "reports": [ReportInfo.model_validate(m) for m in models]}


@router.post("", summary="Submit a report")
def create_report(
    req: CreateReportRequest,
    report_manager: ReportManagerDep,
    identity: TokenClaims = Depends(authorize("reports:create")),
) -> dict:
    """Submit a lecture report.

    Args:
        req: Report fields. A ``lecturer_id`` in the body is ignored.
        report_manager: Injected ReportManager instance.
        identity: The calling lecturer.

    Returns:
        Dictionary with the stored report.
    """
    model = report_manager.create_report(req, identity)
    return {"success": True, "report": ReportInfo.model_validate(model)}


@router.get("/search", summary="Search reports")
def search_reports(
    search_manager: SearchManagerDep,
    identity: IdentityDep,
    query: str = Query(default=""),
) -> dict:
    results = search_manager.search("reports", query, identity)
    return {"success": True, "reports": results}


@router.get("/export", summary="Export reports to Excel")
def export_reports(
    report_manager: ReportManagerDep,
    identity: TokenClaims = Depends(authorize("reports:export")),
) -> Response:
    """Download every report visible to the caller as an .xlsx file."""
    rows = [
        ReportInfo.model_validate(m).model_dump()
        for m in report_manager.list_reports(identity)
    ]
    content = rows_to_xlsx(rows, REPORT_COLUMNS, config.EXPORT_SHEET_TITLE)
    logger.info("User %s exported %d reports", identity.id, len(rows))
    return Response(
        content=content,
        media_type=config.XLSX_MEDIA_TYPE,
        headers={"Content-Disposition": "attachment; filename=reports.xlsx"},
    )


@router.get("/{report_id}", summary="Get a report")
def get_report(
    report_id: int,
    report_manager: ReportManagerDep,
    identity: IdentityDep,
) -> dict:
    model = report_manager.get_visible_report(report_id, identity)
    return {"success": True, "report": ReportInfo.model_validate(model)}


@router.put("/{report_id}/feedback", summary="Add PRL feedback")
def add_feedback(
    report_id: int,
    req: FeedbackRequest,
    report_manager: ReportManagerDep,
    identity: TokenClaims = Depends(authorize("reports:feedback")),
) -> dict:
    model = report_manager.set_feedback(report_id, req.prl_feedback)
    return {
        "success": True,
        "message": "Feedback added",
        "report": ReportInfo.model_validate(model),
    }


@router.get("/{report_id}/ratings", summary="List a report's ratings")
def list_report_ratings(
    report_id: int,
    report_manager: ReportManagerDep,
    rating_manager: RatingManagerDep,
    identity: IdentityDep,
) -> dict:
    report_manager.get_visible_report(report_id, identity)
    models = rating_manager.list_report_ratings(report_id)
    return {"success": True, "ratings": [RatingInfo.model_validate(m) for m in models]}
