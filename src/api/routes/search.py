"""Keyword search routes."""

from fastapi import APIRouter, Query

from core.auth import IdentityDep
from core.dependencies import SearchManagerDep

router = APIRouter(prefix="/api/search", tags=["Search"])


@router.get("/{target}", summary="Search reports, courses, modules or classes")
def search(
    target: str,
    search_manager: SearchManagerDep,
    identity: IdentityDep,
    query: str = Query(default=""),
) -> dict:
    results = search_manager.search(target, query, identity)
    return {"success": True, "results": results}
