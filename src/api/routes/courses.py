"""Course management routes."""

from fastapi import APIRouter, Depends

from core.auth import IdentityDep, authorize
from core.dependencies import CourseManagerDep, ModuleManagerDep
from schemas.course import CourseInfo, CreateCourseRequest, ModuleInfo
from schemas.user import TokenClaims

router = APIRouter(prefix="/api/courses", tags=["Course"])


@router.get("", summary="List courses")
def list_courses(
    course_manager: CourseManagerDep,
    identity: IdentityDep,
) -> dict:
    """List courses visible to the caller.

    Lecturers see only courses holding one of their modules.
    """
    models = course_manager.list_courses(identity)
    return {
        "success": True,
        "courses": [CourseInfo.model_validate(m) for m in models],
    }


@router.post("", summary="Create a course")
def create_course(
    req: CreateCourseRequest,
    course_manager: CourseManagerDep,
    identity: TokenClaims = Depends(authorize("courses:create")),
) -> dict:
    model = course_manager.create_course(req, created_by=identity.id)
    return {"success": True, "course": CourseInfo.model_validate(model)}


@router.get("/{course_id}", summary="Get a course")
def get_course(
    course_id: int,
    course_manager: CourseManagerDep,
    identity: IdentityDep,
) -> dict:
    model = course_manager.get_visible_course(course_id, identity)
    return {"success": True, "course": CourseInfo.model_validate(model)}


@router.get("/{course_id}/modules", summary="List a course's modules")
def list_course_modules(
    course_id: int,
    course_manager: CourseManagerDep,
    module_manager: ModuleManagerDep,
    identity: IdentityDep,
) -> dict:
    course_manager.get_visible_course(course_id, identity)
    models = module_manager.list_modules(identity, course_id=course_id)
    return {
        "success": True,
        "modules": [ModuleInfo.model_validate(m) for m in models],
    }
