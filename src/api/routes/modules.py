"""Module, lecturer assignment, and enrollment routes."""

from typing import Optional

from fastapi import APIRouter, Depends

from core.auth import IdentityDep, authorize
from core.dependencies import ModuleManagerDep
from core.exceptions import ValidationError
from schemas.course import (
    AssignLecturerRequest,
    CreateModuleRequest,
    EnrollmentInfo,
    EnrollRequest,
    ModuleInfo,
)
from schemas.user import Role, TokenClaims

router = APIRouter(prefix="/api", tags=["Module"])


@router.get("/modules", summary="List modules")
def list_modules(
    module_manager: ModuleManagerDep,
    identity: IdentityDep,
) -> dict:
    """List modules visible to the caller.

    Lecturers see modules assigned to them, students the modules they are
    enrolled in, PRL and PL every module.
    """
    models = module_manager.list_modules(identity)
    return {"success": True, "modules": [ModuleInfo.model_validate(m) for m in models]}


@router.get("/lecturer/modules", summary="List my modules")
def list_my_modules(
    module_manager: ModuleManagerDep,
    identity: TokenClaims = Depends(authorize("modules:own")),
) -> dict:
    models = module_manager.list_modules(identity)
    return {"success": True, "modules": [ModuleInfo.model_validate(m) for m in models]}


@router.post("/modules", summary="Create a module")
def create_module(
    req: CreateModuleRequest,
    module_manager: ModuleManagerDep,
    identity: TokenClaims = Depends(authorize("modules:create")),
) -> dict:
    model = module_manager.create_module(req)
    return {"success": True, "module": ModuleInfo.model_validate(model)}


@router.put("/modules/{module_id}/assign", summary="Assign a lecturer to a module")
def assign_lecturer(
    module_id: int,
    req: AssignLecturerRequest,
    module_manager: ModuleManagerDep,
    identity: TokenClaims = Depends(authorize("modules:assign")),
) -> dict:
    model = module_manager.assign_lecturer(module_id, req.lecturer_id)
    return {"success": True, "module": ModuleInfo.model_validate(model)}


@router.post("/modules/{module_id}/enroll", summary="Enroll a student in a module")
def enroll(
    module_id: int,
    module_manager: ModuleManagerDep,
    req: Optional[EnrollRequest] = None,
    identity: TokenClaims = Depends(authorize("modules:enroll")),
) -> dict:
    """Enroll a student.

    Students always enroll themselves; any ``student_id`` they send is
    ignored. A PL must name the student.
    """
    if identity.role == Role.STUDENT:
        student_id = identity.id
    elif req is None or req.student_id is None:
        raise ValidationError("student_id is required")
    else:
        student_id = req.student_id

    model = module_manager.enroll(module_id, student_id)
    return {"success": True, "enrollment": EnrollmentInfo.model_validate(model)}
