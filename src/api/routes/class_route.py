"""Class management routes."""

from fastapi import APIRouter, Depends

from core.auth import IdentityDep, authorize
from core.dependencies import ClassManagerDep
from schemas.class_schema import ClassInfo, CreateClassRequest
from schemas.user import TokenClaims

router = APIRouter(prefix="/api/classes", tags=["Class"])


@router.post("", summary="Create a class")
def create_class(
    req: CreateClassRequest,
    class_manager: ClassManagerDep,
    current_user: TokenClaims = Depends(authorize("classes:create")),
) -> dict:
    class_model = class_manager.create_class(req, current_user)
    return {"success": True, "class": ClassInfo.model_validate(class_model)}


@router.get("", summary="List classes")
def list_classes(
    class_manager: ClassManagerDep,
    current_user: IdentityDep,
) -> dict:
    models = class_manager.list_classes(current_user)
    return {"success": True, "classes": [ClassInfo.model_validate(m) for m in models]}


@router.get("/{class_id}", summary="Get a class")
def get_class(
    class_id: int,
    class_manager: ClassManagerDep,
    current_user: IdentityDep,
) -> dict:
    model = class_manager.get_visible_class(class_id, current_user)
    return {"success": True, "class": ClassInfo.model_validate(model)}
