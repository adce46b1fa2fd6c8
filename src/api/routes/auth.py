"""Authentication routes.

This module handles HTTP endpoints for registration, login, token refresh,
and user lookups.
"""

import logging

from fastapi import APIRouter, Depends, status

from core.auth import IdentityDep, authorize, get_raw_token
from core.dependencies import TokenServiceDep, UserManagerDep
from core.exceptions import AccountNotFoundError
from core.security import claims_for_user
from schemas.user import (
    LoginRequest,
    LoginResponse,
    RegisterRequest,
    RegisterResponse,
    Role,
    TokenClaims,
    UserInfo,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["Auth"])


@router.post(
    "/register",
    response_model=RegisterResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a user",
)
def register(
    req: RegisterRequest,
    user_manager: UserManagerDep,
) -> RegisterResponse:
    """Register a new user.

    Students register with a student number; lecturers, PRLs and PLs with an
    email address.

    Args:
        req: Registration request.
        user_manager: Injected UserManager instance.

    Returns:
        RegisterResponse with the new user's id.

    Raises:
        UserAlreadyExistsError: If the email or student number is taken.
    """
    user = user_manager.create_user(
        password=req.password,
        role=req.role,
        name=req.name,
        email=req.email,
        student_number=req.student_number,
    )
    return RegisterResponse(id=user.id)


@router.post("/login", response_model=LoginResponse, summary="Log in")
def login(
    req: LoginRequest,
    user_manager: UserManagerDep,
    token_service: TokenServiceDep,
) -> LoginResponse:
    """Login with role, identifier and password.

    Args:
        req: Login request.
        user_manager: Injected UserManager instance.
        token_service: Injected TokenService instance.

    Returns:
        LoginResponse with the user and a signed token.

    Raises:
        InvalidCredentialsError: On unknown identifier, wrong role or wrong
            password, all reported alike.
    """
    user = user_manager.authenticate(
        role=req.role,
        password=req.password,
        email=req.email,
        student_number=req.student_number,
    )
    token = token_service.issue(claims_for_user(user))
    logger.info("User %s logged in as %s", user.id, user.role.value)
    return LoginResponse(token=token, user=UserInfo.model_validate(user.model_dump()))


@router.post("/refresh", response_model=LoginResponse, summary="Refresh a token")
def refresh(
    user_manager: UserManagerDep,
    token_service: TokenServiceDep,
    token: str = Depends(get_raw_token),
) -> LoginResponse:
    """Exchange a valid or just-expired token for a fresh one.

    Raises:
        InvalidTokenError: If the token is invalid or expired beyond the grace window.
        AccountNotFoundError: If the account was deleted.
    """
    new_token, user = token_service.refresh(token, user_manager)
    return LoginResponse(
        token=new_token, user=UserInfo.model_validate(user.model_dump())
    )


@router.get("/me", summary="Current user")
def get_current_user_info(
    identity: IdentityDep,
    user_manager: UserManagerDep,
) -> dict:
    user = user_manager.get_user_by_id(identity.id)
    if user is None:
        raise AccountNotFoundError(identity.id)
    return {"success": True, "user": UserInfo.model_validate(user.model_dump())}


@router.get("/users/lecturers", summary="List lecturers")
def list_lecturers(
    user_manager: UserManagerDep,
    identity: TokenClaims = Depends(authorize("users:lecturers")),
) -> dict:
    lecturers = user_manager.list_users(role=Role.LECTURER)
    return {
        "success": True,
        "lecturers": [UserInfo.model_validate(u.model_dump()) for u in lecturers],
    }
