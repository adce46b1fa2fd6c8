"""Request authentication and role authorization.

Every protected route depends on ``get_identity`` (any authenticated role)
or on ``authorize(permission)``, which additionally checks the caller's role
against ``ROUTE_PERMISSIONS``. Each request is verified independently; no
session state is kept.
"""

import logging
from typing import Annotated, Callable, Dict, FrozenSet, Optional

from fastapi import Depends, Header, Request
from fastapi.security.utils import get_authorization_scheme_param

from core.dependencies import TokenServiceDep
from core.exceptions import ForbiddenError, MalformedHeaderError, MissingTokenError
from schemas.user import Role, TokenClaims

logger = logging.getLogger(__name__)

ROUTE_PERMISSIONS: Dict[str, FrozenSet[Role]] = {
    "courses:create": frozenset({Role.PL}),
    "modules:create": frozenset({Role.PL}),
    "modules:assign": frozenset({Role.PL}),
    "modules:enroll": frozenset({Role.STUDENT, Role.PL}),
    "modules:own": frozenset({Role.LECTURER}),
    "classes:create": frozenset({Role.LECTURER, Role.PRL, Role.PL}),
    "reports:create": frozenset({Role.LECTURER}),
    "reports:feedback": frozenset({Role.PRL}),
    "reports:export": frozenset({Role.PL, Role.PRL}),
    "monitoring:program": frozenset({Role.PL}),
    "monitoring:attendance": frozenset({Role.PRL, Role.PL}),
    "monitoring:lecturer": frozenset({Role.LECTURER}),
    "monitoring:logs": frozenset({Role.PL, Role.PRL}),
    "users:lecturers": frozenset({Role.PL, Role.PRL}),
    "students:self": frozenset({Role.STUDENT}),
}


def extract_bearer_token(authorization: Optional[str]) -> str:
    """Pull the token out of an ``Authorization`` header value.

    Raises:
        MissingTokenError: If the header is absent or empty.
        MalformedHeaderError: If it is not ``Bearer <token>``.
    """
    if not authorization or not authorization.strip():
        raise MissingTokenError()
    scheme, token = get_authorization_scheme_param(authorization)
    if scheme.lower() != "bearer" or not token or " " in token.strip():
        raise MalformedHeaderError()
    return token.strip()


def get_raw_token(
    authorization: Annotated[Optional[str], Header()] = None,
) -> str:
    return extract_bearer_token(authorization)


def get_identity(
    request: Request,
    token_service: TokenServiceDep,
    token: str = Depends(get_raw_token),
) -> TokenClaims:
    """Verify the bearer token and attach its claims to the request.

    Raises:
        MissingTokenError: No token (401).
        MalformedHeaderError: Header is not a bearer token (401).
        InvalidTokenError: Bad signature, payload, or expiry (403).
    """
    claims = token_service.verify(token)
    request.state.identity = claims
    return claims


def authorize(permission: str) -> Callable[..., TokenClaims]:
    """Build a dependency allowing only the roles listed for ``permission``.

    Args:
        permission: Key of ``ROUTE_PERMISSIONS``.

    Returns:
        A FastAPI dependency returning the caller's claims.
    """
    allowed = ROUTE_PERMISSIONS[permission]

    def dependency(identity: TokenClaims = Depends(get_identity)) -> TokenClaims:
        if identity.role not in allowed:
            logger.info(
                "User %s (%s) denied %s", identity.id, identity.role.value, permission
            )
            raise ForbiddenError()
        return identity

    return dependency


IdentityDep = Annotated[TokenClaims, Depends(get_identity)]
