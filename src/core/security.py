"""Password hashing and identity token handling.

Passwords are hashed with bcrypt. Identity tokens are HS256 JWTs signed with
a server-held secret; they are never persisted, so expiry is the only way a
token stops being valid.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Dict, Optional, Tuple

import bcrypt
import pytz
from jose import ExpiredSignatureError, JWTError, jwt
from pydantic import ValidationError as PydanticValidationError

from config import BCRYPT_ROUNDS
from core.exceptions import (
    AccountNotFoundError,
    InvalidTokenError,
    PasswordTooLongError,
)
from schemas.user import TokenClaims, User

logger = logging.getLogger(__name__)

# bcrypt ignores everything past this many bytes
BCRYPT_MAX_PASSWORD_BYTES = 72


def hash_password(password: str, rounds: int = BCRYPT_ROUNDS) -> str:
    """Hash a password using bcrypt.

    Args:
        password: Plain text password.
        rounds: Bcrypt work factor.

    Returns:
        Hashed password (bcrypt hash string).

    Raises:
        PasswordTooLongError: If the password is longer than 72 bytes.
    """
    password_bytes = password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        raise PasswordTooLongError()

    salt = bcrypt.gensalt(rounds=rounds)
    return bcrypt.hashpw(password_bytes, salt).decode("utf-8")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a bcrypt hash.

    Args:
        plain_password: Plain text password to verify.
        hashed_password: Bcrypt hash string to verify against.

    Returns:
        True if password matches, False otherwise.
    """
    password_bytes = plain_password.encode("utf-8")
    if len(password_bytes) > BCRYPT_MAX_PASSWORD_BYTES:
        return False

    try:
        return bcrypt.checkpw(password_bytes, hashed_password.encode("utf-8"))
    except ValueError as e:
        logger.error("Password verification error: %s", e)
        return False


def claims_for_user(user: User) -> Dict[str, Any]:
    """Build the identity claims carried by a user's token."""
    return {
        "id": user.id,
        "role": user.role.value,
        "name": user.name,
        "email": user.email,
        "student_number": user.student_number,
    }


class TokenService:
    """Issues, verifies, and refreshes signed identity tokens."""

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        expire_minutes: int = 60,
        refresh_grace_minutes: int = 5,
    ):
        """Initialize TokenService.

        Args:
            secret_key: Shared signing secret.
            algorithm: JWT signing algorithm.
            expire_minutes: Lifetime of newly issued tokens.
            refresh_grace_minutes: How long past expiry a token may still be
                exchanged for a new one.
        """
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes
        self.refresh_grace_minutes = refresh_grace_minutes

    def issue(self, claims: Dict[str, Any], ttl: Optional[timedelta] = None) -> str:
        """Create a signed token.

        Args:
            claims: Identity claims; must contain ``id``.
            ttl: Optional lifetime, defaults to ``expire_minutes``.

        Returns:
            Encoded JWT string.
        """
        to_encode = claims.copy()
        if ttl is None:
            ttl = timedelta(minutes=self.expire_minutes)
        expire = datetime.now(pytz.utc) + ttl
        to_encode.update({"sub": str(claims["id"]), "exp": expire})
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> TokenClaims:
        """Verify a token's signature and expiry.

        Args:
            token: Encoded JWT string.

        Returns:
            Decoded claims.

        Raises:
            InvalidTokenError: If the token is expired, tampered with, or
                its payload is malformed.
        """
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise InvalidTokenError("Token has expired")
        except JWTError:
            raise InvalidTokenError()
        return self._to_claims(payload)

    def refresh(self, token: str, user_manager) -> Tuple[str, User]:
        """Exchange a token for a new one with a full lifetime.

        The signature must verify. A token that expired no more than
        ``refresh_grace_minutes`` ago is accepted. The user row is re-read so
        renamed accounts get fresh claims and deleted accounts are refused.

        Args:
            token: Encoded JWT string.
            user_manager: UserManager used to re-read the account.

        Returns:
            Tuple of (new token, current user).

        Raises:
            InvalidTokenError: If the token is invalid or too old.
            AccountNotFoundError: If the account no longer exists.
        """
        try:
            payload = jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"verify_exp": False},
            )
        except JWTError:
            raise InvalidTokenError()

        claims = self._to_claims(payload)
        if claims.exp is None:
            raise InvalidTokenError()
        expired_for = datetime.now(pytz.utc).timestamp() - claims.exp
        if expired_for > self.refresh_grace_minutes * 60:
            raise InvalidTokenError("Token has expired")

        user = user_manager.get_user_by_id(claims.id)
        if user is None:
            raise AccountNotFoundError(claims.id)

        logger.info("Refreshed token for user %s", user.id)
        return self.issue(claims_for_user(user)), user

    @staticmethod
    def _to_claims(payload: Dict[str, Any]) -> TokenClaims:
        try:
            return TokenClaims.model_validate(payload)
        except PydanticValidationError:
            raise InvalidTokenError()
