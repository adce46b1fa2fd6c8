"""User management utilities.

This module provides user storage, registration, and credential checks.
"""

import logging
from typing import List, Optional

from core.exceptions import InvalidCredentialsError, UserAlreadyExistsError
from core.security import hash_password, verify_password
from models.user import UserModel
from schemas.user import Role, User
from utils.base_manager import BaseManager
from utils.converters import model_to_user, user_to_model

logger = logging.getLogger(__name__)


class UserManager(BaseManager):
    """Manages user data persistence and operations using SQLAlchemy."""

    def create_user(
        self,
        password: str,
        role: Role,
        name: str,
        email: Optional[str] = None,
        student_number: Optional[str] = None,
    ) -> User:
        """Create a new user.

        Args:
            password: Plain text password.
            role: User role.
            name: Display name.
            email: Email address; required for staff roles.
            student_number: Student number; required for students.

        Returns:
            Created User object.

        Raises:
            UserAlreadyExistsError: If the email or student number is taken.
            PasswordTooLongError: If the password exceeds bcrypt's limit.
        """
        if email and self.get_user_by_email(email):
            raise UserAlreadyExistsError("Email already exists")
        if student_number and self.get_user_by_student_number(student_number):
            raise UserAlreadyExistsError("Student number already exists")

        user = User(
            email=email,
            student_number=student_number,
            password_hash=hash_password(password),
            role=role,
            name=name,
        )

        # Two concurrent registrations can both pass the checks above; the
        # unique constraints catch the loser.
        model = user_to_model(user)
        self.db.add(model)
        self._commit("User already exists", UserAlreadyExistsError)
        self.db.refresh(model)

        logger.info("Created %s user %s", role.value, model.id)
        return model_to_user(model)

    def authenticate(
        self,
        role: Role,
        password: str,
        email: Optional[str] = None,
        student_number: Optional[str] = None,
    ) -> User:
        """Check login credentials.

        The student number is preferred when both identifiers are given. The
        stored role must match the requested one.

        Raises:
            InvalidCredentialsError: On any mismatch.
        """
        if student_number:
            user = self.get_user_by_student_number(student_number)
        else:
            user = self.get_user_by_email(email)

        if user is None or user.role != role:
            logger.info("Login rejected: unknown %s account", role.value)
            raise InvalidCredentialsError()
        if not verify_password(password, user.password_hash):
            logger.info("Login rejected: bad password for user %s", user.id)
            raise InvalidCredentialsError()
        return user

    def get_user_by_email(self, email: Optional[str]) -> Optional[User]:
        if not email:
            return None
        model = (
            self.db.query(UserModel)
            .filter(UserModel.email == email.lower())
            .first()
        )
        if model:
            return model_to_user(model)
        return None

    def get_user_by_student_number(self, student_number: str) -> Optional[User]:
        model = (
            self.db.query(UserModel)
            .filter(UserModel.student_number == student_number)
            .first()
        )
        if model:
            return model_to_user(model)
        return None

    def get_user_by_id(self, user_id: int) -> Optional[User]:
        """Get a user by user ID.

        Args:
            user_id: User ID to look up.

        Returns:
            User object if found, None otherwise.
        """
        model = self.db.query(UserModel).filter(UserModel.id == user_id).first()
        if model:
            return model_to_user(model)
        return None

    def list_users(self, role: Optional[Role] = None) -> List[User]:
        """List users, optionally restricted to one role."""
        query = self.db.query(UserModel)
        if role is not None:
            query = query.filter(UserModel.role == role.value)
        return [model_to_user(m) for m in query.order_by(UserModel.id).all()]
