"""Conversions between database models and schema objects."""

from models.user import UserModel
from schemas.user import User


def user_to_model(user: User) -> UserModel:
    return UserModel(
        id=user.id,
        email=user.email,
        student_number=user.student_number,
        password_hash=user.password_hash,
        role=user.role.value,
        name=user.name,
        created_at=user.created_at,
    )


def model_to_user(model: UserModel) -> User:
    return User(
        id=model.id,
        email=model.email,
        student_number=model.student_number,
        password_hash=model.password_hash,
        role=model.role,
        name=model.name,
        created_at=model.created_at,
    )
