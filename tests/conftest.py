"""
Lecture Reporting API - Test Configuration and Fixtures
"""
import os

# Set testing environment before the application reads its configuration
os.environ["JWT_SECRET_KEY"] = "test-jwt-secret-key-for-testing"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app import app
from core.database import get_db
from core.dependencies import get_token_service
from core.security import TokenService, claims_for_user
from models.base import Base
from schemas.user import Role
from utils.user_manager import UserManager

TEST_SECRET = "test-jwt-secret-key-for-testing"


@pytest.fixture
def db_engine():
    """In-memory database shared across connections for one test"""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def db_session(db_engine):
    """Create a fresh database session for each test"""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    session = TestSessionLocal()
    yield session
    session.close()


@pytest.fixture
def token_service() -> TokenService:
    return TokenService(
        secret_key=TEST_SECRET,
        algorithm="HS256",
        expire_minutes=60,
        refresh_grace_minutes=5,
    )


@pytest.fixture
def client(db_engine, token_service):
    """Create test client with database and token service overrides"""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)

    def override_get_db():
        db = TestSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_token_service] = lambda: token_service

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(db_engine):
    """Factory creating users directly through the UserManager"""
    TestSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=db_engine)
    counter = {"n": 0}

    def _make(role: Role, name: str = None, password: str = "password123", **kwargs):
        counter["n"] += 1
        n = counter["n"]
        if role == Role.STUDENT:
            kwargs.setdefault("student_number", f"S{n:04d}")
        else:
            kwargs.setdefault("email", f"{role.value}{n}@example.edu")
        session = TestSessionLocal()
        try:
            return UserManager(session).create_user(
                password=password,
                role=role,
                name=name or f"{role.value.title()} {n}",
                **kwargs,
            )
        finally:
            session.close()

    return _make


@pytest.fixture
def headers_for(token_service):
    """Build an Authorization header for a user"""

    def _headers(user) -> dict:
        token = token_service.issue(claims_for_user(user))
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def pl_user(make_user):
    return make_user(Role.PL, name="Program Leader")


@pytest.fixture
def prl_user(make_user):
    return make_user(Role.PRL, name="Principal Lecturer")


@pytest.fixture
def lecturer_user(make_user):
    return make_user(Role.LECTURER, name="Lecturer A")


@pytest.fixture
def other_lecturer(make_user):
    return make_user(Role.LECTURER, name="Lecturer B")


@pytest.fixture
def student_user(make_user):
    return make_user(Role.STUDENT, name="Student One")


@pytest.fixture
def course(client, pl_user, headers_for):
    response = client.post(
        "/api/courses",
        json={
            "name": "Databases",
            "code": "DB101",
            "faculty_id": 1,
            "total_registered_students": 40,
        },
        headers=headers_for(pl_user),
    )
    assert response.status_code == 200
    return response.json()["course"]


@pytest.fixture
def module(client, pl_user, lecturer_user, course, headers_for):
    response = client.post(
        "/api/modules",
        json={
            "name": "Relational Design",
            "code": "DB101-M1",
            "description": "Normal forms and keys",
            "course_id": course["id"],
            "lecturer_id": lecturer_user.id,
        },
        headers=headers_for(pl_user),
    )
    assert response.status_code == 200
    return response.json()["module"]


@pytest.fixture
def enrolled_student(client, student_user, module, headers_for):
    client.post(f"/api/modules/{module['id']}/enroll", headers=headers_for(student_user))
    return student_user
