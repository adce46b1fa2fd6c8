"""
Integration Tests for Authentication Endpoints
Tests for: /api/register, /api/login, /api/refresh, /api/me, bearer token gateway
"""
from datetime import timedelta

from core.security import TokenService, claims_for_user
from schemas.user import Role


class TestRegister:
    """Test user registration endpoint"""

    def test_register_student(self, client):
        response = client.post(
            "/api/register",
            json={
                "student_number": "S100",
                "password": "pw123456",
                "role": "student",
                "name": "Student Hundred",
            },
        )

        assert response.status_code == 201
        data = response.json()
        assert data["success"] is True
        assert isinstance(data["id"], int)

    def test_register_lecturer_with_email(self, client):
        response = client.post(
            "/api/register",
            json={
                "email": "Lecturer@Example.edu",
                "password": "pw123456",
                "role": "lecturer",
                "name": "Lecturer A",
            },
        )

        assert response.status_code == 201

    def test_register_duplicate_student_number(self, client):
        body = {
            "student_number": "S100",
            "password": "pw123456",
            "role": "student",
            "name": "Student Hundred",
        }
        client.post("/api/register", json=body)

        response = client.post("/api/register", json={**body, "name": "Someone Else"})

        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_register_duplicate_email_case_insensitive(self, client):
        body = {
            "email": "pl@example.edu",
            "password": "pw123456",
            "role": "pl",
            "name": "Leader",
        }
        client.post("/api/register", json=body)

        response = client.post("/api/register", json={**body, "email": "PL@example.edu"})

        assert response.status_code == 400

    def test_register_student_without_student_number(self, client):
        response = client.post(
            "/api/register",
            json={"password": "pw123456", "role": "student", "name": "No Number"},
        )

        assert response.status_code == 400
        assert response.json() == {
            "success": False,
            "message": "Student number is required for students",
        }

    def test_register_staff_without_email(self, client):
        response = client.post(
            "/api/register",
            json={"password": "pw123456", "role": "prl", "name": "No Email"},
        )

        assert response.status_code == 400

    def test_register_unknown_role(self, client):
        response = client.post(
            "/api/register",
            json={
                "email": "dean@example.edu",
                "password": "pw123456",
                "role": "dean",
                "name": "Dean",
            },
        )

        assert response.status_code == 400

    def test_register_password_too_long(self, client):
        response = client.post(
            "/api/register",
            json={
                "email": "long@example.edu",
                "password": "x" * 80,
                "role": "lecturer",
                "name": "Long Password",
            },
        )

        assert response.status_code == 400
        assert "72 bytes" in response.json()["message"]


class TestLogin:
    """Test user login endpoint"""

    def _register_student(self, client):
        client.post(
            "/api/register",
            json={
                "student_number": "S100",
                "password": "pw123456",
                "role": "student",
                "name": "Student Hundred",
            },
        )

    def test_login_student_returns_token(self, client, token_service):
        self._register_student(client)

        response = client.post(
            "/api/login",
            json={"student_number": "S100", "password": "pw123456", "role": "student"},
        )

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["user"]["student_number"] == "S100"
        assert data["user"]["role"] == "student"
        assert "password_hash" not in data["user"]

        claims = token_service.verify(data["token"])
        assert claims.role == Role.STUDENT
        assert claims.student_number == "S100"

    def test_login_wrong_password(self, client):
        self._register_student(client)

        response = client.post(
            "/api/login",
            json={"student_number": "S100", "password": "wrong", "role": "student"},
        )

        assert response.status_code == 401
        assert response.json()["success"] is False

    def test_login_unknown_user_looks_like_wrong_password(self, client):
        self._register_student(client)
        wrong_password = client.post(
            "/api/login",
            json={"student_number": "S100", "password": "wrong", "role": "student"},
        )

        unknown = client.post(
            "/api/login",
            json={"student_number": "S999", "password": "pw123456", "role": "student"},
        )

        assert unknown.status_code == 401
        assert unknown.json() == wrong_password.json()

    def test_login_role_mismatch(self, client):
        self._register_student(client)

        response = client.post(
            "/api/login",
            json={"student_number": "S100", "password": "pw123456", "role": "lecturer"},
        )

        assert response.status_code == 401

    def test_login_role_is_case_insensitive(self, client, make_user):
        user = make_user(Role.PRL, email="prl@example.edu")

        response = client.post(
            "/api/login",
            json={"email": "PRL@example.edu", "password": "password123", "role": "PRL"},
        )

        assert response.status_code == 200
        assert response.json()["user"]["id"] == user.id

    def test_login_without_identifier(self, client):
        response = client.post("/api/login", json={"password": "pw", "role": "pl"})

        assert response.status_code == 400


class TestTokenGateway:
    """Test bearer token handling on protected routes"""

    def test_missing_token(self, client):
        response = client.get("/api/reports")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "No token provided"}

    def test_malformed_header(self, client, student_user, token_service):
        token = token_service.issue(claims_for_user(student_user))

        response = client.get("/api/reports", headers={"Authorization": f"Token {token}"})

        assert response.status_code == 401

    def test_invalid_token(self, client):
        response = client.get(
            "/api/reports", headers={"Authorization": "Bearer not-a-real-token"}
        )

        assert response.status_code == 403
        assert response.json()["success"] is False

    def test_token_signed_with_other_secret(self, client, student_user):
        token = TokenService(secret_key="someone-else").issue(claims_for_user(student_user))

        response = client.get("/api/reports", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_expired_token(self, client, student_user, token_service):
        token = token_service.issue(
            claims_for_user(student_user), ttl=timedelta(seconds=-1)
        )

        response = client.get("/api/reports", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 403

    def test_role_not_permitted(self, client, student_user, headers_for):
        response = client.post(
            "/api/courses",
            json={"name": "X", "code": "X1", "faculty_id": 1},
            headers=headers_for(student_user),
        )

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Access denied"}

    def test_public_routes_need_no_token(self, client):
        assert client.get("/api/health").json() == {"status": "ok"}
        assert client.get("/").status_code == 200


class TestCurrentUser:
    """Test /api/me, /api/refresh and /api/users/lecturers"""

    def test_me_returns_caller(self, client, lecturer_user, headers_for):
        response = client.get("/api/me", headers=headers_for(lecturer_user))

        assert response.status_code == 200
        assert response.json()["user"]["name"] == "Lecturer A"

    def test_refresh_issues_new_token(self, client, lecturer_user, token_service):
        old = token_service.issue(
            claims_for_user(lecturer_user), ttl=timedelta(minutes=-1)
        )

        response = client.post("/api/refresh", headers={"Authorization": f"Bearer {old}"})

        assert response.status_code == 200
        new_token = response.json()["token"]
        assert token_service.verify(new_token).id == lecturer_user.id

    def test_refresh_rejects_stale_token(self, client, lecturer_user, token_service):
        old = token_service.issue(
            claims_for_user(lecturer_user), ttl=timedelta(minutes=-30)
        )

        response = client.post("/api/refresh", headers={"Authorization": f"Bearer {old}"})

        assert response.status_code == 403

    def test_refresh_without_token(self, client):
        assert client.post("/api/refresh").status_code == 401

    def test_list_lecturers(self, client, prl_user, lecturer_user, other_lecturer, headers_for):
        response = client.get("/api/users/lecturers", headers=headers_for(prl_user))

        assert response.status_code == 200
        names = [u["name"] for u in response.json()["lecturers"]]
        assert names == ["Lecturer A", "Lecturer B"]

    def test_list_lecturers_forbidden_for_students(self, client, student_user, headers_for):
        response = client.get("/api/users/lecturers", headers=headers_for(student_user))

        assert response.status_code == 403
