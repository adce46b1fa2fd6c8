"""
Integration Tests for Monitoring and Student Self-Service Endpoints
"""
import io

import pytest
from openpyxl import load_workbook


@pytest.fixture
def reports(client, lecturer_user, other_lecturer, module, enrolled_student, headers_for):
    """Two reports on the module (1 enrolled student) and one course-level report"""
    created = []
    for present, topic in ((1, "Keys"), (0, "Joins")):
        created.append(
            client.post(
                "/api/reports",
                json={"students_present": present, "module_id": module["id"], "topic_taught": topic},
                headers=headers_for(lecturer_user),
            ).json()["report"]
        )
    created.append(
        client.post(
            "/api/reports",
            json={"students_present": 20, "course_code": "DB101"},
            headers=headers_for(other_lecturer),
        ).json()["report"]
    )
    return created


class TestProgramMonitoring:
    """Test the PL dashboard metrics"""

    def test_empty_store_returns_zeros(self, client, pl_user, headers_for):
        response = client.get("/api/monitoring/program", headers=headers_for(pl_user))

        assert response.status_code == 200
        assert response.json() == {
            "success": True,
            "avg_attendance": 0,
            "curriculum_coverage": 0,
            "student_satisfaction": 0,
            "report_completion_rate": 0,
            "lecturer_performance": {},
        }

    def test_program_metrics(
        self, client, pl_user, prl_user, lecturer_user, other_lecturer, reports, enrolled_student, headers_for
    ):
        client.put(
            f"/api/reports/{reports[0]['id']}/feedback",
            json={"prl_feedback": "Fine"},
            headers=headers_for(prl_user),
        )
        client.post(
            "/api/ratings",
            json={"report_id": reports[0]["id"], "rating": 4, "type": "student_engagement"},
            headers=headers_for(enrolled_student),
        )

        data = client.get("/api/monitoring/program", headers=headers_for(pl_user)).json()

        # ratios 1/1, 0/1, 20/40
        assert data["avg_attendance"] == pytest.approx(0.5)
        assert data["curriculum_coverage"] == 1.0
        assert data["student_satisfaction"] == pytest.approx(0.8)
        assert data["report_completion_rate"] == 1.0
        assert data["lecturer_performance"] == {
            str(lecturer_user.id): pytest.approx(50.0),
            str(other_lecturer.id): pytest.approx(50.0),
        }

    def test_program_is_pl_only(self, client, prl_user, headers_for):
        response = client.get("/api/monitoring/program", headers=headers_for(prl_user))

        assert response.status_code == 403


class TestRoleMonitoring:
    """Test attendance and lecturer dashboards"""

    def test_attendance_for_prl(self, client, prl_user, reports, headers_for):
        data = client.get("/api/monitoring/attendance", headers=headers_for(prl_user)).json()

        assert data["report_count"] == 3
        assert data["avg_attendance"] == pytest.approx(0.5)

    def test_lecturer_sees_own_metrics(
        self, client, lecturer_user, enrolled_student, reports, headers_for
    ):
        client.post(
            "/api/ratings",
            json={"report_id": reports[1]["id"], "rating": 5, "type": "student_engagement"},
            headers=headers_for(enrolled_student),
        )

        data = client.get("/api/monitoring/lecturer", headers=headers_for(lecturer_user)).json()

        assert data["report_count"] == 2
        assert data["avg_attendance"] == pytest.approx(0.5)
        assert data["student_engagement"] == pytest.approx(1.0)

    def test_lecturer_dashboard_is_lecturer_only(self, client, pl_user, headers_for):
        response = client.get("/api/monitoring/lecturer", headers=headers_for(pl_user))

        assert response.status_code == 403


class TestActivityLog:
    """Test the monitoring activity log"""

    def test_log_and_list(self, client, student_user, prl_user, headers_for):
        created = client.post(
            "/api/monitoring/logs",
            json={"action": "viewed dashboard"},
            headers=headers_for(student_user),
        )

        assert created.status_code == 200
        logs = client.get("/api/monitoring/logs", headers=headers_for(prl_user)).json()["logs"]
        assert [(log["user_id"], log["action"]) for log in logs] == [
            (student_user.id, "viewed dashboard")
        ]

    def test_blank_action_rejected(self, client, student_user, headers_for):
        response = client.post(
            "/api/monitoring/logs", json={"action": ""}, headers=headers_for(student_user)
        )

        assert response.status_code == 400

    def test_students_cannot_read_logs(self, client, student_user, headers_for):
        response = client.get("/api/monitoring/logs", headers=headers_for(student_user))

        assert response.status_code == 403


class TestStudentSelfService:
    """Test /api/students/me routes"""

    def test_attendance_rows(self, client, enrolled_student, reports, headers_for):
        data = client.get(
            "/api/students/me/attendance", headers=headers_for(enrolled_student)
        ).json()

        assert [row["report_id"] for row in data["attendance"]] == [
            reports[1]["id"],
            reports[0]["id"],
        ]
        assert data["attendance"][1]["attendance_rate"] == 1.0

    def test_progress(self, client, enrolled_student, module, reports, headers_for):
        data = client.get(
            "/api/students/me/progress", headers=headers_for(enrolled_student)
        ).json()

        assert data["progress"] == [
            {
                "module_id": module["id"],
                "module_name": "Relational Design",
                "module_code": "DB101-M1",
                "reports_delivered": 2,
                "topics_covered": 2,
                "avg_attendance": 0.5,
            }
        ]

    def test_feedback_and_export(self, client, enrolled_student, reports, headers_for):
        client.post(
            "/api/ratings",
            json={"report_id": reports[0]["id"], "rating": 3, "comment": "Too fast"},
            headers=headers_for(enrolled_student),
        )

        feedback = client.get(
            "/api/students/me/feedback", headers=headers_for(enrolled_student)
        ).json()["feedback"]
        assert [f["comments"] for f in feedback] == ["Too fast"]

        response = client.get(
            "/api/students/me/feedback/export", headers=headers_for(enrolled_student)
        )
        assert response.status_code == 200
        sheet = load_workbook(io.BytesIO(response.content)).active
        rows = list(sheet.iter_rows(values_only=True))
        assert rows[0][:2] == ("Rating ID", "Report ID")
        assert rows[1][4] == "Too fast"

    def test_staff_cannot_use_student_routes(self, client, lecturer_user, headers_for):
        response = client.get("/api/students/me/progress", headers=headers_for(lecturer_user))

        assert response.status_code == 403
