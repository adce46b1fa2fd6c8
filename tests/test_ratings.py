"""
Integration Tests for Rating Endpoints
"""
import pytest

from schemas.user import Role


@pytest.fixture
def report(client, lecturer_user, module, headers_for):
    response = client.post(
        "/api/reports",
        json={"students_present": 20, "module_id": module["id"], "topic_taught": "Keys"},
        headers=headers_for(lecturer_user),
    )
    return response.json()["report"]


class TestCreateRating:
    """Test rating submission"""

    def test_enrolled_student_rates_report(self, client, enrolled_student, report, headers_for):
        response = client.post(
            "/api/ratings",
            json={
                "report_id": report["id"],
                "rating": 4,
                "comment": "Clear examples",
                "type": "student_engagement",
            },
            headers=headers_for(enrolled_student),
        )

        assert response.status_code == 200
        rating = response.json()["rating"]
        assert rating["user_id"] == enrolled_student.id
        assert rating["comments"] == "Clear examples"
        assert rating["type"] == "student_engagement"

    def test_type_defaults_to_overall(self, client, prl_user, report, headers_for):
        response = client.post(
            "/api/ratings",
            json={"report_id": report["id"], "rating": 5},
            headers=headers_for(prl_user),
        )

        assert response.json()["rating"]["type"] == "overall"

    @pytest.mark.parametrize("value", [0, 6])
    def test_rating_out_of_range(self, client, enrolled_student, report, headers_for, value):
        response = client.post(
            "/api/ratings",
            json={"report_id": report["id"], "rating": value},
            headers=headers_for(enrolled_student),
        )

        assert response.status_code == 400

    def test_unknown_type_rejected(self, client, enrolled_student, report, headers_for):
        response = client.post(
            "/api/ratings",
            json={"report_id": report["id"], "rating": 3, "type": "vibes"},
            headers=headers_for(enrolled_student),
        )

        assert response.status_code == 400

    def test_missing_report_not_found(self, client, prl_user, headers_for):
        response = client.post(
            "/api/ratings",
            json={"report_id": 999, "rating": 3},
            headers=headers_for(prl_user),
        )

        assert response.status_code == 404

    def test_other_lecturers_report_not_found(
        self, client, other_lecturer, report, headers_for
    ):
        response = client.post(
            "/api/ratings",
            json={"report_id": report["id"], "rating": 1},
            headers=headers_for(other_lecturer),
        )

        assert response.status_code == 404
        assert response.json() == {
            "success": False,
            "message": f"Report '{report['id']}' not found",
        }

        listing = client.get("/api/ratings", headers=headers_for(other_lecturer)).json()
        assert listing["ratings"] == []

    def test_unenrolled_student_cannot_rate(self, client, student_user, report, headers_for):
        response = client.post(
            "/api/ratings",
            json={"report_id": report["id"], "rating": 2},
            headers=headers_for(student_user),
        )

        assert response.status_code == 404

    def test_invisible_and_missing_reports_look_alike(
        self, client, student_user, report, headers_for
    ):
        invisible = client.post(
            "/api/ratings",
            json={"report_id": report["id"], "rating": 2},
            headers=headers_for(student_user),
        )
        missing = client.post(
            "/api/ratings",
            json={"report_id": 999, "rating": 2},
            headers=headers_for(student_user),
        )

        assert invisible.status_code == missing.status_code == 404

    def test_rating_requires_token(self, client, report):
        response = client.post("/api/ratings", json={"report_id": report["id"], "rating": 3})

        assert response.status_code == 401


class TestListRatings:
    """Test rating visibility"""

    def test_lecturer_sees_ratings_on_own_reports(
        self, client, enrolled_student, lecturer_user, other_lecturer, report, headers_for
    ):
        client.post(
            "/api/ratings",
            json={"report_id": report["id"], "rating": 4},
            headers=headers_for(enrolled_student),
        )

        mine = client.get("/api/ratings", headers=headers_for(lecturer_user)).json()
        theirs = client.get("/api/ratings", headers=headers_for(other_lecturer)).json()

        assert len(mine["ratings"]) == 1
        assert theirs["ratings"] == []

    def test_student_sees_own_rating(self, client, enrolled_student, report, headers_for):
        client.post(
            "/api/ratings",
            json={"report_id": report["id"], "rating": 4},
            headers=headers_for(enrolled_student),
        )

        listing = client.get("/api/ratings", headers=headers_for(enrolled_student)).json()

        assert [r["user_id"] for r in listing["ratings"]] == [enrolled_student.id]

    def test_report_ratings_listing(
        self, client, make_user, prl_user, module, report, headers_for
    ):
        for score in (2, 5):
            rater = make_user(Role.STUDENT)
            client.post(f"/api/modules/{module['id']}/enroll", headers=headers_for(rater))
            client.post(
                "/api/ratings",
                json={"report_id": report["id"], "rating": score},
                headers=headers_for(rater),
            )

        response = client.get(
            f"/api/reports/{report['id']}/ratings", headers=headers_for(prl_user)
        )

        assert response.status_code == 200
        assert [r["rating"] for r in response.json()["ratings"]] == [5, 2]

    def test_report_ratings_hidden_with_report(
        self, client, other_lecturer, report, headers_for
    ):
        response = client.get(
            f"/api/reports/{report['id']}/ratings", headers=headers_for(other_lecturer)
        )

        assert response.status_code == 404
