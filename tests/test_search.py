"""
Integration Tests for Keyword Search
"""


class TestSearch:
    """Test /api/search/{target}"""

    def test_search_courses_by_code(self, client, prl_user, course, headers_for):
        response = client.get(
            "/api/search/courses", params={"query": "db1"}, headers=headers_for(prl_user)
        )

        assert response.status_code == 200
        assert [c["code"] for c in response.json()["results"]] == ["DB101"]

    def test_search_modules_by_name(self, client, prl_user, module, headers_for):
        response = client.get(
            "/api/search/modules",
            params={"query": "relational"},
            headers=headers_for(prl_user),
        )

        assert [m["id"] for m in response.json()["results"]] == [module["id"]]

    def test_search_modules_scoped_for_students(
        self, client, student_user, module, headers_for
    ):
        response = client.get(
            "/api/search/modules",
            params={"query": "relational"},
            headers=headers_for(student_user),
        )

        assert response.json()["results"] == []

    def test_search_classes(self, client, pl_user, module, headers_for):
        client.post(
            "/api/classes",
            json={"name": "Evening Group", "module_id": module["id"]},
            headers=headers_for(pl_user),
        )

        response = client.get(
            "/api/search/classes", params={"query": "evening"}, headers=headers_for(pl_user)
        )

        assert [c["name"] for c in response.json()["results"]] == ["Evening Group"]

    def test_search_no_match(self, client, prl_user, course, headers_for):
        response = client.get(
            "/api/search/courses", params={"query": "zzz"}, headers=headers_for(prl_user)
        )

        assert response.json()["results"] == []

    def test_unknown_target(self, client, prl_user, headers_for):
        response = client.get(
            "/api/search/users", params={"query": "a"}, headers=headers_for(prl_user)
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid search type: users"

    def test_empty_query(self, client, prl_user, headers_for):
        response = client.get("/api/search/courses", headers=headers_for(prl_user))

        assert response.status_code == 400
