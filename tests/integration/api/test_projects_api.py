"""
API tests for projects, their students and their time entries.
"""

from datetime import datetime
from decimal import Decimal

from consultdesk.config import settings
from consultdesk.infrastructure.auth.dependencies import get_current_user_id


API = settings.api_prefix


class TestProjectsApi:

    def test_create_and_get(self, client, create_project):
        project = create_project(description="  Assembly of short reads  ")

        assert project["status"] == "active"
        assert project["user_id"] == "user-1"
        assert project["description"] == "Assembly of short reads"
        assert Decimal(project["hourly_rate"]) == Decimal("100")
        assert project["software_tools"] == ["Python", "Nextflow"]

        response = client.get(f"{API}/projects/{project['id']}")
        assert response.status_code == 200
        assert response.json()["name"] == "Genome Assembly Pipeline"

    def test_list(self, client, create_project):
        create_project(name="First")
        create_project(name="Second")

        response = client.get(f"{API}/projects")

        assert response.status_code == 200
        assert {project["name"] for project in response.json()} == {"First", "Second"}

    def test_update_fields_and_status(self, client, create_project):
        project = create_project()

        response = client.put(
            f"{API}/projects/{project['id']}",
            json={"hourly_rate": "120.00", "status": "on-hold", "deadline": "2024-06-30"}
        )

        assert response.status_code == 200, response.text
        body = response.json()
        assert Decimal(body["hourly_rate"]) == Decimal("120")
        assert body["status"] == "on-hold"
        assert body["deadline"] == "2024-06-30"

    def test_illegal_status_transition(self, client, create_project):
        project = create_project(status="cancelled")

        response = client.put(f"{API}/projects/{project['id']}", json={"status": "active"})

        assert response.status_code == 400
        assert response.json()["code"] == "BUSINESS_RULE_VIOLATION"

    def test_negative_rate_rejected(self, client):
        response = client.post(
            f"{API}/projects",
            json={"name": "Bad", "client_name": "Lab", "hourly_rate": "-5"}
        )
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_deadline_before_start_rejected(self, client):
        response = client.post(
            f"{API}/projects",
            json={
                "name": "Bad dates",
                "client_name": "Lab",
                "hourly_rate": "50",
                "start_date": "2024-05-01",
                "deadline": "2024-04-01",
            }
        )
        assert response.status_code == 400

    def test_missing_project(self, client):
        response = client.get(f"{API}/projects/does-not-exist")

        assert response.status_code == 404
        assert response.json() == {
            "error": "Not Found",
            "code": "ENTITY_NOT_FOUND",
            "message": "Project with id does-not-exist not found",
        }

    def test_delete_removes_entries_and_assignments(self, client, create_project, create_student, log_time):
        project = create_project()
        student = create_student()
        client.post(f"{API}/projects/{project['id']}/students", json={"student_id": student["id"]})
        log_time(project["id"], minutes=30)

        response = client.delete(f"{API}/projects/{project['id']}")

        assert response.status_code == 204
        assert client.get(f"{API}/projects/{project['id']}").status_code == 404
        assert client.get(f"{API}/time-entries").json() == []
        # The student itself survives
        assert client.get(f"{API}/students/{student['id']}").status_code == 200

    def test_delete_with_invoice_is_conflict(self, client, create_project, log_time):
        project = create_project()
        log_time(project["id"], minutes=60, start=datetime(2024, 3, 4, 9, 0))
        created = client.post(
            f"{API}/invoices",
            json={"project_id": project["id"], "from_date": "2024-03-01", "to_date": "2024-03-31"}
        )
        assert created.status_code == 201, created.text

        response = client.delete(f"{API}/projects/{project['id']}")

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"
        assert client.get(f"{API}/projects/{project['id']}").status_code == 200

    def test_other_user_cannot_see_project(self, app, client, create_project):
        project = create_project()
        app.dependency_overrides[get_current_user_id] = lambda: "user-2"

        assert client.get(f"{API}/projects/{project['id']}").status_code == 404
        assert client.get(f"{API}/projects").json() == []
        assert client.put(f"{API}/projects/{project['id']}", json={"name": "Mine now"}).status_code == 404
        assert client.delete(f"{API}/projects/{project['id']}").status_code == 404


class TestProjectStudentsApi:

    def test_assign_list_remove(self, client, create_project, create_student):
        project = create_project()
        student = create_student()

        response = client.post(
            f"{API}/projects/{project['id']}/students",
            json={"student_id": student["id"], "role": "Research assistant"}
        )
        assert response.status_code == 201, response.text
        assert response.json()["role"] == "Research assistant"

        listed = client.get(f"{API}/projects/{project['id']}/students").json()
        assert [assignment["student_id"] for assignment in listed] == [student["id"]]
        assert listed[0]["student"]["email"] == "alex.rivera@example.com"

        response = client.delete(f"{API}/projects/{project['id']}/students/{student['id']}")
        assert response.status_code == 204
        assert client.get(f"{API}/projects/{project['id']}/students").json() == []

    def test_duplicate_assignment_is_conflict(self, client, create_project, create_student):
        project = create_project()
        student = create_student()
        url = f"{API}/projects/{project['id']}/students"

        assert client.post(url, json={"student_id": student["id"]}).status_code == 201
        response = client.post(url, json={"student_id": student["id"]})

        assert response.status_code == 409
        assert len(client.get(url).json()) == 1

    def test_assign_unknown_student(self, client, create_project):
        project = create_project()
        response = client.post(f"{API}/projects/{project['id']}/students", json={"student_id": "missing"})
        assert response.status_code == 404

    def test_remove_missing_assignment(self, client, create_project, create_student):
        project = create_project()
        student = create_student()
        response = client.delete(f"{API}/projects/{project['id']}/students/{student['id']}")
        assert response.status_code == 404


class TestProjectTimeEntriesApi:

    def test_lists_only_that_project(self, client, create_project, log_time):
        first = create_project(name="First")
        second = create_project(name="Second")
        log_time(first["id"], minutes=15, description="On first")
        log_time(second["id"], minutes=15, description="On second")

        response = client.get(f"{API}/projects/{first['id']}/time-entries")

        assert response.status_code == 200
        assert [entry["description"] for entry in response.json()] == ["On first"]
