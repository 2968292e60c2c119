"""
API tests for the dashboard metrics and the report summary.
"""

from datetime import datetime
from decimal import Decimal

from consultdesk.config import settings
from consultdesk.infrastructure.auth.dependencies import get_current_user_id


API = settings.api_prefix


class TestDashboardApi:

    def test_empty_dashboard(self, client):
        response = client.get(f"{API}/dashboard/metrics")

        assert response.status_code == 200
        body = response.json()
        assert body["active_projects"] == 0
        assert Decimal(body["hours_this_month"]) == Decimal("0")
        assert Decimal(body["pending_invoices_amount"]) == Decimal("0")
        assert body["students_assigned"] == 0

    def test_metrics(self, client, clock, create_project, create_student, log_time):
        active = create_project(name="Active")
        create_project(name="Paused", status="on-hold")
        second_active = create_project(name="Also active")

        student = create_student()
        other_student = create_student(email="sam.okafor@example.com", name="Sam Okafor")
        for project in (active, second_active):
            client.post(f"{API}/projects/{project['id']}/students", json={"student_id": student["id"]})
        client.post(f"{API}/projects/{active['id']}/students", json={"student_id": other_student["id"]})

        log_time(active["id"], minutes=90, start=datetime(2024, 2, 20, 9, 0))
        log_time(active["id"], minutes=30, start=datetime(2024, 3, 2, 9, 0))
        log_time(second_active["id"], minutes=45, start=datetime(2024, 3, 10, 9, 0))

        invoice = client.post(
            f"{API}/invoices",
            json={"project_id": active["id"], "from_date": "2024-02-01", "to_date": "2024-02-29"}
        ).json()
        client.put(f"{API}/invoices/{invoice['id']}", json={"status": "sent"})
        # A draft does not count as pending
        client.post(
            f"{API}/invoices",
            json={"project_id": second_active["id"], "from_date": "2024-03-01", "to_date": "2024-03-31"}
        )

        clock.set(datetime(2024, 3, 20, 12, 0))
        body = client.get(f"{API}/dashboard/metrics").json()

        assert body["active_projects"] == 2
        assert Decimal(body["hours_this_month"]) == Decimal("1.25")
        assert Decimal(body["pending_invoices_amount"]) == Decimal("150.00")
        assert body["students_assigned"] == 2


class TestReportSummaryApi:

    def test_summary(self, client, create_project, log_time):
        first = create_project(name="First", software_tools=["Python", "R"])
        second = create_project(name="Second")
        create_project(name="Done", status="completed", software_tools=[])

        log_time(first["id"], minutes=60, start=datetime(2024, 3, 4, 9, 0))
        log_time(second["id"], minutes=120, start=datetime(2024, 3, 5, 9, 0))
        log_time(second["id"], minutes=30, start=datetime(2024, 3, 6, 9, 0))

        paid = client.post(
            f"{API}/invoices",
            json={"project_id": first["id"], "from_date": "2024-03-01", "to_date": "2024-03-31"}
        ).json()
        client.put(f"{API}/invoices/{paid['id']}", json={"status": "sent"})
        client.put(f"{API}/invoices/{paid['id']}", json={"status": "paid"})

        cancelled = client.post(
            f"{API}/invoices",
            json={"project_id": second["id"], "from_date": "2024-03-05", "to_date": "2024-03-05"}
        ).json()
        client.put(f"{API}/invoices/{cancelled['id']}", json={"status": "cancelled"})

        client.post(
            f"{API}/invoices",
            json={"project_id": second["id"], "from_date": "2024-03-06", "to_date": "2024-03-06"}
        )

        response = client.get(f"{API}/reports/summary")

        assert response.status_code == 200
        body = response.json()
        assert body["total_projects"] == 3
        assert Decimal(body["total_hours"]) == Decimal("3.5")
        assert Decimal(body["total_revenue"]) == Decimal("150.00")
        assert Decimal(body["paid_revenue"]) == Decimal("100.00")
        assert Decimal(body["pending_revenue"]) == Decimal("0")
        assert body["projects_by_status"] == {
            "active": 2,
            "on-hold": 0,
            "completed": 1,
            "cancelled": 0,
        }
        assert body["software_usage"] == {"Python": 2, "R": 1, "Nextflow": 1}

    def test_scoped_to_user(self, app, client, create_project):
        create_project()
        app.dependency_overrides[get_current_user_id] = lambda: "user-2"

        body = client.get(f"{API}/reports/summary").json()

        assert body["total_projects"] == 0
