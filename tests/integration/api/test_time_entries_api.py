"""
API tests for the start/stop timer and time entry management.
"""

from decimal import Decimal

from consultdesk.config import settings
from consultdesk.infrastructure.repositories.time_entry_repository import SQLAlchemyTimeEntryRepository


API = settings.api_prefix


def start(client, project_id, description="Read QC"):
    return client.post(f"{API}/time-entries", json={"project_id": project_id, "description": description})


class TestTimerApi:

    def test_start_then_stop_after_thirty_minutes(self, client, clock, create_project):
        project = create_project()

        response = start(client, project["id"], description="Genome assembly")
        assert response.status_code == 201, response.text
        entry = response.json()
        assert entry["is_running"] is True
        assert entry["start_time"] == "2024-03-15T10:00:00"
        assert entry["end_time"] is None
        assert entry["duration"] is None
        assert entry["project"]["name"] == "Genome Assembly Pipeline"

        clock.advance(minutes=30)
        response = client.post(f"{API}/time-entries/{entry['id']}/stop")

        assert response.status_code == 200, response.text
        stopped = response.json()
        assert stopped["is_running"] is False
        assert stopped["end_time"] == "2024-03-15T10:30:00"
        assert Decimal(stopped["duration"]) == Decimal("0.5")

    def test_active_timer(self, client, clock, create_project):
        project = create_project()
        assert client.get(f"{API}/time-entries/active").json() is None

        entry = start(client, project["id"]).json()
        clock.advance(minutes=1, seconds=5)

        active = client.get(f"{API}/time-entries/active").json()
        assert active["id"] == entry["id"]
        assert active["elapsed_seconds"] == 65
        assert active["elapsed_display"] == "00:01:05"

    def test_second_timer_is_conflict(self, client, create_project):
        first = create_project(name="First")
        second = create_project(name="Second")
        assert start(client, first["id"]).status_code == 201

        response = start(client, second["id"])

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"
        running = [entry for entry in client.get(f"{API}/time-entries").json() if entry["is_running"]]
        assert len(running) == 1

    def test_store_rejects_second_running_timer(self, client, create_project, monkeypatch):
        """The running-timer index holds even when the lookup misses the first timer."""
        first = create_project(name="First")
        second = create_project(name="Second")
        assert start(client, first["id"]).status_code == 201
        monkeypatch.setattr(SQLAlchemyTimeEntryRepository, "get_running_entry", lambda self, user_id: None)

        response = start(client, second["id"])

        assert response.status_code == 409
        assert response.json()["code"] == "CONFLICT"
        assert response.json()["retryable"] is False
        monkeypatch.undo()
        running = [entry for entry in client.get(f"{API}/time-entries").json() if entry["is_running"]]
        assert len(running) == 1
        assert running[0]["project_id"] == first["id"]

    def test_can_start_again_after_stop(self, client, clock, create_project):
        project = create_project()
        entry = start(client, project["id"]).json()
        clock.advance(minutes=5)
        client.post(f"{API}/time-entries/{entry['id']}/stop")

        assert start(client, project["id"], description="Second session").status_code == 201

    def test_stop_twice_is_conflict(self, client, clock, create_project):
        project = create_project()
        entry = start(client, project["id"]).json()
        clock.advance(minutes=10)
        first = client.post(f"{API}/time-entries/{entry['id']}/stop").json()

        clock.advance(minutes=10)
        response = client.post(f"{API}/time-entries/{entry['id']}/stop")

        assert response.status_code == 409
        assert response.json()["retryable"] is False
        entries = client.get(f"{API}/time-entries").json()
        assert entries[0]["end_time"] == first["end_time"]

    def test_inactive_project_rejected(self, client, create_project):
        project = create_project(status="on-hold")

        response = start(client, project["id"])

        assert response.status_code == 400
        assert response.json()["code"] == "BUSINESS_RULE_VIOLATION"

    def test_unknown_project(self, client):
        assert start(client, "missing").status_code == 404

    def test_blank_description_rejected(self, client, create_project):
        project = create_project()
        response = start(client, project["id"], description="   ")
        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"


class TestTimeEntriesApi:

    def test_list_newest_first(self, client, clock, create_project, log_time):
        project = create_project()
        log_time(project["id"], minutes=20, description="Earlier")
        clock.advance(hours=1)
        log_time(project["id"], minutes=20, description="Later")

        entries = client.get(f"{API}/time-entries").json()

        assert [entry["description"] for entry in entries] == ["Later", "Earlier"]

    def test_update_description(self, client, create_project, log_time):
        project = create_project()
        entry = log_time(project["id"], minutes=45)

        response = client.put(
            f"{API}/time-entries/{entry['id']}",
            json={"description": "Variant calling", "software_used": ["GATK", "GATK"]}
        )

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["description"] == "Variant calling"
        assert body["software_used"] == ["GATK"]
        assert Decimal(body["duration"]) == Decimal("0.75")

    def test_timing_fields_not_editable(self, client, create_project, log_time):
        project = create_project()
        entry = log_time(project["id"], minutes=45)

        response = client.put(f"{API}/time-entries/{entry['id']}", json={"duration": "8"})

        assert response.status_code == 400

    def test_delete_running_entry(self, client, create_project):
        project = create_project()
        entry = start(client, project["id"]).json()

        assert client.delete(f"{API}/time-entries/{entry['id']}").status_code == 204
        assert client.get(f"{API}/time-entries/active").json() is None

    def test_delete_invoiced_entry_is_conflict(self, client, create_project, log_time):
        project = create_project()
        entry = log_time(project["id"], minutes=60)
        created = client.post(
            f"{API}/invoices",
            json={"project_id": project["id"], "from_date": "2024-03-15", "to_date": "2024-03-15"}
        )
        assert created.status_code == 201, created.text

        response = client.delete(f"{API}/time-entries/{entry['id']}")

        assert response.status_code == 409
        assert len(client.get(f"{API}/time-entries").json()) == 1

    def test_missing_entry(self, client):
        assert client.post(f"{API}/time-entries/nope/stop").status_code == 404
        assert client.delete(f"{API}/time-entries/nope").status_code == 404
