"""
API tests for invoice generation, updates and documents.
"""

from datetime import datetime
from decimal import Decimal
from unittest.mock import Mock

import pytest

from consultdesk.config import settings
from consultdesk.domain.models.invoice import InvoiceItem
from consultdesk.domain.services.numbering_service import NumberingService
from consultdesk.infrastructure.mappers.invoice_mapper import InvoiceMapper
from consultdesk.infrastructure.pdf.pdf_service import pdf_service
from consultdesk.infrastructure.web.dependencies import get_numbering_service


API = settings.api_prefix


def invoice_request(project_id, **overrides):
    payload = {"project_id": project_id, "from_date": "2024-03-01", "to_date": "2024-03-31"}
    payload.update(overrides)
    return payload


@pytest.fixture
def billed_project(create_project, log_time):
    """A project at 100/h with 2h and 1.5h logged in March."""
    project = create_project()
    first = log_time(project["id"], minutes=120, start=datetime(2024, 3, 4, 9, 0), description="Read QC")
    second = log_time(project["id"], minutes=90, start=datetime(2024, 3, 5, 14, 0), description="Assembly")
    return project, [first, second]


class TestCreateInvoiceApi:

    def test_thirty_minutes_at_project_rate(self, client, clock, create_project, log_time):
        project = create_project(hourly_rate="85.00")
        log_time(project["id"], minutes=30)

        response = client.post(
            f"{API}/invoices",
            json=invoice_request(project["id"], from_date="2024-03-15", to_date="2024-03-15")
        )

        assert response.status_code == 201, response.text
        invoice = response.json()
        assert Decimal(invoice["subtotal"]) == Decimal("42.50")
        assert Decimal(invoice["total"]) == Decimal("42.50")
        assert len(invoice["items"]) == 1
        assert Decimal(invoice["items"][0]["hours"]) == Decimal("0.5")
        assert Decimal(invoice["items"][0]["amount"]) == Decimal("42.50")

    def test_totals_with_tax(self, client, clock, billed_project):
        project, entries = billed_project
        clock.set(datetime(2024, 4, 2, 9, 0))

        response = client.post(f"{API}/invoices", json=invoice_request(project["id"], tax_rate="8.5"))

        assert response.status_code == 201, response.text
        invoice = response.json()
        assert invoice["invoice_number"].startswith("INV-20240402-")
        assert invoice["status"] == "draft"
        assert invoice["client_name"] == "Biology Department"
        assert Decimal(invoice["subtotal"]) == Decimal("350.00")
        assert Decimal(invoice["tax_amount"]) == Decimal("29.75")
        assert Decimal(invoice["total"]) == Decimal("379.75")
        assert [item["time_entry_id"] for item in invoice["items"]] == [entry["id"] for entry in entries]
        assert [item["description"] for item in invoice["items"]] == ["Read QC", "Assembly"]

    def test_period_days_are_inclusive(self, client, create_project, log_time):
        project = create_project()
        log_time(project["id"], minutes=60, start=datetime(2024, 3, 1, 0, 0), description="First day")
        log_time(project["id"], minutes=30, start=datetime(2024, 3, 31, 23, 0), description="Last day")
        log_time(project["id"], minutes=60, start=datetime(2024, 4, 1, 1, 0), description="Next month")
        log_time(project["id"], minutes=60, start=datetime(2024, 2, 29, 12, 0), description="Last month")

        response = client.post(f"{API}/invoices", json=invoice_request(project["id"]))

        assert response.status_code == 201, response.text
        assert [item["description"] for item in response.json()["items"]] == ["First day", "Last day"]
        assert Decimal(response.json()["subtotal"]) == Decimal("150.00")

    def test_running_entry_not_billed(self, client, create_project, log_time):
        project = create_project()
        log_time(project["id"], minutes=60)
        client.post(f"{API}/time-entries", json={"project_id": project["id"], "description": "Still running"})

        response = client.post(f"{API}/invoices", json=invoice_request(project["id"]))

        assert response.status_code == 201, response.text
        assert len(response.json()["items"]) == 1

    def test_no_billable_hours(self, client, create_project):
        project = create_project()

        response = client.post(f"{API}/invoices", json=invoice_request(project["id"]))

        assert response.status_code == 400
        assert response.json()["code"] == "BUSINESS_RULE_VIOLATION"
        assert client.get(f"{API}/invoices").json() == []

    def test_entries_are_billed_once(self, client, billed_project):
        project, _ = billed_project
        assert client.post(f"{API}/invoices", json=invoice_request(project["id"])).status_code == 201

        response = client.post(f"{API}/invoices", json=invoice_request(project["id"]))

        assert response.status_code == 400
        assert len(client.get(f"{API}/invoices").json()) == 1

    def test_cancelled_invoice_releases_entries(self, client, billed_project):
        project, _ = billed_project
        invoice = client.post(f"{API}/invoices", json=invoice_request(project["id"])).json()
        client.put(f"{API}/invoices/{invoice['id']}", json={"status": "cancelled"})

        response = client.post(f"{API}/invoices", json=invoice_request(project["id"]))

        assert response.status_code == 201

    def test_selected_items_only(self, client, billed_project):
        project, entries = billed_project

        response = client.post(
            f"{API}/invoices",
            json=invoice_request(project["id"], items=[{"time_entry_id": entries[1]["id"]}])
        )

        assert response.status_code == 201, response.text
        assert [item["time_entry_id"] for item in response.json()["items"]] == [entries[1]["id"]]
        assert Decimal(response.json()["subtotal"]) == Decimal("150.00")

    def test_unknown_selected_item(self, client, billed_project):
        project, _ = billed_project

        response = client.post(
            f"{API}/invoices",
            json=invoice_request(project["id"], items=[{"time_entry_id": "not-billable"}])
        )

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    def test_reversed_period_rejected(self, client, create_project):
        project = create_project()
        response = client.post(
            f"{API}/invoices",
            json=invoice_request(project["id"], from_date="2024-03-31", to_date="2024-03-01")
        )
        assert response.status_code == 400

    @pytest.mark.parametrize("tax_rate", ["-1", "101"])
    def test_tax_rate_out_of_range(self, client, billed_project, tax_rate):
        project, _ = billed_project
        response = client.post(f"{API}/invoices", json=invoice_request(project["id"], tax_rate=tax_rate))
        assert response.status_code == 400

    def test_failed_item_insert_leaves_no_invoice(self, client, billed_project, monkeypatch):
        """An item pointing at a missing entry fails the whole insert."""
        project, _ = billed_project
        original = InvoiceMapper.item_to_model

        def broken_item_to_model(self, item: InvoiceItem):
            model = original(self, item)
            model.time_entry_id = "no-such-entry"
            return model

        monkeypatch.setattr(InvoiceMapper, "item_to_model", broken_item_to_model)

        response = client.post(f"{API}/invoices", json=invoice_request(project["id"]))

        assert response.status_code == 500
        assert response.json()["code"] == "STORE_ERROR"
        monkeypatch.undo()
        assert client.get(f"{API}/invoices").json() == []
        # The entries are still billable afterwards
        assert client.post(f"{API}/invoices", json=invoice_request(project["id"])).status_code == 201

    def test_exhausted_invoice_numbers_are_retryable(self, app, client, billed_project):
        project, entries = billed_project
        rng = Mock()
        rng.randint.return_value = 7
        app.dependency_overrides[get_numbering_service] = lambda: NumberingService(rng=rng)
        first = client.post(
            f"{API}/invoices",
            json=invoice_request(project["id"], items=[{"time_entry_id": entries[0]["id"]}])
        )
        assert first.status_code == 201, first.text
        assert first.json()["invoice_number"].endswith("-007")

        response = client.post(f"{API}/invoices", json=invoice_request(project["id"]))

        assert response.status_code == 409
        body = response.json()
        assert body["code"] == "CONFLICT"
        assert body["retryable"] is True
        assert rng.randint.call_count == 1 + settings.invoice_number_max_attempts
        assert len(client.get(f"{API}/invoices").json()) == 1


class TestPreviewInvoiceApi:

    def test_preview_matches_create_and_writes_nothing(self, client, billed_project):
        project, _ = billed_project

        preview = client.post(f"{API}/invoices/preview", json=invoice_request(project["id"], tax_rate="8.5"))

        assert preview.status_code == 200, preview.text
        body = preview.json()
        assert Decimal(body["total_hours"]) == Decimal("3.5")
        assert Decimal(body["total"]) == Decimal("379.75")
        assert len(body["entries"]) == 2
        assert client.get(f"{API}/invoices").json() == []

        created = client.post(f"{API}/invoices", json=invoice_request(project["id"], tax_rate="8.5")).json()
        assert Decimal(created["total"]) == Decimal(body["total"])


class TestInvoiceLifecycleApi:

    def test_list_omits_items(self, client, billed_project):
        project, _ = billed_project
        client.post(f"{API}/invoices", json=invoice_request(project["id"]))

        listed = client.get(f"{API}/invoices").json()

        assert len(listed) == 1
        assert listed[0]["items"] is None
        assert listed[0]["project"]["name"] == "Genome Assembly Pipeline"

    def test_get_includes_items(self, client, billed_project):
        project, _ = billed_project
        invoice = client.post(f"{API}/invoices", json=invoice_request(project["id"])).json()

        response = client.get(f"{API}/invoices/{invoice['id']}")

        assert response.status_code == 200
        assert len(response.json()["items"]) == 2

    def test_send_then_pay(self, client, clock, billed_project):
        project, _ = billed_project
        invoice = client.post(f"{API}/invoices", json=invoice_request(project["id"])).json()
        url = f"{API}/invoices/{invoice['id']}"

        assert client.put(url, json={"status": "sent"}).json()["status"] == "sent"
        clock.set(datetime(2024, 4, 20, 12, 0))
        paid = client.put(url, json={"status": "paid"}).json()

        assert paid["status"] == "paid"
        assert paid["paid_date"] == "2024-04-20"

    def test_draft_cannot_be_paid(self, client, billed_project):
        project, _ = billed_project
        invoice = client.post(f"{API}/invoices", json=invoice_request(project["id"])).json()

        response = client.put(f"{API}/invoices/{invoice['id']}", json={"status": "paid"})

        assert response.status_code == 400
        assert client.get(f"{API}/invoices/{invoice['id']}").json()["status"] == "draft"

    def test_amounts_are_not_editable(self, client, billed_project):
        project, _ = billed_project
        invoice = client.post(f"{API}/invoices", json=invoice_request(project["id"])).json()

        response = client.put(f"{API}/invoices/{invoice['id']}", json={"total": "1.00"})

        assert response.status_code == 400

    def test_delete_frees_entries(self, client, billed_project):
        project, _ = billed_project
        invoice = client.post(f"{API}/invoices", json=invoice_request(project["id"])).json()

        assert client.delete(f"{API}/invoices/{invoice['id']}").status_code == 204
        assert client.get(f"{API}/invoices/{invoice['id']}").status_code == 404
        assert client.post(f"{API}/invoices", json=invoice_request(project["id"])).status_code == 201


class TestInvoiceDocumentApi:

    def test_html_document(self, client, clock, billed_project):
        project, _ = billed_project
        invoice = client.post(f"{API}/invoices", json=invoice_request(project["id"], tax_rate="8.5")).json()

        response = client.get(f"{API}/invoices/{invoice['id']}/document")

        assert response.status_code == 200
        assert response.headers["content-type"].startswith("text/html")
        html = response.text
        assert f"Invoice #{invoice['invoice_number']}" in html
        assert "Dr. Sarah Chen" in html
        assert "Genome Assembly Pipeline" in html
        assert "Mar 04, 2024" in html
        assert "$379.75" in html

    def test_pdf_download(self, client, billed_project, monkeypatch):
        project, _ = billed_project
        invoice = client.post(f"{API}/invoices", json=invoice_request(project["id"])).json()
        rendered = []

        def fake_render(document):
            rendered.append(document)
            return b"%PDF-1.7 test"

        monkeypatch.setattr(pdf_service, "render_invoice_pdf", fake_render)

        response = client.get(f"{API}/invoices/{invoice['id']}/pdf")

        assert response.status_code == 200
        assert response.headers["content-type"] == "application/pdf"
        assert response.headers["content-disposition"] == (
            f'attachment; filename="Invoice_{invoice["invoice_number"]}.pdf"'
        )
        assert response.content == b"%PDF-1.7 test"
        assert rendered[0].page_count == 1

    def test_document_of_missing_invoice(self, client):
        assert client.get(f"{API}/invoices/missing/document").status_code == 404
