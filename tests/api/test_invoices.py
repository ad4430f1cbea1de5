"""Tests for invoice endpoints."""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from marginbook.api.dependencies import (
    get_create_invoice_use_case,
    get_current_user,
    get_invoices,
    get_update_invoice_use_case,
)
from marginbook.api.main import app
from marginbook.application.use_cases import (
    CreateInvoiceUseCase,
    InvoiceResult,
    UpdateInvoiceUseCase,
)
from marginbook.core.entities import InvoiceData, InvoiceRecord, User
from marginbook.core.exceptions import InvoiceNotFoundError, ValidationError
from marginbook.core.interfaces import IInvoiceStore
from marginbook.core.services import compute_invoice_totals

CURRENT_USER = User(id="user-1", email="ada@example.com")


@pytest.fixture
def stored_invoice(sample_invoice_data) -> InvoiceRecord:
    document = InvoiceData.model_validate(sample_invoice_data)
    return InvoiceRecord(
        id="i1",
        user_id=CURRENT_USER.id,
        invoice_number=12,
        label="Buyer Co",
        usd_rate=1500,
        payload=document,
        totals=compute_invoice_totals(document),
    )


@pytest.fixture
def mock_store(stored_invoice):
    store = AsyncMock(spec=IInvoiceStore)
    store.get_invoice.return_value = stored_invoice
    store.list_invoices.return_value = [stored_invoice]
    store.delete_invoice.return_value = True
    return store


@pytest.fixture
def mock_create(stored_invoice):
    use_case = AsyncMock(spec=CreateInvoiceUseCase)
    use_case.execute.return_value = InvoiceResult(invoice=stored_invoice)
    use_case.to_response = CreateInvoiceUseCase().to_response
    return use_case


@pytest.fixture
def mock_update(stored_invoice):
    use_case = AsyncMock(spec=UpdateInvoiceUseCase)
    use_case.execute.return_value = InvoiceResult(invoice=stored_invoice)
    use_case.to_response = UpdateInvoiceUseCase().to_response
    return use_case


@pytest.fixture
async def client(mock_store, mock_create, mock_update):
    app.dependency_overrides[get_current_user] = lambda: CURRENT_USER
    app.dependency_overrides[get_invoices] = lambda: mock_store
    app.dependency_overrides[get_create_invoice_use_case] = lambda: mock_create
    app.dependency_overrides[get_update_invoice_use_case] = lambda: mock_update
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestPreviewTotals:
    async def test_totals(self, client, sample_invoice_data):
        response = await client.post("/api/invoices/totals", json=sample_invoice_data)

        assert response.status_code == 200
        data = response.json()
        assert data["subtotal"] == 600
        assert data["total"] == pytest.approx(587)

    async def test_no_auth_needed(self, sample_invoice_data):
        async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
            response = await ac.post("/api/invoices/totals", json=sample_invoice_data)
        assert response.status_code == 200


class TestInvoiceCrud:
    async def test_list(self, client, mock_store):
        response = await client.get("/api/invoices", params={"q": "buyer"})

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["invoices"][0]["display_number"] == "INV-0012"
        mock_store.list_invoices.assert_awaited_once_with("user-1", query="buyer", limit=100, offset=0)

    async def test_get_uses_from_alias(self, client):
        response = await client.get("/api/invoices/i1")

        assert response.status_code == 200
        data = response.json()
        assert data["payload"]["from"]["name"] == "Seller Ltd"
        assert data["totals"]["total"] == pytest.approx(587)
        assert data["display_total"] == "NGN 587"
        assert data["usd_rate"] == 1500

    async def test_get_missing(self, client, mock_store):
        mock_store.get_invoice.return_value = None
        response = await client.get("/api/invoices/nope")
        assert response.status_code == 404
        assert response.json()["error_code"] == "INVOICE_NOT_FOUND"

    async def test_create(self, client, mock_create, sample_invoice_data):
        response = await client.post(
            "/api/invoices",
            json={"label": "Buyer Co", "usd_rate": 1500, "invoice": sample_invoice_data},
        )

        assert response.status_code == 201
        assert response.json()["invoice_number"] == 12
        _, request = mock_create.execute.await_args.args
        assert request.invoice.from_party.name == "Seller Ltd"

    async def test_update_undecodable_document(self, client, mock_update):
        mock_update.execute.side_effect = ValidationError("invoice", "Stored invoice could not be decoded")

        response = await client.put("/api/invoices/i1", json={"label": "x"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_update(self, client, mock_update):
        response = await client.put("/api/invoices/i1", json={"usd_rate": 1600})
        assert response.status_code == 200
        _, _, request = mock_update.execute.await_args.args
        assert request.usd_rate == 1600

    async def test_update_missing(self, client, mock_update):
        mock_update.execute.side_effect = InvoiceNotFoundError("nope")
        response = await client.put("/api/invoices/nope", json={})
        assert response.status_code == 404

    async def test_delete(self, client, mock_store):
        response = await client.delete("/api/invoices/i1")
        assert response.status_code == 204

    async def test_delete_missing(self, client, mock_store):
        mock_store.delete_invoice.return_value = False
        response = await client.delete("/api/invoices/i1")
        assert response.status_code == 404
