"""API tests for quotation endpoints."""

from datetime import date
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from httpx import AsyncClient

from solarbooks.api.dependencies import (
    get_create_quotation_use_case,
    get_expire_quotations_use_case,
    get_quotation_pdf_use_case,
    get_quote_store,
    get_update_quotation_status_use_case,
)
from solarbooks.api.main import app
from solarbooks.application.use_cases.create_quotation import CreateQuotationUseCase
from solarbooks.application.use_cases.generate_document_pdf import (
    GenerateQuotationPdfUseCase,
)
from solarbooks.application.use_cases.quotation_lifecycle import (
    ExpireQuotationsUseCase,
    UpdateQuotationStatusUseCase,
)
from solarbooks.config.settings import CompanySettings, Settings
from solarbooks.core.entities.quotation import Quotation, QuotationStatus
from solarbooks.core.entities.tax import DocumentTotals


def _quotation(**kwargs) -> Quotation:
    defaults = {
        "id": 1,
        "quotation_number": "QUO-2025-001",
        "client_name": "R. Sharma",
        "status": QuotationStatus.DRAFT,
        "quotation_date": date(2025, 6, 1),
        "validity_date": date(2099, 7, 1),
        "totals": DocumentTotals(grand_total=Decimal("2124")),
    }
    defaults.update(kwargs)
    return Quotation(**defaults)


@pytest.fixture
def mock_quotation_store():
    store = AsyncMock()
    store.get_quotation.return_value = _quotation()
    store.list_quotations.return_value = []
    store.next_sequence.return_value = 4
    store.create_quotation.side_effect = lambda q: q.model_copy(update={"id": 8})
    store.update_quotation.side_effect = lambda q: q
    return store


@pytest.fixture
def renderer():
    renderer = MagicMock()
    renderer.render_quotation.return_value = b"%PDF-1.4 quotation"
    return renderer


@pytest.fixture
async def quote_client(
    async_client: AsyncClient, mock_quotation_store, renderer, company_gstin
):
    store = mock_quotation_store
    settings = Settings(company=CompanySettings(gstin=company_gstin))

    app.dependency_overrides[get_quote_store] = lambda: store
    app.dependency_overrides[get_create_quotation_use_case] = lambda: CreateQuotationUseCase(
        quotation_store=store, settings=settings
    )
    app.dependency_overrides[get_update_quotation_status_use_case] = (
        lambda: UpdateQuotationStatusUseCase(quotation_store=store)
    )
    app.dependency_overrides[get_expire_quotations_use_case] = (
        lambda: ExpireQuotationsUseCase(quotation_store=store)
    )
    app.dependency_overrides[get_quotation_pdf_use_case] = (
        lambda: GenerateQuotationPdfUseCase(quotation_store=store, renderer=renderer)
    )
    return async_client


async def test_create_with_schedule(quote_client: AsyncClient, sample_line_payload):
    response = await quote_client.post(
        "/api/quotations",
        json={
            "client_name": "R. Sharma",
            "place_of_supply": "Karnataka",
            "quotation_date": "2025-06-01",
            "system_size_kw": 3.0,
            "items": [sample_line_payload, sample_line_payload],
            "payment_terms": "40-50-10",
        },
    )
    assert response.status_code == 201

    data = response.json()
    assert data["quotation_number"] == "QUO-2025-004"
    assert data["status"] == "Draft"
    assert data["validity_date"] == "2025-07-01"
    assert data["totals"]["grand_total"] == 2124.0
    assert [s["amount"] for s in data["payment_schedule"]["stages"]] == [
        850.0,
        1062.0,
        212.0,
    ]


async def test_create_unknown_preset(quote_client: AsyncClient, sample_line_payload):
    response = await quote_client.post(
        "/api/quotations",
        json={
            "client_name": "R. Sharma",
            "items": [sample_line_payload],
            "payment_terms": "10-90",
        },
    )
    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


async def test_get_missing(quote_client: AsyncClient, mock_quotation_store):
    mock_quotation_store.get_quotation.return_value = None

    response = await quote_client.get("/api/quotations/42")
    assert response.status_code == 404
    assert response.json()["error_code"] == "QUOTATION_NOT_FOUND"


async def test_send(quote_client: AsyncClient):
    response = await quote_client.patch(
        "/api/quotations/1/status", json={"status": "Sent"}
    )
    assert response.status_code == 200

    data = response.json()
    assert data["status"] == "Sent"
    assert data["sent_date"] is not None


async def test_draft_cannot_be_accepted(quote_client: AsyncClient):
    response = await quote_client.patch(
        "/api/quotations/1/status", json={"status": "Accepted"}
    )
    assert response.status_code == 400
    assert response.json()["error_code"] == "INVALID_STATUS_TRANSITION"


async def test_reject_requires_reason(quote_client: AsyncClient, mock_quotation_store):
    mock_quotation_store.get_quotation.return_value = _quotation(
        status=QuotationStatus.SENT
    )

    response = await quote_client.patch(
        "/api/quotations/1/status", json={"status": "Rejected"}
    )
    assert response.status_code == 400
    assert response.json()["error_code"] == "VALIDATION_ERROR"


async def test_expire(quote_client: AsyncClient, mock_quotation_store):
    stale = _quotation(id=2, quotation_number="QUO-2025-002", validity_date=date(2025, 7, 1))
    fresh = _quotation(id=3, quotation_number="QUO-2025-003", validity_date=date(2025, 9, 1))

    async def _list(status=None, **kwargs):
        return [stale, fresh] if status == QuotationStatus.SENT else []

    mock_quotation_store.list_quotations.side_effect = _list

    response = await quote_client.post(
        "/api/quotations/expire", params={"today": "2025-08-01"}
    )
    assert response.status_code == 200
    assert response.json() == {"updated": ["QUO-2025-002"], "count": 1}


async def test_pdf(quote_client: AsyncClient):
    response = await quote_client.get("/api/quotations/1/pdf")
    assert response.status_code == 200
    assert response.headers["content-type"] == "application/pdf"
    assert 'filename="QUO-2025-001.pdf"' in response.headers["content-disposition"]
    assert response.content == b"%PDF-1.4 quotation"
