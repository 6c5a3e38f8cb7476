"""Quote Requests — POST /quotes/request.

Tests cover:
    - Valid request returns a QR- quote id and names the slot
    - Field errors are reported together under fieldErrors
    - Unknown or malformed slot id → 404
"""

from uuid import uuid4

import pytest


def _quote(ad_slot_id, **overrides) -> dict:
    body = {
        "email": "buyer@acme.test",
        "companyName": "Acme Corp",
        "adSlotId": str(ad_slot_id),
        "budget": 5000,
        "timeline": "Q3",
    }
    body.update(overrides)
    return body


async def test_quote_request_succeeds(client, ad_slot):
    res = await client.post("/api/v1/quotes/request", json=_quote(ad_slot.id))
    assert res.status_code == 200
    body = res.json()
    assert body["success"] is True
    assert body["quoteId"].startswith("QR-")
    assert '"Banner Ad"' in body["message"]


async def test_quote_request_reports_all_field_errors(client):
    res = await client.post("/api/v1/quotes/request", json={"email": "not-an-email"})
    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Validation failed"
    assert body["fieldErrors"] == {
        "email": "Please enter a valid email address",
        "companyName": "Company name is required",
        "adSlotId": "Ad slot ID is required",
    }


@pytest.mark.parametrize("slot_id", ["not-a-uuid", str(uuid4())])
async def test_quote_request_unknown_slot_returns_404(client, slot_id):
    res = await client.post(
        "/api/v1/quotes/request", json=_quote(slot_id),
    )
    assert res.status_code == 404
    assert res.json()["error"] == "Ad slot not found"


async def test_quote_request_blank_company_name(client, ad_slot):
    res = await client.post(
        "/api/v1/quotes/request", json=_quote(ad_slot.id, companyName="   "),
    )
    assert res.status_code == 400
    assert "companyName" in res.json()["fieldErrors"]
