from decimal import Decimal

from fastapi.testclient import TestClient

from backend.app.main import app


def register_and_login(client: TestClient, email: str, password: str) -> str:
    client.post("/auth/register", json={"email": email, "password": password})
    resp = client.post("/auth/login", json={"email": email, "password": password})
    assert resp.status_code == 200
    return resp.json()["access_token"]


def auth_headers(client: TestClient) -> dict:
    token = register_and_login(client, "payer@bizledger.io", "secret")
    return {"Authorization": f"Bearer {token}"}


def outbound_payment(ref, **overrides) -> dict:
    body = {
        "payment_date": "2030-01-15",
        "amount": "120.00",
        "currency_id": ref.eur_id,
        "payment_method_id": ref.transfer_method_id,
        "direction": "outbound",
        "bank_account_id": ref.bank_account_id,
    }
    body.update(overrides)
    return body


def test_record_payment_returns_201_with_resolved_relations(ref):
    client = TestClient(app)
    headers = auth_headers(client)

    resp = client.post("/payments/", json=outbound_payment(ref, reference_number="WIRE-1"), headers=headers)

    assert resp.status_code == 201
    data = resp.json()
    assert Decimal(data["amount"]) == Decimal("120")
    assert data["direction"] == "outbound"
    assert data["currency"]["code"] == "EUR"
    assert data["payment_method"]["name"] == "Bank transfer"
    assert data["account"]["kind"] == "bank_account"
    assert Decimal(data["account"]["balance"]) == Decimal("380")
    assert data["recorded_by"]["email"] == "payer@bizledger.io"
    assert data["counterparty"] is None
    assert data["document"] is None
    assert data["deleted_at"] is None


def test_record_payment_requires_token(ref):
    client = TestClient(app)
    resp = client.post("/payments/", json=outbound_payment(ref))
    assert resp.status_code in (401, 403)


def test_structural_violation_returns_400_with_errors(ref):
    client = TestClient(app)
    headers = auth_headers(client)

    resp = client.post(
        "/payments/",
        json=outbound_payment(ref, cash_register_session_id=ref.open_session_id),
        headers=headers,
    )

    assert resp.status_code == 400
    errors = resp.json()["errors"]
    assert errors[0]["field"] == "bank_account_id"
    assert errors[0]["kind"] == "invalid"


def test_non_positive_amount_is_request_shape_error(ref):
    client = TestClient(app)
    headers = auth_headers(client)

    resp = client.post("/payments/", json=outbound_payment(ref, amount="0"), headers=headers)

    assert resp.status_code == 422


def test_unknown_currency_returns_404(ref):
    client = TestClient(app)
    headers = auth_headers(client)

    resp = client.post("/payments/", json=outbound_payment(ref, currency_id=999), headers=headers)

    assert resp.status_code == 404
    assert resp.json()["errors"][0]["message"] == "Active currency with ID 999 not found."


def test_closed_session_returns_409(ref):
    client = TestClient(app)
    headers = auth_headers(client)

    resp = client.post(
        "/payments/",
        json=outbound_payment(ref, bank_account_id=None, cash_register_session_id=ref.closed_session_id),
        headers=headers,
    )

    assert resp.status_code == 409


def test_get_and_reverse_payment(ref):
    client = TestClient(app)
    headers = auth_headers(client)
    payment_id = client.post("/payments/", json=outbound_payment(ref), headers=headers).json()["id"]

    get_resp = client.get(f"/payments/{payment_id}", headers=headers)
    assert get_resp.status_code == 200
    assert get_resp.json()["id"] == payment_id

    del_resp = client.delete(f"/payments/{payment_id}", headers=headers)
    assert del_resp.status_code == 200
    data = del_resp.json()
    assert data["deleted_at"] is not None
    assert Decimal(data["account"]["balance"]) == Decimal("500")
    assert "[REVERSED by user" in data["notes"]

    again = client.delete(f"/payments/{payment_id}", headers=headers)
    assert again.status_code == 409

    still_readable = client.get(f"/payments/{payment_id}", headers=headers)
    assert still_readable.status_code == 200
    assert still_readable.json()["deleted_at"] is not None


def test_unknown_payment_returns_404(ref):
    client = TestClient(app)
    headers = auth_headers(client)

    assert client.get("/payments/9999", headers=headers).status_code == 404
    assert client.delete("/payments/9999", headers=headers).status_code == 404


def test_list_payments_filters_and_sorting(ref):
    client = TestClient(app)
    headers = auth_headers(client)
    client.post("/payments/", json=outbound_payment(ref, amount="10", notes="stationery"), headers=headers)
    client.post("/payments/", json=outbound_payment(ref, amount="30", payment_date="2030-02-01"), headers=headers)
    client.post(
        "/payments/",
        json=outbound_payment(
            ref,
            amount="45",
            direction="inbound",
            customer_id=ref.customer_id,
            customer_invoice_id=ref.customer_invoice_id,
        ),
        headers=headers,
    )

    resp = client.get("/payments/", params={"sort_by": "amount", "sort_order": "asc"}, headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 3
    assert [Decimal(p["amount"]) for p in data["payments"]] == [Decimal("10"), Decimal("30"), Decimal("45")]

    inbound = client.get("/payments/", params={"direction": "inbound"}, headers=headers).json()
    assert inbound["total"] == 1
    assert inbound["payments"][0]["counterparty"]["name"] == "Ada Lovelace"
    assert inbound["payments"][0]["document"]["status"] == "partially_paid"

    february = client.get("/payments/", params={"from_date": "2030-02-01"}, headers=headers).json()
    assert [Decimal(p["amount"]) for p in february["payments"]] == [Decimal("30")]

    searched = client.get("/payments/", params={"q": "station"}, headers=headers).json()
    assert searched["total"] == 1

    paged = client.get("/payments/", params={"limit": 1, "skip": 1, "sort_by": "amount"}, headers=headers).json()
    assert paged["total"] == 3
    assert [Decimal(p["amount"]) for p in paged["payments"]] == [Decimal("30")]


def test_list_payments_rejects_unknown_sort(ref):
    client = TestClient(app)
    headers = auth_headers(client)

    assert client.get("/payments/", params={"sort_by": "bogus"}, headers=headers).status_code == 400
    assert client.get("/payments/", params={"sort_order": "sideways"}, headers=headers).status_code == 400


def test_amount_beyond_stored_precision_is_request_shape_error(ref):
    client = TestClient(app)
    headers = auth_headers(client)

    for amount in ("0.00001", "10.12345", "100000000000"):
        resp = client.post("/payments/", json=outbound_payment(ref, amount=amount), headers=headers)
        assert resp.status_code == 422, amount

    listed = client.get("/payments/", headers=headers).json()
    assert listed["total"] == 0


def test_four_decimal_amount_moves_balance_exactly(ref):
    client = TestClient(app)
    headers = auth_headers(client)

    resp = client.post("/payments/", json=outbound_payment(ref, amount="10.1234"), headers=headers)

    assert resp.status_code == 201
    data = resp.json()
    assert Decimal(data["amount"]) == Decimal("10.1234")
    assert Decimal(data["account"]["balance"]) == Decimal("489.8766")
