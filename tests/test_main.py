from fastapi.testclient import TestClient

from backend.app.main import app

client = TestClient(app)


def test_read_root():
    response = client.get("/")
    assert response.status_code == 200
    assert response.json() == {"app": "BizLedger backend", "status": "ok"}


def test_health_check():
    response = client.get("/health")
    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_payment_routes_registered():
    paths = {route.path for route in app.routes}
    assert {"/payments/", "/payments/{payment_id}", "/auth/login", "/auth/register", "/auth/me"} <= paths
