from fastapi.testclient import TestClient

from backend.app.db.session import SessionLocal
from backend.app.main import app
from backend.app.models.user import User


def register_user(client: TestClient, email: str, password: str):
    return client.post("/auth/register", json={"email": email, "password": password})


def test_successful_login_returns_token():
    client = TestClient(app)
    register_user(client, "login@bizledger.io", "secret")
    response = client.post("/auth/login", json={"email": "login@bizledger.io", "password": "secret"})
    assert response.status_code == 200
    data = response.json()
    assert data.get("token_type") == "bearer"
    assert isinstance(data.get("access_token"), str) and data["access_token"]


def test_login_records_last_login():
    client = TestClient(app)
    register_user(client, "stamp@bizledger.io", "secret")
    client.post("/auth/login", json={"email": "stamp@bizledger.io", "password": "secret"})
    with SessionLocal() as db:
        user = db.query(User).filter(User.email == "stamp@bizledger.io").first()
        assert user.last_login is not None


def test_wrong_password_returns_400():
    client = TestClient(app)
    register_user(client, "wrongpw@bizledger.io", "secret")
    response = client.post("/auth/login", json={"email": "wrongpw@bizledger.io", "password": "bad"})
    assert response.status_code == 400


def test_missing_hash_returns_400_not_500():
    client = TestClient(app)
    register_user(client, "badhash@bizledger.io", "secret")
    with SessionLocal() as db:
        user = db.query(User).filter(User.email == "badhash@bizledger.io").first()
        user.hashed_password = None
        db.commit()
    response = client.post("/auth/login", json={"email": "badhash@bizledger.io", "password": "secret"})
    assert response.status_code == 400


def test_inactive_user_cannot_login():
    client = TestClient(app)
    register_user(client, "inactive@bizledger.io", "secret")
    with SessionLocal() as db:
        user = db.query(User).filter(User.email == "inactive@bizledger.io").first()
        user.is_active = False
        db.commit()
    response = client.post("/auth/login", json={"email": "inactive@bizledger.io", "password": "secret"})
    assert response.status_code == 400
    assert response.json()["detail"] == "User is inactive"


def test_nonexistent_user_returns_400():
    client = TestClient(app)
    response = client.post("/auth/login", json={"email": "nosuch@bizledger.io", "password": "secret"})
    assert response.status_code == 400
