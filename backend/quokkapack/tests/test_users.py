"""
Tests for authentication and user initialization endpoints.
"""
from sqlalchemy.orm import sessionmaker
from quokkapack.db.session import build_engine, get_db
from quokkapack.main import app
from quokkapack.models.user import MasterUser, UserLogin

ISSUER = "https://login.example/tenant"


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}


def test_initialize_requires_token(client):
    response = client.post("/api/users/initialize")
    assert response.status_code == 401


def test_initialize_rejects_bad_signature(client):
    response = client.post(
        "/api/users/initialize",
        headers={"Authorization": "Bearer not-a-real-token"}
    )
    assert response.status_code == 401


def test_initialize_rejects_expired_token(client, make_token):
    token = make_token(exp=1)
    response = client.post("/api/users/initialize", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 401


def test_initialize_without_subject_is_unauthorized(client, auth_headers, db):
    response = client.post("/api/users/initialize", headers=auth_headers(subject=None))
    assert response.status_code == 401
    assert response.headers["WWW-Authenticate"] == "Bearer"
    assert db.query(MasterUser).count() == 0


def test_initialize_without_issuer_is_unauthorized(client, auth_headers, db):
    response = client.post("/api/users/initialize", headers=auth_headers(issuer=None))
    assert response.status_code == 401
    assert db.query(UserLogin).count() == 0


def test_initialize_provisions_once(client, auth_headers, db):
    first = client.post("/api/users/initialize", headers=auth_headers())
    second = client.post("/api/users/initialize", headers=auth_headers())

    assert first.status_code == 200
    assert first.json()["data"]["id"] == second.json()["data"]["id"]
    assert db.query(MasterUser).count() == 1


def test_me_returns_login_details(client, auth_headers):
    response = client.get("/api/users/me", headers=auth_headers(name="Ann Lee", email="ann@example.com"))

    assert response.status_code == 200
    data = response.json()
    assert data["logins"] == [{
        "provider": "entra",
        "provider_user_id": "abc123",
        "issuer": ISSUER,
        "email": "ann@example.com",
        "display_name": "Ann Lee",
    }]


def test_oid_claim_takes_precedence_over_sub(client, auth_headers, db):
    client.get("/api/users/me", headers=auth_headers(subject="pairwise-sub", oid="object-id-1"))
    client.get("/api/users/me", headers=auth_headers(subject="other-sub", oid="object-id-1"))

    assert db.query(MasterUser).count() == 1
    assert db.query(UserLogin).one().provider_user_id == "object-id-1"


def test_store_outage_is_service_unavailable(client, auth_headers, tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'missing-dir' / 'quokkapack.db'}")
    unreachable = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def broken_get_db():
        session = unreachable()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = broken_get_db
    response = client.get("/api/users/me", headers=auth_headers())

    assert response.status_code == 503
    assert response.json()["error"].startswith("Service temporarily unavailable")
    engine.dispose()
