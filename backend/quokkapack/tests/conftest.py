"""
Shared fixtures: a file-backed SQLite database per test and token helpers.
"""
import pytest
from datetime import datetime, timedelta, timezone
from fastapi.testclient import TestClient
from jose import jwt
from sqlalchemy.orm import sessionmaker
from quokkapack.core.config import settings
from quokkapack.db.session import build_engine, get_db, init_db
from quokkapack.main import app

ISSUER = "https://login.example/tenant"


@pytest.fixture
def engine(tmp_path):
    engine = build_engine(f"sqlite:///{tmp_path / 'test.db'}")
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def client(session_factory):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_token():
    """Mint a signed token the way the identity provider would."""
    def _make_token(subject="abc123", issuer=ISSUER, **claims):
        payload = {
            "iss": issuer,
            "sub": subject,
            "name": "Test User",
            "email": "test@example.com",
            "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        }
        payload.update(claims)
        payload = {k: v for k, v in payload.items() if v is not None}
        return jwt.encode(payload, settings.OIDC_SIGNING_KEY, algorithm=settings.OIDC_ALGORITHMS[0])
    return _make_token


@pytest.fixture
def auth_headers(make_token):
    def _auth_headers(subject="abc123", issuer=ISSUER, **claims):
        return {"Authorization": f"Bearer {make_token(subject, issuer, **claims)}"}
    return _auth_headers
