# =============================================================================
# File: tests/conftest.py
# Purpose: App / client fixtures backed by a temporary SQLite file.
# =============================================================================
import pytest

from shedsite import create_app
from shedsite.db import SessionLocal

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "correct-horse"


@pytest.fixture
def app(tmp_path):
    """Fresh app per test: own database file and upload folder."""
    app = create_app({
        "TESTING": True,
        "SECRET_KEY": "test-secret",
        "DATABASE_URL": f"sqlite:///{tmp_path / 'test.db'}",
        "UPLOAD_FOLDER": str(tmp_path / "uploads"),
        "STORAGE_BUCKETS": ["images"],
        "SITE_URL": "https://example.com",
        "ADMIN_ENABLED": True,
        "ADMIN_EMAIL": ADMIN_EMAIL,
        "ADMIN_PASSWORD": ADMIN_PASSWORD,
        "SEED_DEFAULTS": True,
    })
    yield app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def admin_client(client):
    rv = client.post("/admin/login", data={"email": ADMIN_EMAIL, "password": ADMIN_PASSWORD})
    assert rv.status_code == 302
    return client


@pytest.fixture
def db(app):
    with SessionLocal() as s:
        yield s
