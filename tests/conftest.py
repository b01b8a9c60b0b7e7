from __future__ import annotations

import pytest

from src.workforce_hub.workforce_hub.container import build_container
from src.workforce_hub.workforce_hub.main import create_app

FIXED_OTP = "654321"


@pytest.fixture
def fixed_otp() -> str:
    return FIXED_OTP


@pytest.fixture
def container():
    return build_container(seed_demo=True, otp_generator=lambda: FIXED_OTP)


@pytest.fixture
def as_user(container):
    """Capabilities for a seeded user, optionally working within ``org_id``."""

    def _resolve(user_id: str, org_id: str | None = None):
        return container.access_resolver.resolve(container.store.users.get_by_id(user_id), org_id)

    return _resolve


@pytest.fixture
def app(container):
    return create_app("config.testing", container=container)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def login(client):
    def _login(email: str, password: str = "password"):
        return client.post("/api/auth/login", json={"email": email, "password": password})

    return _login
