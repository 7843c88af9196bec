import pytest
from flask import Flask

from config import TestConfig
from clinic_api.app_factory import create_app
from clinic_api.services.repository import InMemoryRepository


@pytest.fixture
def repo() -> InMemoryRepository:
    return InMemoryRepository()


@pytest.fixture
def app(repo) -> Flask:
    # Fresh store per test, so writes never leak between tests
    app = create_app(TestConfig, repository=repo)
    yield app
    repo.reset()


@pytest.fixture
def client(app: Flask):
    return app.test_client()


@pytest.fixture
def auth_headers():
    return {"Authorization": f"Bearer {TestConfig.API_TOKEN}"}
