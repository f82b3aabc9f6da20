import pytest
from fastapi.testclient import TestClient

from config import AppConfig
from main import create_app


@pytest.fixture
def app_config():
    return AppConfig(
        environment="test",
        log_level="INFO",
        version="1.0.0",
        cors_origins=["http://localhost:3000"],
    )


@pytest.fixture
def app(app_config):
    return create_app(app_config)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client
