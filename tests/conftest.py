"""Pytest fixtures for customer repository and API tests."""

import pytest
from fastapi.testclient import TestClient

from src.api.main import create_app
from src.database.customers import CustomerRepository


@pytest.fixture
def repository():
    """Empty in-memory customer store for tests."""
    return CustomerRepository()


@pytest.fixture
def client(repository):
    app = create_app(repository)
    return TestClient(app)
