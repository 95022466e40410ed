import pytest
from fastapi.testclient import TestClient

from core import db
from main import app

from tests.helpers.fakes import FakePool, make_variant


@pytest.fixture
def fake_pool() -> FakePool:
    return FakePool([make_variant(pk) for pk in range(1, 151)])


@pytest.fixture
def client(fake_pool):
    app.dependency_overrides[db.pool] = lambda: fake_pool
    try:
        # No context manager: the lifespan (real pool) is not started.
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
