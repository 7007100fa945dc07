import pytest
from fastapi.testclient import TestClient

from helper.config_helper import Settings
from helper.store_helper import DEMO_USER_ID, Store, create_store
from main import create_app


@pytest.fixture()
def store() -> Store:
    """A freshly seeded store: demo wallet with 100 coins, two games, four packs."""
    return create_store()


@pytest.fixture()
def user_id() -> str:
    return DEMO_USER_ID


@pytest.fixture()
def settings() -> Settings:
    return Settings(environment="test", log_level="DEBUG")


@pytest.fixture()
def client(settings: Settings):
    # Entering the client runs the lifespan, which seeds app.state.store.
    with TestClient(create_app(settings)) as test_client:
        yield test_client
