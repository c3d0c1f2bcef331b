import os

# Keep the module level engine off the filesystem during tests
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")

import httpx
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from home_sandbox.api.api import create_app
from home_sandbox.client.api_client import SandboxApiClient
from home_sandbox.client.devices_store import DevicesStore
from home_sandbox.client.presets_store import PresetsStore
from home_sandbox.database import get_db, init_db
from home_sandbox.utils.event_system import EventSystem


class Notifications:
    """Collects user-facing notifications instead of showing them"""

    def __init__(self):
        self.messages = []

    def __call__(self, message, type='info'):
        self.messages.append((type, message))

    def of_type(self, type):
        return [message for kind, message in self.messages if kind == type]


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    init_db(bind=engine)
    yield engine
    engine.dispose()


@pytest.fixture
def app(engine):
    TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)

    def override_get_db():
        session = TestingSession()
        try:
            yield session
        finally:
            session.close()

    app = create_app()
    app.dependency_overrides[get_db] = override_get_db
    return app


@pytest.fixture
def client(app):
    with TestClient(app) as client:
        yield client


@pytest_asyncio.fixture
async def api(app):
    client = SandboxApiClient("http://testserver/api", transport=httpx.ASGITransport(app=app))
    yield client
    await client.aclose()


@pytest.fixture
def notifications():
    return Notifications()


@pytest.fixture
def events():
    return EventSystem()


@pytest.fixture
def devices_store(api, events, notifications):
    return DevicesStore(api, events, notify=notifications)


@pytest.fixture
def presets_store(api, events, notifications):
    return PresetsStore(api, events, notify=notifications)

