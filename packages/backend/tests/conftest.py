"""Test fixtures — an app wired to fakes for both external collaborators.

Learn: Taskbox has two collaborators, the identity provider and the task
store. Tests swap both (see fakes.py):

1. FakeIdentityResolver maps fixed tokens ("tok1", "tok2") to identities
   and refuses everything else, the way a real provider would.
2. RecordingStore wraps InMemoryTaskStore and records every call, so a
   test can assert the store was never touched (e.g. on a 401).

The store goes in through app.dependency_overrides, the resolver through
create_app(identity_resolver=...). No database or network needed.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from fakes import TOKENS, FakeIdentityResolver, RecordingStore
from taskbox.api.tasks import get_task_store
from taskbox.config import Settings
from taskbox.main import create_app


@pytest.fixture
def store():
    return RecordingStore()


@pytest.fixture
def resolver():
    return FakeIdentityResolver(TOKENS)


@pytest.fixture
def app_settings():
    return Settings(database_url="memory://", log_level="WARNING")


@pytest.fixture
def app(app_settings, resolver, store):
    app = create_app(app_settings, identity_resolver=resolver)
    app.dependency_overrides[get_task_store] = lambda: store
    yield app
    app.dependency_overrides.clear()


@pytest_asyncio.fixture()
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
