import asyncio

import pytest
import pytest_asyncio
from fastapi.testclient import TestClient
from mongomock_motor import AsyncMongoMockClient

from app.core.deps import ADMIN_ROLE
from app.core.security import create_access_token
from app.db.mongodb import create_indexes, get_database
from app.main import app


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory database with the production indexes."""
    database = AsyncMongoMockClient()["test_blog"]
    await create_indexes(database)
    yield database


@pytest.fixture
def client():
    database = AsyncMongoMockClient()["test_blog_api"]
    asyncio.run(create_indexes(database))

    app.dependency_overrides[get_database] = lambda: database
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_access_token('admin-1', ADMIN_ROLE)}"}


@pytest.fixture
def user_headers():
    return {"Authorization": f"Bearer {create_access_token('reader-1', 'user')}"}


@pytest.fixture
def post_payload():
    return {
        "title": "Hello World!",
        "author": "Estiak Ahmed",
        "date": "2025-01-15T00:00:00",
        "content": "<p>First sentence. Second sentence!</p>",
    }
