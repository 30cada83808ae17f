"""Shared fixtures: a fresh SQLite database and app per test."""
import pytest
import pytest_asyncio
import httpx

from deskpet.db import create_tables
from deskpet.load_secrets import ServerConfig
from deskpet.main import create_app

TEST_SECRET = "test-secret-key-123"


@pytest.fixture
def config(tmp_path):
    """Server settings pointing at a throwaway database"""
    return ServerConfig(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'deskpet_test.sqlite3'}",
        secret=TEST_SECRET,
        pepper_data="test-pepper",
        token_expire_minutes=60,
        reward_tier_count=10,
        cors_origins=["http://localhost:3000"],
        log_level="DEBUG",
    )


@pytest_asyncio.fixture
async def app(config):
    # ASGITransport does not run the lifespan, so the table is created here.
    application = create_app(config)
    await create_tables(application.state.engine)
    yield application
    await application.state.engine.dispose()


@pytest_asyncio.fixture
async def client(app):
    transport = httpx.ASGITransport(app=app)
    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as http_client:
        yield http_client


@pytest.fixture
def account_service(app):
    return app.state.account_service


async def register_and_login(client, username="alice", password="pw1") -> dict:
    """Register an account and return the Authorization header for it"""
    response = await client.post("/register", json={"username": username, "password": password})
    assert response.status_code == 200
    response = await client.post("/login", json={"username": username, "password": password})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest_asyncio.fixture
async def auth_headers(client):
    return await register_and_login(client)
