"""
Test cases for the authentication HTTP endpoints.
"""
import pytest
from httpx import AsyncClient, ASGITransport
from credservice.main import app
from credservice.auth.router import get_credential_store
from credservice.auth.store import CredentialStore

VALID_USER = {
    "username": "alice01",
    "email": "alice@example.com",
    "role": "user",
    "password": "Secr3t!pw"
}

@pytest.fixture
def store():
    """Fresh store per test, injected in place of the process-wide one."""
    fresh = CredentialStore(rounds=4)
    app.dependency_overrides[get_credential_store] = lambda: fresh
    yield fresh
    app.dependency_overrides.clear()

@pytest.mark.asyncio
async def test_auth_ping(store):
    """Test that the auth service is responding."""
    transport = ASGITransport(app=app)
    async with AsyncClient(base_url="http://test", transport=transport) as ac:
        response = await ac.get("/auth/ping")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"
        assert response.json()["message"] == "Auth service is alive"
        assert "timestamp" in response.json()["data"]
        assert response.json()["data"]["accounts"] == 0

@pytest.mark.asyncio
async def test_register_and_login(store):
    """Test registration followed by login with the same credentials."""
    transport = ASGITransport(app=app)
    async with AsyncClient(base_url="http://test", transport=transport) as ac:
        response = await ac.post("/auth/register", json=VALID_USER)
        assert response.status_code == 200
        assert response.json() == {
            "username": "alice01",
            "email": "alice@example.com",
            "role": "user"
        }

        response = await ac.post("/auth/login", json={
            "username": "alice01",
            "password": "Secr3t!pw"
        })
        assert response.status_code == 200
        data = response.json()
        assert data["username"] == "alice01"
        assert data["email"] == "alice@example.com"
        assert data["role"] == "user"
        assert "salt" not in data
        assert "password_hash" not in data
        assert "password" not in data

@pytest.mark.asyncio
async def test_register_invalid_payload(store):
    """Test that policy violations return 400 and store nothing."""
    transport = ASGITransport(app=app)
    async with AsyncClient(base_url="http://test", transport=transport) as ac:
        response = await ac.post("/auth/register", json={**VALID_USER, "password": "abc12"})
        assert response.status_code == 400
        assert "special character" in response.json()["detail"]

        response = await ac.post("/auth/register", json={**VALID_USER, "role": "root"})
        assert response.status_code == 400
        assert response.json()["detail"].startswith("role:")

        response = await ac.post("/auth/register", json=["not", "an", "object"])
        assert response.status_code == 400

        response = await ac.post(
            "/auth/register",
            content=b"{not json",
            headers={"Content-Type": "application/json"}
        )
        assert response.status_code == 400

    assert len(store) == 0

@pytest.mark.asyncio
async def test_register_duplicate_returns_conflict(store):
    """Test that a duplicate username or email returns 409."""
    transport = ASGITransport(app=app)
    async with AsyncClient(base_url="http://test", transport=transport) as ac:
        response = await ac.post("/auth/register", json=VALID_USER)
        assert response.status_code == 200

        response = await ac.post("/auth/register", json={
            **VALID_USER,
            "email": "other@example.com"
        })
        assert response.status_code == 409
        assert response.json()["detail"] == "account already exists"

        response = await ac.post("/auth/register", json={
            **VALID_USER,
            "username": "bob02"
        })
        assert response.status_code == 409

    assert len(store) == 1

@pytest.mark.asyncio
async def test_invalid_login(store):
    """Test login with invalid credentials."""
    transport = ASGITransport(app=app)
    async with AsyncClient(base_url="http://test", transport=transport) as ac:
        await ac.post("/auth/register", json=VALID_USER)

        # Unknown user
        unknown = await ac.post("/auth/login", json={
            "username": "nonexistent",
            "password": "Secr3t!pw"
        })
        # Wrong password
        wrong = await ac.post("/auth/login", json={
            "username": "alice01",
            "password": "Wrong!pw"
        })
        # Missing fields
        malformed = await ac.post("/auth/login", json={"username": "alice01"})

        for response in (unknown, wrong, malformed):
            assert response.status_code == 401
            assert "WWW-Authenticate" in response.headers
            assert "username" not in response.json()

@pytest.mark.asyncio
async def test_login_role_comes_from_stored_account(store):
    """Test that login echoes the stored role, not anything the client sends."""
    transport = ASGITransport(app=app)
    async with AsyncClient(base_url="http://test", transport=transport) as ac:
        await ac.post("/auth/register", json=VALID_USER)
        response = await ac.post("/auth/login", json={
            "username": "alice01",
            "password": "Secr3t!pw",
            "role": "admin"
        })
        assert response.status_code == 200
        assert response.json()["role"] == "user"

@pytest.mark.asyncio
async def test_login_trims_username_like_registration(store):
    """Test that a username registered with surrounding spaces logs in with the same string."""
    transport = ASGITransport(app=app)
    async with AsyncClient(base_url="http://test", transport=transport) as ac:
        response = await ac.post("/auth/register", json={**VALID_USER, "username": " alice01 "})
        assert response.status_code == 200
        assert response.json()["username"] == "alice01"

        response = await ac.post("/auth/login", json={
            "username": " alice01 ",
            "password": "Secr3t!pw"
        })
        assert response.status_code == 200
        assert response.json()["username"] == "alice01"
