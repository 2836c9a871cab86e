# PHM/backend/tests/conftest.py : shared fixtures

import sys
from pathlib import Path

# Adds the project root to PYTHONPATH
BASE_DIR = Path(__file__).parent.parent
sys.path.insert(0, str(BASE_DIR))

import pytest
from fastapi.testclient import TestClient
from phm.database import Database
from phm.main import create_app

TEST_DATABASE_URL = "sqlite://"
TEST_PASSWORD = "Test1234!"


@pytest.fixture
def client():
    """Test client over a fresh in-memory database (lifespan included)"""
    app = create_app(TEST_DATABASE_URL)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def database():
    database = Database(TEST_DATABASE_URL)
    database.create_tables()
    yield database
    database.close()


@pytest.fixture
def db_session(database):
    """One session for service-level tests"""
    session = database.session()
    yield session
    session.close()


@pytest.fixture
def make_user(client):
    """Register a user through the API, log in, return (user_id, auth headers)"""
    def _make_user(email, user_type="farmer", name="Test User"):
        response = client.post("/auth/register", json={
            "name": name,
            "email": email,
            "password": TEST_PASSWORD,
            "phone": "+250788000000",
            "location": "Kigali",
            "userType": user_type,
        })
        assert response.status_code == 201
        user_id = response.json()["userId"]

        login = client.post("/auth/login", json={"email": email, "password": TEST_PASSWORD})
        assert login.status_code == 200
        headers = {"Authorization": f"Bearer {login.json()['access_token']}"}
        return user_id, headers
    return _make_user
