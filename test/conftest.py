import os

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["SECRET_KEY"] = "test-secret-key-with-enough-length-for-hs256"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SEED_DATABASE"] = "false"

from typing import Dict

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session, select

from app.main import app
from app.db.flights import Flight
from app.db.session import engine
from app.db.users import User
from init_db import TEST_PASSWORD, reset_test_db


@pytest.fixture(autouse=True)
def fresh_database():
    reset_test_db()
    yield


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


@pytest.fixture
def session():
    with Session(engine) as db:
        yield db


def login(client: TestClient, email: str, password: str = TEST_PASSWORD) -> Dict[str, str]:
    """Get authorization headers with valid token"""
    response = client.post("/api/auth/login", json={"email": email, "password": password})
    assert response.status_code == 200
    token = response.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def admin_headers(client):
    return login(client, "admin@example.com")


@pytest.fixture
def user_headers(client):
    return login(client, "user@example.com")


@pytest.fixture
def traveler_headers(client):
    return login(client, "traveler@example.com")


@pytest.fixture
def owner_headers(client):
    return login(client, "owner@example.com")


@pytest.fixture
def owner2_headers(client):
    return login(client, "owner2@example.com")


@pytest.fixture
def nyc_lax(session) -> Flight:
    return session.exec(
        select(Flight).where(Flight.origin == "NYC", Flight.destination == "LAX")
    ).one()


def user_id(session: Session, email: str) -> int:
    return session.exec(select(User).where(User.email == email)).one().id


def booking_payload(flight_id: int, seats: str | None = "7A,8B", **overrides) -> dict:
    payload = {
        "flightId": flight_id,
        "flight": "SimplyFly Airlines",
        "route": "NYC to LAX",
        "selectedSeats": seats,
        "passengers": 2,
        "totalAmount": 599.98,
        "ticketType": "Economy",
        "departureTime": "2026-11-20T08:00:00",
        "arrivalTime": "2026-11-20T11:30:00",
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def make_booking(client):
    """Create a booking and return its id"""

    def _make(headers, flight_id, seats="7A,8B", **overrides):
        response = client.post(
            "/api/bookings",
            json=booking_payload(flight_id, seats, **overrides),
            headers=headers,
        )
        assert response.status_code == 200, response.text
        return response.json()["bookingId"]

    return _make
