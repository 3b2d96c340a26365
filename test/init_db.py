from sqlmodel import Session, SQLModel

from app.db.session import engine
from app.db.seed import DEFAULT_FLIGHTS, DEFAULT_PASSWORD, seed_flights, seed_users
from app.db.users import Role

TEST_PASSWORD = DEFAULT_PASSWORD

TEST_USERS = [
    ("Admin User", "admin@example.com", Role.ADMIN),
    ("Test User", "user@example.com", Role.USER),
    ("Traveler", "traveler@example.com", Role.USER),
    ("Owner One", "owner@example.com", Role.FLIGHT_OWNER),
    ("Owner Two", "owner2@example.com", Role.FLIGHT_OWNER),
]


def reset_test_db():
    """Drop and recreate every table, then seed users and flights"""
    SQLModel.metadata.drop_all(engine)
    SQLModel.metadata.create_all(engine)

    with Session(engine) as session:
        seed_users(session, TEST_USERS, TEST_PASSWORD)
        seed_flights(session, DEFAULT_FLIGHTS)
