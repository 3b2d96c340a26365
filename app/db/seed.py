from sqlmodel import Session, select

from .. import config
from .flights import Flight
from .users import Role, User, hash_password

logger = config.get_logger(__name__)

DEFAULT_PASSWORD = "password123"

DEFAULT_USERS = [
    ("Admin User", "admin@example.com", Role.ADMIN),
    ("Test User", "user@example.com", Role.USER),
]

DEFAULT_FLIGHTS = [
    ("NYC", "LAX", 299.99),
    ("LAX", "CHI", 199.99),
    ("CHI", "MIA", 249.99),
    ("NYC", "MIA", 279.99),
    ("LAX", "NYC", 319.99),
]


def database_has_data(session: Session) -> bool:
    """Check if database already contains users"""
    return session.exec(select(User)).first() is not None


def seed_users(session: Session, users=DEFAULT_USERS, password: str = DEFAULT_PASSWORD):
    for name, email, role in users:
        session.add(
            User(name=name, email=email, password_hash=hash_password(password), role=role.value)
        )
    session.commit()


def seed_flights(session: Session, flights=DEFAULT_FLIGHTS):
    for origin, destination, price in flights:
        session.add(Flight(origin=origin, destination=destination, price=price))
    session.commit()


def seed_database(session: Session):
    if database_has_data(session):
        return
    seed_users(session)
    seed_flights(session)
    logger.info("Seeded %s users and %s flights", len(DEFAULT_USERS), len(DEFAULT_FLIGHTS))
