from typing import Optional
import datetime as dt

from sqlmodel import Field, SQLModel

DEFAULT_AIRLINE_NAME = "SimplyFly Airlines"


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def as_utc(value: dt.datetime) -> dt.datetime:
    """Read a zone-less datetime as UTC and convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=dt.timezone.utc)
    return value.astimezone(dt.timezone.utc)


class Flight(SQLModel, table=True):
    __tablename__ = "flights"
    id: Optional[int] = Field(default=None, primary_key=True)
    origin: str = Field(max_length=10, nullable=False)
    destination: str = Field(max_length=10, nullable=False)
    price: float = Field(nullable=False)

    def __repr__(self):
        return f"id={self.id}, origin={self.origin}, destination={self.destination}, price={self.price}"


class FlightOwner(SQLModel, table=True):
    __tablename__ = "flight_owners"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, unique=True, foreign_key="users.id")
    airline_name: str = Field(max_length=100, nullable=False)
    created_at: dt.datetime = Field(default_factory=utc_now)


class FlightDetail(SQLModel, table=True):
    __tablename__ = "flight_details"
    id: Optional[int] = Field(default=None, primary_key=True)
    flight_id: int = Field(nullable=False, foreign_key="flights.id")
    flight_owner_id: int = Field(nullable=False, foreign_key="flight_owners.id")
    flight_name: str = Field(max_length=100, nullable=False)
    baggage_info: Optional[str] = Field(default=None, max_length=200)
    number_of_seats: int = Field(nullable=False)
    departure_time: dt.datetime = Field(nullable=False)
    arrival_time: dt.datetime = Field(nullable=False)
    fare: float = Field(nullable=False)
    created_at: dt.datetime = Field(default_factory=utc_now)


# Request bodies are loosely typed so the services can answer with one message
class FlightRequest(SQLModel):
    id: Optional[int] = None
    origin: Optional[str] = None
    destination: Optional[str] = None
    price: Optional[float] = None


class FlightData(SQLModel):
    id: int
    origin: str
    destination: str
    price: float


class FlightName(SQLModel):
    flightId: int
    flightName: str


class FlightDetailRequest(SQLModel):
    flightId: int
    flightName: str = Field(min_length=1, max_length=100)
    baggageInfo: Optional[str] = Field(default=None, max_length=200)
    numberOfSeats: int = Field(ge=1, le=1000)
    departureTime: dt.datetime
    arrivalTime: dt.datetime
    fare: float = Field(ge=0)


class FlightDetailData(SQLModel):
    flightDetailId: int
    flightId: int
    flightOwnerId: int
    flightName: str
    baggageInfo: Optional[str]
    numberOfSeats: int
    departureTime: dt.datetime
    arrivalTime: dt.datetime
    fare: float
    createdAt: dt.datetime
    flightRoute: Optional[str] = None
    flightPrice: Optional[float] = None


def flight_data(flight: Flight) -> FlightData:
    return FlightData(
        id=flight.id,
        origin=flight.origin,
        destination=flight.destination,
        price=flight.price,
    )
