from enum import Enum
from typing import Optional
import datetime as dt

from sqlmodel import CheckConstraint, Column, Field, SQLModel, String

from .flights import DEFAULT_AIRLINE_NAME, FlightData, utc_now
from .users import UserSummary


class BookingStatus(str, Enum):
    CONFIRMED = "Confirmed"
    PENDING = "Pending"
    CANCELLED = "Cancelled"
    REQUESTED_TO_CANCEL = "RequestedToCancel"
    REFUNDED = "Refunded"


# Legal moves of the cancellation/refund workflow
TRANSITIONS: dict[BookingStatus, frozenset[BookingStatus]] = {
    BookingStatus.CONFIRMED: frozenset({BookingStatus.REQUESTED_TO_CANCEL}),
    BookingStatus.PENDING: frozenset({BookingStatus.REQUESTED_TO_CANCEL}),
    BookingStatus.REQUESTED_TO_CANCEL: frozenset(
        {BookingStatus.REFUNDED, BookingStatus.CONFIRMED}
    ),
    BookingStatus.CANCELLED: frozenset(),
    BookingStatus.REFUNDED: frozenset({BookingStatus.REQUESTED_TO_CANCEL}),
}

# Statuses an admin may set directly, without an adjacency check
ADMIN_ASSIGNABLE: tuple[BookingStatus, ...] = (
    BookingStatus.CONFIRMED,
    BookingStatus.CANCELLED,
    BookingStatus.PENDING,
    BookingStatus.REFUNDED,
)

# Bookings in these statuses no longer hold their seats
RELEASED_STATUSES = frozenset({BookingStatus.CANCELLED, BookingStatus.REFUNDED})


def can_transition(current: str, target: BookingStatus) -> bool:
    try:
        current_status = BookingStatus(current)
    except ValueError:
        return False
    return target in TRANSITIONS[current_status]


def parse_seats(seat_string: Optional[str]) -> list[str]:
    """Split a comma-separated seat list such as '7A, 8B' into trimmed codes."""
    if not seat_string:
        return []
    return [seat.strip() for seat in seat_string.split(",") if seat.strip()]


def find_conflicts(requested: list[str], occupied: set[str]) -> list[str]:
    """Return the requested seats that are already taken, in request order."""
    conflicts = []
    for seat in requested:
        if seat in occupied and seat not in conflicts:
            conflicts.append(seat)
    return conflicts


class Booking(SQLModel, table=True):
    __tablename__ = "bookings"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, foreign_key="users.id", index=True)
    flight_id: int = Field(nullable=False, foreign_key="flights.id", index=True)
    flight: Optional[str] = Field(default=DEFAULT_AIRLINE_NAME, max_length=100)
    route: str = Field(max_length=255, nullable=False)
    selected_seats: Optional[str] = Field(default=None, max_length=255)
    passengers: int = Field(nullable=False)
    total_amount: float = Field(nullable=False)
    ticket_type: str = Field(default="Economy", max_length=50, nullable=False)
    ticket_booking_date: dt.date = Field(default_factory=dt.date.today)
    ticket_booking_time: dt.time = Field(
        default_factory=lambda: dt.datetime.now().time().replace(microsecond=0)
    )
    departure_time: dt.datetime = Field(nullable=False)
    arrival_time: dt.datetime = Field(nullable=False)
    status: str = Field(
        sa_column=Column(
            String(50), nullable=False, default=BookingStatus.CONFIRMED.value
        ),
        default=BookingStatus.CONFIRMED.value,
    )
    created_at: dt.datetime = Field(default_factory=utc_now)
    updated_at: Optional[dt.datetime] = Field(default=None)

    __table_args__ = (
        CheckConstraint(
            "status in ('Confirmed', 'Pending', 'Cancelled', 'RequestedToCancel', 'Refunded')"
        ),
    )


class CreateBookingRequest(SQLModel):
    flightId: int
    flight: Optional[str] = Field(default=None, max_length=100)
    route: str = Field(min_length=1, max_length=255)
    selectedSeats: Optional[str] = Field(default=None, max_length=255)
    passengers: int = Field(ge=1, le=10)
    totalAmount: float = Field(gt=0)
    ticketType: str = Field(default="Economy", min_length=1, max_length=50)
    departureTime: dt.datetime
    arrivalTime: dt.datetime


class CreateBookingResponse(SQLModel):
    bookingId: int
    message: str
    selectedSeats: Optional[str]
    totalAmount: float
    status: str


class BookingData(SQLModel):
    bookingId: int
    userId: int
    flightId: int
    flight: Optional[str]
    route: str
    selectedSeats: Optional[str]
    passengers: int
    totalAmount: float
    ticketType: str
    ticketBookingDate: dt.date
    ticketBookingTime: str
    departureTime: dt.datetime
    arrivalTime: dt.datetime
    status: str
    createdAt: dt.datetime
    updatedAt: Optional[dt.datetime] = None
    flightDetails: Optional[FlightData] = None
    user: Optional[UserSummary] = None


class StatusChangeResponse(SQLModel):
    message: str
    bookingId: int
    status: str
    note: Optional[str] = None
    refundAmount: Optional[float] = None


class UpdateBookingStatusRequest(SQLModel):
    status: str = ""


class MessageResponse(SQLModel):
    message: str


class DeleteBookingResponse(SQLModel):
    message: str
    bookingId: int
    deletedPassengers: int


def booking_data(
    booking: Booking,
    flight: Optional[FlightData] = None,
    user: Optional[UserSummary] = None,
) -> BookingData:
    return BookingData(
        bookingId=booking.id,
        userId=booking.user_id,
        flightId=booking.flight_id,
        flight=booking.flight,
        route=booking.route,
        selectedSeats=booking.selected_seats,
        passengers=booking.passengers,
        totalAmount=booking.total_amount,
        ticketType=booking.ticket_type,
        ticketBookingDate=booking.ticket_booking_date,
        ticketBookingTime=booking.ticket_booking_time.strftime("%H:%M"),
        departureTime=booking.departure_time,
        arrivalTime=booking.arrival_time,
        status=booking.status,
        createdAt=booking.created_at,
        updatedAt=booking.updated_at,
        flightDetails=flight,
        user=user,
    )
