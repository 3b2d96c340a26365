from fastapi import HTTPException
from sqlalchemy import delete
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .. import config
from ..auth.token import is_admin
from ..db.api_responses import BookingDetailsResponse
from ..db.bookings import (
    RELEASED_STATUSES,
    Booking,
    BookingData,
    BookingStatus,
    CreateBookingRequest,
    CreateBookingResponse,
    DeleteBookingResponse,
    booking_data,
    find_conflicts,
    parse_seats,
)
from ..db.flights import DEFAULT_AIRLINE_NAME, Flight, as_utc, flight_data
from ..db.passengers import PassengerDetail, passenger_data
from ..db.users import User, UserSummary

logger = config.get_logger(__name__)


def lock_flight(flight_id: int, session: Session) -> Flight | None:
    """Load a flight holding its row lock until the session commits"""
    return session.exec(
        select(Flight).where(Flight.id == flight_id).with_for_update()
    ).first()


def lock_booking(booking_id: int, session: Session) -> Booking:
    booking = session.exec(
        select(Booking).where(Booking.id == booking_id).with_for_update()
    ).first()
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


def get_booked_seats(flight_id: int, session: Session) -> list[str]:
    """Seats held by the active bookings of a flight"""
    seat_strings = session.exec(
        select(Booking.selected_seats).where(
            Booking.flight_id == flight_id,
            Booking.status.not_in([status.value for status in RELEASED_STATUSES]),
        ).order_by(Booking.id)
    ).all()

    seats: list[str] = []
    for seat_string in seat_strings:
        seats.extend(parse_seats(seat_string))
    return seats


def create_booking(
    user_id: int, request: CreateBookingRequest, session: Session
) -> CreateBookingResponse:
    """Reserve seats on a flight.

    The flight row stays locked from the occupancy read until the new
    booking is committed, so two requests for the same seat are serialized.
    An empty seat list skips the conflict check.
    """
    flight = lock_flight(request.flightId, session)
    if not flight:
        raise HTTPException(status_code=404, detail="Flight not found")

    requested_seats = parse_seats(request.selectedSeats)
    if requested_seats:
        occupied = set(get_booked_seats(flight.id, session))
        conflicts = find_conflicts(requested_seats, occupied)
        if conflicts:
            session.rollback()
            logger.warning(
                "Seat conflict on flight %s for user %s: %s",
                flight.id,
                user_id,
                ", ".join(conflicts),
            )
            raise HTTPException(
                status_code=409,
                detail={
                    "message": "The following seats are already booked: "
                    + ", ".join(conflicts),
                    "conflictingSeats": conflicts,
                },
            )

    booking = Booking(
        user_id=user_id,
        flight_id=flight.id,
        flight=request.flight or DEFAULT_AIRLINE_NAME,
        route=request.route,
        selected_seats=request.selectedSeats,
        passengers=request.passengers,
        total_amount=request.totalAmount,
        ticket_type=request.ticketType,
        departure_time=as_utc(request.departureTime),
        arrival_time=as_utc(request.arrivalTime),
        status=BookingStatus.CONFIRMED.value,
    )
    session.add(booking)
    session.commit()
    session.refresh(booking)
    logger.info(
        "Booking %s created for user %s on flight %s (seats: %s)",
        booking.id,
        user_id,
        flight.id,
        booking.selected_seats or "-",
    )

    return CreateBookingResponse(
        bookingId=booking.id,
        message="Booking created successfully",
        selectedSeats=booking.selected_seats,
        totalAmount=booking.total_amount,
        status=booking.status,
    )


def _flights_by_id(flight_ids: set[int], session: Session) -> dict:
    if not flight_ids:
        return {}
    flights = session.exec(select(Flight).where(Flight.id.in_(flight_ids))).all()
    return {flight.id: flight_data(flight) for flight in flights}


def _users_by_id(user_ids: set[int], session: Session) -> dict:
    if not user_ids:
        return {}
    users = session.exec(select(User).where(User.id.in_(user_ids))).all()
    return {
        user.id: UserSummary(id=user.id, name=user.name, email=user.email)
        for user in users
    }


def _booking_list(bookings: list[Booking], session: Session, with_users: bool):
    flights = _flights_by_id({b.flight_id for b in bookings}, session)
    users = _users_by_id({b.user_id for b in bookings}, session) if with_users else {}
    return [
        booking_data(
            booking,
            flight=flights.get(booking.flight_id),
            user=users.get(booking.user_id),
        )
        for booking in bookings
    ]


def get_user_bookings(user_id: int, session: Session) -> list[BookingData]:
    bookings = session.exec(
        select(Booking).where(Booking.user_id == user_id).order_by(Booking.id)
    ).all()
    return _booking_list(bookings, session, with_users=False)


def get_all_bookings(session: Session) -> list[BookingData]:
    bookings = session.exec(select(Booking).order_by(Booking.id)).all()
    return _booking_list(bookings, session, with_users=True)


def get_booking_or_404(booking_id: int, session: Session) -> Booking:
    booking = session.get(Booking, booking_id)
    if not booking:
        raise HTTPException(status_code=404, detail="Booking not found")
    return booking


def check_booking_owner(booking: Booking, user_info: dict, action: str):
    if booking.user_id != user_info["id"] and not is_admin(user_info):
        raise HTTPException(status_code=403, detail=f"You can only {action} your own bookings.")


def get_booking_details(
    booking_id: int, user_info: dict, session: Session, check_owner: bool = True
) -> BookingDetailsResponse:
    booking = get_booking_or_404(booking_id, session)
    if check_owner:
        check_booking_owner(booking, user_info, "view")

    flight = session.get(Flight, booking.flight_id)
    user = session.get(User, booking.user_id)
    passengers = session.exec(
        select(PassengerDetail)
        .where(PassengerDetail.booking_id == booking_id)
        .order_by(PassengerDetail.created_at, PassengerDetail.id)
    ).all()

    return BookingDetailsResponse(
        booking=booking_data(
            booking,
            flight=flight_data(flight) if flight else None,
            user=UserSummary(id=user.id, name=user.name, email=user.email) if user else None,
        ),
        passengers=[passenger_data(p) for p in passengers],
    )


def hard_delete_booking(booking_id: int, session: Session) -> DeleteBookingResponse:
    """Remove a booking and its passenger rows in one transaction"""
    try:
        passengers_deleted = session.exec(
            delete(PassengerDetail).where(PassengerDetail.booking_id == booking_id)
        ).rowcount
        bookings_deleted = session.exec(
            delete(Booking).where(Booking.id == booking_id)
        ).rowcount
        if not bookings_deleted:
            session.rollback()
            raise HTTPException(status_code=404, detail="Booking not found")
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        logger.exception("Hard delete of booking %s failed", booking_id)
        raise

    logger.info(
        "Booking %s permanently deleted with %s passenger records",
        booking_id,
        passengers_deleted,
    )
    return DeleteBookingResponse(
        message="Booking permanently deleted",
        bookingId=booking_id,
        deletedPassengers=passengers_deleted,
    )
