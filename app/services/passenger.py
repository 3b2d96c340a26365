from fastapi import HTTPException
from sqlalchemy import delete
from sqlmodel import Session, select

from .. import config
from ..db.passengers import (
    PASSPORT_PLACEHOLDER,
    SEAT_PLACEHOLDER,
    DeletePassengersResponse,
    PassengerData,
    PassengerDetail,
    PassengerRequest,
    SavePassengersRequest,
    SavePassengersResponse,
    passenger_data,
)
from .booking import check_booking_owner, get_booking_or_404

logger = config.get_logger(__name__)

# (request attribute, label used in messages, max length)
REQUIRED_TEXT_FIELDS = (
    ("firstName", "FirstName", 100),
    ("lastName", "LastName", 100),
)
TRAILING_TEXT_FIELDS = (
    ("gender", "Gender", 10),
    ("nationality", "Nationality", 100),
)
OPTIONAL_TEXT_FIELDS = (
    ("seatNo", "SeatNo", 10),
    ("passportNumber", "PassportNumber", 50),
)
MIN_AGE = 1
MAX_AGE = 120


def _passenger_error(index: int, problem: str) -> HTTPException:
    return HTTPException(
        status_code=400,
        detail={"message": f"Passenger {index}: {problem}", "passengerIndex": index},
    )


def _check_text(passenger: PassengerRequest, index: int, fields, required: bool):
    for attribute, label, max_length in fields:
        value = getattr(passenger, attribute)
        if required and (value is None or not value.strip()):
            raise _passenger_error(index, f"{label} is required")
        if value is not None and len(value) > max_length:
            raise _passenger_error(index, f"{label} must be at most {max_length} characters")


def validate_passenger(passenger: PassengerRequest, index: int):
    """Check one roster entry; ``index`` is its 1-based position in the batch"""
    _check_text(passenger, index, REQUIRED_TEXT_FIELDS, required=True)
    if passenger.age is None or not MIN_AGE <= passenger.age <= MAX_AGE:
        raise _passenger_error(index, "Invalid age")
    _check_text(passenger, index, TRAILING_TEXT_FIELDS, required=True)
    _check_text(passenger, index, OPTIONAL_TEXT_FIELDS, required=False)


def save_passengers(
    request: SavePassengersRequest, user_info: dict, session: Session
) -> SavePassengersResponse:
    """Validate the whole batch, then store it against the booking"""
    if request.bookingId is None or request.bookingId <= 0:
        raise HTTPException(status_code=400, detail="Invalid BookingId.")
    if not request.passengers:
        raise HTTPException(status_code=400, detail="No passenger data provided.")

    booking = get_booking_or_404(request.bookingId, session)
    check_booking_owner(booking, user_info, "add passengers to")

    for index, passenger in enumerate(request.passengers, start=1):
        validate_passenger(passenger, index)

    rows = [
        PassengerDetail(
            user_id=booking.user_id,
            booking_id=booking.id,
            seat_no=SEAT_PLACEHOLDER if p.seatNo is None else p.seatNo,
            first_name=p.firstName.strip(),
            last_name=p.lastName.strip(),
            age=p.age,
            gender=p.gender.strip(),
            passport_number=(
                PASSPORT_PLACEHOLDER if p.passportNumber is None else p.passportNumber
            ),
            nationality=p.nationality.strip(),
        )
        for p in request.passengers
    ]
    session.add_all(rows)
    session.commit()
    logger.info("Saved %s passengers for booking %s", len(rows), booking.id)

    return SavePassengersResponse(
        message="Passenger details saved successfully",
        bookingId=booking.id,
        passengerCount=len(rows),
    )


def get_passengers(booking_id: int, user_info: dict, session: Session) -> list[PassengerData]:
    booking = get_booking_or_404(booking_id, session)
    check_booking_owner(booking, user_info, "view passengers for")

    passengers = session.exec(
        select(PassengerDetail)
        .where(PassengerDetail.booking_id == booking_id)
        .order_by(PassengerDetail.created_at, PassengerDetail.id)
    ).all()
    return [passenger_data(p) for p in passengers]


def delete_passengers(
    booking_id: int, user_info: dict, session: Session
) -> DeletePassengersResponse:
    booking = get_booking_or_404(booking_id, session)
    check_booking_owner(booking, user_info, "delete passengers from")

    deleted = session.exec(
        delete(PassengerDetail).where(PassengerDetail.booking_id == booking_id)
    ).rowcount
    session.commit()
    logger.info("Deleted %s passengers of booking %s", deleted, booking_id)
    return DeletePassengersResponse(
        message="Passenger details deleted successfully", deletedCount=deleted
    )
