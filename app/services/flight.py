from fastapi import HTTPException
from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .. import config
from ..db.api_responses import FlightUpdateResponse
from ..db.bookings import Booking
from ..db.flights import (
    DEFAULT_AIRLINE_NAME,
    Flight,
    FlightData,
    FlightDetail,
    FlightName,
    FlightRequest,
    flight_data,
)
from ..db.reviews import Review

logger = config.get_logger(__name__)

REQUIRED_FIELDS_MESSAGE = "Origin, Destination, and Price are required fields"
MAX_CODE_LENGTH = 10

SORT_COLUMNS = {
    "price": Flight.price,
    "destination": Flight.destination,
    "origin": Flight.origin,
    "id": Flight.id,
}


def _validate_flight(origin: str | None, destination: str | None, price: float | None):
    if not origin or not origin.strip() or not destination or not destination.strip():
        raise HTTPException(status_code=400, detail=REQUIRED_FIELDS_MESSAGE)
    if price is None or price <= 0:
        raise HTTPException(status_code=400, detail=REQUIRED_FIELDS_MESSAGE)
    if len(origin.strip()) > MAX_CODE_LENGTH or len(destination.strip()) > MAX_CODE_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Origin and Destination must be at most {MAX_CODE_LENGTH} characters",
        )


def get_flight_or_404(flight_id: int, session: Session) -> Flight:
    flight = session.get(Flight, flight_id)
    if not flight:
        raise HTTPException(status_code=404, detail="Flight not found")
    return flight


def get_all_flights(session: Session) -> list[FlightData]:
    flights = session.exec(select(Flight).order_by(Flight.id)).all()
    return [flight_data(flight) for flight in flights]


def get_flight(flight_id: int, session: Session) -> FlightData:
    return flight_data(get_flight_or_404(flight_id, session))


def search_flights(
    origin: str | None,
    destination: str | None,
    sort_by: str | None,
    session: Session,
) -> list[FlightData]:
    """Case-insensitive substring search over origin and destination"""
    query = select(Flight)
    if origin and origin.strip():
        query = query.where(func.lower(Flight.origin).contains(origin.strip().lower()))
    if destination and destination.strip():
        query = query.where(
            func.lower(Flight.destination).contains(destination.strip().lower())
        )
    sort_column = SORT_COLUMNS.get((sort_by or "price").lower(), Flight.price)
    query = query.order_by(sort_column, Flight.id)
    return [flight_data(flight) for flight in session.exec(query).all()]


def get_flight_names(session: Session) -> list[FlightName]:
    """Name each flight after the airline recorded on its earliest booking"""
    flight_ids = session.exec(select(Flight.id).order_by(Flight.id)).all()
    bookings = session.exec(
        select(Booking.flight_id, Booking.flight)
        .where(Booking.flight.is_not(None), Booking.flight != "")
        .order_by(Booking.id)
    ).all()

    names: dict[int, str] = {}
    for booked_flight_id, name in bookings:
        names.setdefault(booked_flight_id, name)

    return [
        FlightName(flightId=flight_id, flightName=names.get(flight_id, DEFAULT_AIRLINE_NAME))
        for flight_id in flight_ids
    ]


def create_flight(request: FlightRequest, session: Session) -> FlightData:
    _validate_flight(request.origin, request.destination, request.price)

    flight = Flight(
        origin=request.origin.strip(),
        destination=request.destination.strip(),
        price=request.price,
    )
    session.add(flight)
    session.commit()
    session.refresh(flight)
    logger.info("Flight %s created: %s -> %s", flight.id, flight.origin, flight.destination)
    return flight_data(flight)


def update_flight(
    flight_id: int, request: FlightRequest, session: Session
) -> FlightUpdateResponse:
    """Update the editable fields; missing ones keep their stored value"""
    flight = get_flight_or_404(flight_id, session)

    origin = request.origin if request.origin is not None else flight.origin
    destination = (
        request.destination if request.destination is not None else flight.destination
    )
    price = request.price if request.price is not None else flight.price
    _validate_flight(origin, destination, price)

    flight.origin = origin.strip()
    flight.destination = destination.strip()
    flight.price = price
    session.add(flight)
    session.commit()
    session.refresh(flight)
    logger.info("Flight %s updated", flight_id)
    return FlightUpdateResponse(
        message="Flight updated successfully", flight=flight_data(flight)
    )


def delete_flight(flight_id: int, session: Session):
    flight = get_flight_or_404(flight_id, session)

    has_bookings = session.exec(
        select(Booking.id).where(Booking.flight_id == flight_id)
    ).first()
    if has_bookings is not None:
        logger.warning("Cannot delete flight %s - has existing bookings", flight_id)
        raise HTTPException(
            status_code=409, detail="Cannot delete flight with existing bookings"
        )

    try:
        session.exec(delete(FlightDetail).where(FlightDetail.flight_id == flight_id))
        session.exec(delete(Review).where(Review.flight_id == flight_id))
        session.delete(flight)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    logger.info("Flight %s deleted", flight_id)
    return {"message": "Flight deleted successfully"}
