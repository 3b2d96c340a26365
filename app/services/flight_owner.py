from fastapi import HTTPException
from sqlmodel import Session, select

from .. import config
from ..auth.token import is_admin
from ..db.api_responses import OwnerBookingData
from ..db.bookings import Booking, booking_data
from ..db.flights import (
    Flight,
    FlightDetail,
    FlightDetailData,
    FlightDetailRequest,
    FlightOwner,
    as_utc,
)
from ..db.users import User, UserSummary

logger = config.get_logger(__name__)


def _owner_for_user(user_id: int, session: Session) -> FlightOwner | None:
    return session.exec(select(FlightOwner).where(FlightOwner.user_id == user_id)).first()


def get_or_create_owner(user_id: int, session: Session) -> FlightOwner:
    """Return the owner record of a user, creating it on first use"""
    owner = _owner_for_user(user_id, session)
    if owner:
        return owner

    user = session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")

    owner = FlightOwner(user_id=user_id, airline_name=f"{user.name} Airlines")
    session.add(owner)
    session.flush()
    logger.info("Flight owner record %s created for user %s", owner.id, user_id)
    return owner


def _detail_data(detail: FlightDetail, flight: Flight | None) -> FlightDetailData:
    return FlightDetailData(
        flightDetailId=detail.id,
        flightId=detail.flight_id,
        flightOwnerId=detail.flight_owner_id,
        flightName=detail.flight_name,
        baggageInfo=detail.baggage_info,
        numberOfSeats=detail.number_of_seats,
        departureTime=detail.departure_time,
        arrivalTime=detail.arrival_time,
        fare=detail.fare,
        createdAt=detail.created_at,
        flightRoute=f"{flight.origin} → {flight.destination}" if flight else None,
        flightPrice=flight.price if flight else None,
    )


def get_owner_flight_details(user_id: int, session: Session) -> list[FlightDetailData]:
    owner = _owner_for_user(user_id, session)
    if not owner:
        return []

    rows = session.exec(
        select(FlightDetail, Flight)
        .join(Flight, Flight.id == FlightDetail.flight_id)
        .where(FlightDetail.flight_owner_id == owner.id)
        .order_by(FlightDetail.id)
    ).all()
    return [_detail_data(detail, flight) for detail, flight in rows]


def create_flight_detail(
    user_id: int, request: FlightDetailRequest, session: Session
) -> FlightDetailData:
    flight = session.get(Flight, request.flightId)
    if not flight:
        raise HTTPException(status_code=404, detail="Flight not found")

    owner = get_or_create_owner(user_id, session)
    detail = FlightDetail(
        flight_id=flight.id,
        flight_owner_id=owner.id,
        flight_name=request.flightName,
        baggage_info=request.baggageInfo,
        number_of_seats=request.numberOfSeats,
        departure_time=as_utc(request.departureTime),
        arrival_time=as_utc(request.arrivalTime),
        fare=request.fare,
    )
    session.add(detail)
    session.commit()
    session.refresh(detail)
    logger.info("Flight detail %s added to flight %s by owner %s", detail.id, flight.id, owner.id)
    return _detail_data(detail, flight)


def _detail_for_editing(detail_id: int, user_info: dict, session: Session) -> FlightDetail:
    detail = session.get(FlightDetail, detail_id)
    if not detail:
        raise HTTPException(status_code=404, detail="Flight detail not found")
    if not is_admin(user_info):
        owner = _owner_for_user(user_info["id"], session)
        if not owner or owner.id != detail.flight_owner_id:
            raise HTTPException(
                status_code=403, detail="You can only manage your own flight details"
            )
    return detail


def update_flight_detail(
    detail_id: int, request: FlightDetailRequest, user_info: dict, session: Session
) -> FlightDetailData:
    detail = _detail_for_editing(detail_id, user_info, session)

    flight = session.get(Flight, request.flightId)
    if not flight:
        raise HTTPException(status_code=404, detail="Flight not found")

    detail.flight_id = request.flightId
    detail.flight_name = request.flightName
    detail.baggage_info = request.baggageInfo
    detail.number_of_seats = request.numberOfSeats
    detail.departure_time = as_utc(request.departureTime)
    detail.arrival_time = as_utc(request.arrivalTime)
    detail.fare = request.fare
    session.add(detail)
    session.commit()
    session.refresh(detail)
    return _detail_data(detail, flight)


def delete_flight_detail(detail_id: int, user_info: dict, session: Session):
    detail = _detail_for_editing(detail_id, user_info, session)
    session.delete(detail)
    session.commit()
    logger.info("Flight detail %s deleted", detail_id)
    return {"message": "Flight detail deleted successfully"}


def get_owner_bookings(user_id: int, session: Session) -> list[OwnerBookingData]:
    """Bookings on every flight the owner has attached a detail to"""
    owner = _owner_for_user(user_id, session)
    if not owner:
        return []

    details = session.exec(
        select(FlightDetail)
        .where(FlightDetail.flight_owner_id == owner.id)
        .order_by(FlightDetail.id)
    ).all()
    flight_names: dict[int, str] = {}
    for detail in details:
        flight_names.setdefault(detail.flight_id, detail.flight_name)
    if not flight_names:
        return []

    rows = session.exec(
        select(Booking, User)
        .join(User, User.id == Booking.user_id, isouter=True)
        .where(Booking.flight_id.in_(list(flight_names)))
        .order_by(Booking.id)
    ).all()

    result = []
    for booking, user in rows:
        data = booking_data(
            booking,
            user=UserSummary(id=user.id, name=user.name, email=user.email) if user else None,
        )
        result.append(
            OwnerBookingData(**data.model_dump(), flightName=flight_names[booking.flight_id])
        )
    return result
