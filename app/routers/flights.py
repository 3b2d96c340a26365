from typing import Optional

from fastapi import APIRouter

from ..auth.token import StaffInfo, UserInfo
from ..db.api_responses import FlightUpdateResponse
from ..db.bookings import MessageResponse
from ..db.flights import FlightData, FlightName, FlightRequest
from ..db.session import SessionDep
from ..services.flight import (
    create_flight,
    delete_flight,
    get_all_flights,
    get_flight,
    get_flight_names,
    search_flights,
    update_flight,
)

router = APIRouter(prefix="/api/flights", tags=["flights"])


@router.get("")
def get_flights_endpoint(session: SessionDep) -> list[FlightData]:
    return get_all_flights(session)


@router.get("/search")
def search_flights_endpoint(
    session: SessionDep,
    origin: Optional[str] = None,
    destination: Optional[str] = None,
    sortBy: Optional[str] = "price",
) -> list[FlightData]:
    return search_flights(origin, destination, sortBy, session)


@router.get("/names")
def get_flight_names_endpoint(session: SessionDep, user_info: UserInfo) -> list[FlightName]:
    del user_info
    return get_flight_names(session)


@router.get("/{flight_id}")
def get_flight_endpoint(flight_id: int, session: SessionDep) -> FlightData:
    return get_flight(flight_id, session)


@router.post("", status_code=201)
def create_flight_endpoint(
    request: FlightRequest, session: SessionDep, user_info: StaffInfo
) -> FlightData:
    del user_info
    return create_flight(request, session)


@router.put("/{flight_id}")
def update_flight_endpoint(
    flight_id: int, request: FlightRequest, session: SessionDep, user_info: StaffInfo
) -> FlightUpdateResponse:
    del user_info
    return update_flight(flight_id, request, session)


@router.delete("/{flight_id}")
def delete_flight_endpoint(
    flight_id: int, session: SessionDep, user_info: StaffInfo
) -> MessageResponse:
    del user_info
    return delete_flight(flight_id, session)
