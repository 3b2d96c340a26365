from fastapi import APIRouter

from ..auth.token import UserInfo
from ..db.passengers import (
    DeletePassengersResponse,
    PassengerData,
    SavePassengersRequest,
    SavePassengersResponse,
)
from ..db.session import SessionDep
from ..services.passenger import delete_passengers, get_passengers, save_passengers

router = APIRouter(prefix="/api/passenger", tags=["passengers"])


@router.post("/details")
def save_passengers_endpoint(
    request: SavePassengersRequest, session: SessionDep, user_info: UserInfo
) -> SavePassengersResponse:
    return save_passengers(request, user_info, session)


@router.get("/booking/{booking_id}")
def get_passengers_endpoint(
    booking_id: int, session: SessionDep, user_info: UserInfo
) -> list[PassengerData]:
    return get_passengers(booking_id, user_info, session)


@router.delete("/booking/{booking_id}")
def delete_passengers_endpoint(
    booking_id: int, session: SessionDep, user_info: UserInfo
) -> DeletePassengersResponse:
    return delete_passengers(booking_id, user_info, session)
