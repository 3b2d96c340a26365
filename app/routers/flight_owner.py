from fastapi import APIRouter

from ..auth.token import OwnerInfo, StaffInfo
from ..db.api_responses import OwnerBookingData
from ..db.bookings import MessageResponse, StatusChangeResponse
from ..db.flights import FlightDetailData, FlightDetailRequest
from ..db.session import SessionDep
from ..services.booking_status import approve_refund, reject_refund
from ..services.flight_owner import (
    create_flight_detail,
    delete_flight_detail,
    get_owner_bookings,
    get_owner_flight_details,
    update_flight_detail,
)

router = APIRouter(prefix="/api/flightowner", tags=["flight owner"])


@router.get("/flight-details/{user_id}")
def get_flight_details_endpoint(
    user_id: int, session: SessionDep, user_info: StaffInfo
) -> list[FlightDetailData]:
    del user_info
    return get_owner_flight_details(user_id, session)


@router.post("/flight-details", status_code=201)
def create_flight_detail_endpoint(
    request: FlightDetailRequest, session: SessionDep, user_info: StaffInfo
) -> FlightDetailData:
    return create_flight_detail(user_info["id"], request, session)


@router.put("/flight-details/{detail_id}")
def update_flight_detail_endpoint(
    detail_id: int,
    request: FlightDetailRequest,
    session: SessionDep,
    user_info: StaffInfo,
) -> FlightDetailData:
    return update_flight_detail(detail_id, request, user_info, session)


@router.delete("/flight-details/{detail_id}")
def delete_flight_detail_endpoint(
    detail_id: int, session: SessionDep, user_info: StaffInfo
) -> MessageResponse:
    return delete_flight_detail(detail_id, user_info, session)


# Any Flightowner may decide on any refund request, owned flight or not
@router.put("/bookings/{booking_id}/approve-refund")
def approve_refund_endpoint(
    booking_id: int, session: SessionDep, user_info: OwnerInfo
) -> StatusChangeResponse:
    return approve_refund(booking_id, user_info, session)


@router.put("/bookings/{booking_id}/reject-refund")
def reject_refund_endpoint(
    booking_id: int, session: SessionDep, user_info: OwnerInfo
) -> StatusChangeResponse:
    return reject_refund(booking_id, user_info, session)


@router.get("/bookings/{user_id}")
def get_owner_bookings_endpoint(
    user_id: int, session: SessionDep, user_info: StaffInfo
) -> list[OwnerBookingData]:
    del user_info
    return get_owner_bookings(user_id, session)
