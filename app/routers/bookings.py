from fastapi import APIRouter

from ..auth.token import AdminInfo, CustomerInfo, StaffInfo, UserInfo
from ..db.api_responses import BookingDetailsResponse
from ..db.bookings import (
    BookingData,
    CreateBookingRequest,
    CreateBookingResponse,
    DeleteBookingResponse,
    StatusChangeResponse,
)
from ..db.session import SessionDep
from ..services.booking import (
    create_booking,
    get_all_bookings,
    get_booked_seats,
    get_booking_details,
    get_user_bookings,
    hard_delete_booking,
)
from ..services.booking_status import request_cancellation

router = APIRouter(prefix="/api/bookings", tags=["bookings"])


@router.post("")
def create_booking_endpoint(
    request: CreateBookingRequest, session: SessionDep, user_info: UserInfo
) -> CreateBookingResponse:
    return create_booking(user_info["id"], request, session)


@router.get("")
def get_my_bookings_endpoint(
    session: SessionDep, user_info: CustomerInfo
) -> list[BookingData]:
    return get_user_bookings(user_info["id"], session)


@router.get("/all")
def get_all_bookings_endpoint(session: SessionDep, user_info: StaffInfo) -> list[BookingData]:
    del user_info
    return get_all_bookings(session)


@router.get("/flight/{flight_id}/seats")
def get_booked_seats_endpoint(flight_id: int, session: SessionDep) -> list[str]:
    return get_booked_seats(flight_id, session)


@router.get("/details/{booking_id}")
def get_booking_details_endpoint(
    booking_id: int, session: SessionDep, user_info: UserInfo
) -> BookingDetailsResponse:
    return get_booking_details(booking_id, user_info, session)


@router.put("/{booking_id}/request-cancel")
def request_cancel_endpoint(
    booking_id: int, session: SessionDep, user_info: UserInfo
) -> StatusChangeResponse:
    return request_cancellation(booking_id, user_info, session)


@router.delete("/{booking_id}")
def hard_delete_booking_endpoint(
    booking_id: int, session: SessionDep, user_info: AdminInfo
) -> DeleteBookingResponse:
    del user_info
    return hard_delete_booking(booking_id, session)
