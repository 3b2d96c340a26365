from fastapi import APIRouter, HTTPException

from ..auth.token import AdminInfo, StaffInfo
from ..db.api_responses import BookingDetailsResponse, FlightUpdateResponse, UserUpdateResponse
from ..db.bookings import (
    BookingData,
    DeleteBookingResponse,
    MessageResponse,
    StatusChangeResponse,
    UpdateBookingStatusRequest,
)
from ..db.flights import FlightData, FlightRequest
from ..db.session import SessionDep
from ..db.users import OpenUser, UpdateRoleRequest
from ..services.booking import get_all_bookings, get_booking_details, hard_delete_booking
from ..services.booking_status import admin_cancel, set_status
from ..services.flight import (
    create_flight,
    delete_flight,
    get_all_flights,
    get_flight,
    update_flight,
)
from ..services.user import delete_user, get_all_users, update_user_role

router = APIRouter(prefix="/api/admin", tags=["admin"])


# Flight management
@router.get("/flights")
def admin_get_flights_endpoint(session: SessionDep, user_info: AdminInfo) -> list[FlightData]:
    del user_info
    return get_all_flights(session)


@router.post("/flight", status_code=201)
def admin_create_flight_endpoint(
    request: FlightRequest, session: SessionDep, user_info: StaffInfo
) -> FlightData:
    del user_info
    return create_flight(request, session)


@router.get("/flight/{flight_id}")
def admin_get_flight_endpoint(
    flight_id: int, session: SessionDep, user_info: AdminInfo
) -> FlightData:
    del user_info
    return get_flight(flight_id, session)


@router.put("/flight/{flight_id}")
def admin_update_flight_endpoint(
    flight_id: int, request: FlightRequest, session: SessionDep, user_info: StaffInfo
) -> FlightUpdateResponse:
    del user_info
    if request.id is not None and request.id != flight_id:
        raise HTTPException(status_code=400, detail="Flight ID mismatch")
    return update_flight(flight_id, request, session)


@router.delete("/flight/{flight_id}")
def admin_delete_flight_endpoint(
    flight_id: int, session: SessionDep, user_info: StaffInfo
) -> MessageResponse:
    del user_info
    return delete_flight(flight_id, session)


# User management
@router.get("/users")
def admin_get_users_endpoint(session: SessionDep, user_info: AdminInfo) -> list[OpenUser]:
    del user_info
    return get_all_users(session)


@router.put("/user/{user_id}/role")
def admin_update_role_endpoint(
    user_id: int, request: UpdateRoleRequest, session: SessionDep, user_info: AdminInfo
) -> UserUpdateResponse:
    del user_info
    return update_user_role(user_id, request.role, session)


@router.delete("/user/{user_id}")
def admin_delete_user_endpoint(
    user_id: int, session: SessionDep, user_info: AdminInfo
) -> MessageResponse:
    return delete_user(user_id, user_info["id"], session)


# Booking management
@router.get("/bookings")
def admin_get_bookings_endpoint(session: SessionDep, user_info: AdminInfo) -> list[BookingData]:
    del user_info
    return get_all_bookings(session)


@router.get("/bookings/{booking_id}")
def admin_get_booking_endpoint(
    booking_id: int, session: SessionDep, user_info: AdminInfo
) -> BookingDetailsResponse:
    return get_booking_details(booking_id, user_info, session, check_owner=False)


@router.put("/bookings/{booking_id}/status")
def admin_update_status_endpoint(
    booking_id: int,
    request: UpdateBookingStatusRequest,
    session: SessionDep,
    user_info: AdminInfo,
) -> StatusChangeResponse:
    return set_status(booking_id, request.status, user_info, session)


@router.put("/booking/{booking_id}/cancel")
def admin_cancel_booking_endpoint(
    booking_id: int, session: SessionDep, user_info: AdminInfo
) -> StatusChangeResponse:
    return admin_cancel(booking_id, user_info, session)


@router.delete("/booking/{booking_id}")
def admin_delete_booking_endpoint(
    booking_id: int, session: SessionDep, user_info: AdminInfo
) -> DeleteBookingResponse:
    del user_info
    return hard_delete_booking(booking_id, session)
