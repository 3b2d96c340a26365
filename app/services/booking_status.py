from fastapi import HTTPException
from sqlmodel import Session

from .. import config
from ..db.bookings import (
    ADMIN_ASSIGNABLE,
    Booking,
    BookingStatus,
    StatusChangeResponse,
    can_transition,
)
from ..db.flights import utc_now
from .booking import check_booking_owner, lock_booking

logger = config.get_logger(__name__)

NOT_REQUESTED_MESSAGE = "Booking is not in cancellation request status"


def _apply(booking: Booking, target: BookingStatus, session: Session, actor: int):
    previous = booking.status
    booking.status = target.value
    booking.updated_at = utc_now()
    session.add(booking)
    session.commit()
    session.refresh(booking)
    logger.info(
        "Booking %s status %s -> %s by user %s", booking.id, previous, target.value, actor
    )


def request_cancellation(
    booking_id: int, user_info: dict, session: Session
) -> StatusChangeResponse:
    booking = lock_booking(booking_id, session)
    check_booking_owner(booking, user_info, "cancel")

    if not can_transition(booking.status, BookingStatus.REQUESTED_TO_CANCEL):
        session.rollback()
        raise HTTPException(
            status_code=409, detail=f"Booking is already {booking.status.lower()}"
        )

    _apply(booking, BookingStatus.REQUESTED_TO_CANCEL, session, user_info["id"])
    return StatusChangeResponse(
        message="Cancellation request submitted successfully",
        bookingId=booking.id,
        status=booking.status,
        note="Flight owner will review your cancellation request and process the refund if approved.",
    )


def approve_refund(booking_id: int, user_info: dict, session: Session) -> StatusChangeResponse:
    booking = lock_booking(booking_id, session)
    if not can_transition(booking.status, BookingStatus.REFUNDED):
        session.rollback()
        raise HTTPException(status_code=409, detail=NOT_REQUESTED_MESSAGE)

    _apply(booking, BookingStatus.REFUNDED, session, user_info["id"])
    return StatusChangeResponse(
        message="Refund approved successfully",
        bookingId=booking.id,
        status=booking.status,
        refundAmount=booking.total_amount,
    )


def reject_refund(booking_id: int, user_info: dict, session: Session) -> StatusChangeResponse:
    booking = lock_booking(booking_id, session)
    if booking.status != BookingStatus.REQUESTED_TO_CANCEL.value:
        session.rollback()
        raise HTTPException(status_code=409, detail=NOT_REQUESTED_MESSAGE)

    _apply(booking, BookingStatus.CONFIRMED, session, user_info["id"])
    return StatusChangeResponse(
        message="Refund request rejected",
        bookingId=booking.id,
        status=booking.status,
    )


def set_status(
    booking_id: int, status: str, user_info: dict, session: Session
) -> StatusChangeResponse:
    """Admin override: any assignable status, no adjacency check"""
    allowed = [s.value for s in ADMIN_ASSIGNABLE]
    if status not in allowed:
        raise HTTPException(
            status_code=400,
            detail="Invalid status. Valid statuses are: " + ", ".join(allowed),
        )

    booking = lock_booking(booking_id, session)
    _apply(booking, BookingStatus(status), session, user_info["id"])
    return StatusChangeResponse(
        message="Booking status updated successfully",
        bookingId=booking.id,
        status=booking.status,
    )


def admin_cancel(booking_id: int, user_info: dict, session: Session) -> StatusChangeResponse:
    response = set_status(booking_id, BookingStatus.CANCELLED.value, user_info, session)
    response.message = "Booking cancelled successfully"
    return response
