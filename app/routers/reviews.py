from fastapi import APIRouter

from ..auth.token import AdminInfo, CustomerInfo
from ..db.bookings import MessageResponse
from ..db.reviews import ReviewData, ReviewRequest
from ..db.session import SessionDep
from ..services.review import (
    add_review,
    delete_review,
    get_all_reviews,
    get_flight_reviews,
    get_review,
)

router = APIRouter(prefix="/api/reviews", tags=["reviews"])


@router.get("")
def get_reviews_endpoint(session: SessionDep) -> list[ReviewData]:
    return get_all_reviews(session)


@router.post("")
def add_review_endpoint(
    request: ReviewRequest, session: SessionDep, user_info: CustomerInfo
) -> ReviewData:
    return add_review(user_info["id"], request, session)


@router.get("/flight/{flight_id}")
def get_flight_reviews_endpoint(flight_id: int, session: SessionDep) -> list[ReviewData]:
    return get_flight_reviews(flight_id, session)


@router.get("/{review_id}")
def get_review_endpoint(review_id: int, session: SessionDep) -> ReviewData:
    return get_review(review_id, session)


@router.delete("/{review_id}")
def delete_review_endpoint(
    review_id: int, session: SessionDep, user_info: AdminInfo
) -> MessageResponse:
    del user_info
    return delete_review(review_id, session)
