from fastapi import HTTPException
from sqlmodel import Session, select

from .. import config
from ..db.bookings import Booking
from ..db.reviews import Review, ReviewData, ReviewRequest, review_data
from ..db.users import User
from .flight import get_flight_or_404

logger = config.get_logger(__name__)


def add_review(user_id: int, request: ReviewRequest, session: Session) -> ReviewData:
    """Store a rating for a flight the user has booked (any booking status)"""
    get_flight_or_404(request.flightId, session)

    booked = session.exec(
        select(Booking.id).where(
            Booking.user_id == user_id, Booking.flight_id == request.flightId
        )
    ).first()
    if booked is None:
        raise HTTPException(
            status_code=400, detail="You can only review flights you have booked."
        )

    review = Review(
        user_id=user_id,
        flight_id=request.flightId,
        rating=request.rating,
        comment=request.comment,
    )
    session.add(review)
    session.commit()
    session.refresh(review)
    logger.info("Review %s added by user %s for flight %s", review.id, user_id, review.flight_id)
    return review_data(review)


def _with_reviewers(reviews: list[Review], session: Session) -> list[ReviewData]:
    user_ids = {review.user_id for review in reviews}
    names = {}
    if user_ids:
        names = {
            user.id: user.name
            for user in session.exec(select(User).where(User.id.in_(user_ids))).all()
        }
    return [review_data(review, names.get(review.user_id)) for review in reviews]


def get_all_reviews(session: Session) -> list[ReviewData]:
    reviews = session.exec(select(Review).order_by(Review.id)).all()
    return _with_reviewers(reviews, session)


def get_review(review_id: int, session: Session) -> ReviewData:
    review = session.get(Review, review_id)
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    return _with_reviewers([review], session)[0]


def get_flight_reviews(flight_id: int, session: Session) -> list[ReviewData]:
    reviews = session.exec(
        select(Review).where(Review.flight_id == flight_id).order_by(Review.id)
    ).all()
    return _with_reviewers(reviews, session)


def delete_review(review_id: int, session: Session):
    review = session.get(Review, review_id)
    if not review:
        raise HTTPException(status_code=404, detail="Review not found")
    session.delete(review)
    session.commit()
    logger.info("Review %s deleted", review_id)
    return {"message": "Review deleted."}
