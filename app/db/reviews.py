from typing import Optional
import datetime as dt

from sqlmodel import CheckConstraint, Field, SQLModel


class Review(SQLModel, table=True):
    __tablename__ = "reviews"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, foreign_key="users.id")
    flight_id: int = Field(nullable=False, foreign_key="flights.id", index=True)
    rating: int = Field(nullable=False)
    comment: Optional[str] = Field(default=None, max_length=1000)
    submitted_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc)
    )

    __table_args__ = (CheckConstraint("rating between 1 and 5"),)


class ReviewRequest(SQLModel):
    flightId: int
    rating: int = Field(ge=1, le=5)
    comment: Optional[str] = Field(default=None, max_length=1000)


class ReviewData(SQLModel):
    id: int
    flightId: int
    userId: int
    rating: int
    comment: Optional[str]
    submittedAt: dt.datetime
    reviewer: Optional[str] = None


def review_data(review: Review, reviewer: Optional[str] = None) -> ReviewData:
    return ReviewData(
        id=review.id,
        flightId=review.flight_id,
        userId=review.user_id,
        rating=review.rating,
        comment=review.comment,
        submittedAt=review.submitted_at,
        reviewer=reviewer,
    )
