from typing import Optional
import datetime as dt

from sqlmodel import Field, SQLModel

SEAT_PLACEHOLDER = "1A"
PASSPORT_PLACEHOLDER = ""


class PassengerDetail(SQLModel, table=True):
    __tablename__ = "passenger_details"
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(nullable=False, foreign_key="users.id")
    booking_id: int = Field(nullable=False, foreign_key="bookings.id", index=True)
    seat_no: Optional[str] = Field(default=None, max_length=10)
    first_name: str = Field(max_length=100, nullable=False)
    last_name: str = Field(max_length=100, nullable=False)
    age: int = Field(nullable=False)
    gender: str = Field(max_length=10, nullable=False)
    passport_number: Optional[str] = Field(default=None, max_length=50)
    nationality: str = Field(max_length=100, nullable=False)
    created_at: dt.datetime = Field(
        default_factory=lambda: dt.datetime.now(dt.timezone.utc)
    )


# Every field is optional so that a bad entry is reported with its position
class PassengerRequest(SQLModel):
    seatNo: Optional[str] = None
    firstName: Optional[str] = None
    lastName: Optional[str] = None
    age: Optional[int] = None
    gender: Optional[str] = None
    passportNumber: Optional[str] = None
    nationality: Optional[str] = None


class SavePassengersRequest(SQLModel):
    bookingId: Optional[int] = None
    passengers: Optional[list[PassengerRequest]] = None


class SavePassengersResponse(SQLModel):
    message: str
    bookingId: int
    passengerCount: int


class PassengerData(SQLModel):
    passengerId: int
    bookingId: int
    seatNo: Optional[str]
    firstName: str
    lastName: str
    age: int
    gender: str
    passportNumber: Optional[str]
    nationality: str


class DeletePassengersResponse(SQLModel):
    message: str
    deletedCount: int


def passenger_data(passenger: PassengerDetail) -> PassengerData:
    return PassengerData(
        passengerId=passenger.id,
        bookingId=passenger.booking_id,
        seatNo=passenger.seat_no,
        firstName=passenger.first_name,
        lastName=passenger.last_name,
        age=passenger.age,
        gender=passenger.gender,
        passportNumber=passenger.passport_number,
        nationality=passenger.nationality,
    )
