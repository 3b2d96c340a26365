from typing import Optional

from sqlmodel import SQLModel

from .bookings import BookingData
from .flights import FlightData
from .passengers import PassengerData
from .users import OpenUser


# - POST api/auth/register, POST api/auth/login
class Token(SQLModel):
    access_token: str
    token_type: str


class AuthResponse(Token):
    token: str
    message: str
    user: Optional[OpenUser] = None


# {
#   "access_token": "eyJhbGciOiJIUzI1NiIs...",
#   "token_type": "bearer",
#   "token": "eyJhbGciOiJIUzI1NiIs...",
#   "message": "Login successful"
# }


# - GET api/auth/me
class MeResponse(SQLModel):
    id: int
    name: Optional[str]
    email: Optional[str]
    role: Optional[str]


class UserUpdateResponse(SQLModel):
    message: str
    user: OpenUser


# - PUT api/flights/{id}
class FlightUpdateResponse(SQLModel):
    message: str
    flight: FlightData


# - GET api/bookings/details/{id}
class BookingDetailsResponse(SQLModel):
    booking: BookingData
    passengers: list[PassengerData]


# - GET api/flightowner/bookings/{userId}
class OwnerBookingData(BookingData):
    flightName: Optional[str] = None
