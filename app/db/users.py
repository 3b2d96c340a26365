from enum import Enum
from typing import Optional

from passlib.context import CryptContext
from sqlmodel import Field, SQLModel

from .. import config

pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=config.BCRYPT_ROUNDS
)

MIN_PASSWORD_LENGTH = 6


class Role(str, Enum):
    USER = "User"
    ADMIN = "Admin"
    FLIGHT_OWNER = "Flightowner"


ROLE_NAMES = [role.value for role in Role]


def hash_password(plain_password: str) -> str:
    return pwd_context.hash(plain_password)


class User(SQLModel, table=True):
    """Database model for User accounts"""
    __tablename__ = "users"

    id: Optional[int] = Field(default=None, primary_key=True)
    name: str = Field(max_length=100, nullable=False)
    email: str = Field(
        max_length=255, unique=True, index=True, description="User's email address"
    )
    password_hash: str = Field(nullable=False, description="Hashed password")
    role: str = Field(default=Role.USER.value, max_length=50, nullable=False)

    def verify_password(self, plain_password: str) -> bool:
        """Verify a plain password against the stored hash"""
        return pwd_context.verify(plain_password, self.password_hash)


class OpenUser(SQLModel):
    id: int
    name: str
    email: str
    role: str


class UserSummary(SQLModel):
    id: int
    name: str
    email: str


class RegisterRequest(SQLModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None


class LoginRequest(SQLModel):
    email: str
    password: str


class UpdateUserRequest(SQLModel):
    name: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    password: Optional[str] = None


class UpdateRoleRequest(SQLModel):
    role: str = ""


def open_user(user: User) -> OpenUser:
    return OpenUser(id=user.id, name=user.name, email=user.email, role=user.role)
