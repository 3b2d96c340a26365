from fastapi import HTTPException
from sqlalchemy import delete, func
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session, select

from .. import config
from ..auth.token import create_user_token
from ..db.api_responses import AuthResponse, UserUpdateResponse
from ..db.bookings import Booking
from ..db.flights import FlightDetail, FlightOwner
from ..db.passengers import PassengerDetail
from ..db.reviews import Review
from ..db.users import (
    MIN_PASSWORD_LENGTH,
    ROLE_NAMES,
    LoginRequest,
    OpenUser,
    RegisterRequest,
    Role,
    UpdateUserRequest,
    User,
    hash_password,
    open_user,
)

logger = config.get_logger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def _find_by_email(email: str, session: Session) -> User | None:
    return session.exec(
        select(User).where(func.lower(User.email) == _normalize_email(email))
    ).first()


def _get_user_or_404(user_id: int, session: Session) -> User:
    user = session.get(User, user_id)
    if not user:
        raise HTTPException(status_code=404, detail="User not found")
    return user


def _check_password(password: str):
    if len(password) < MIN_PASSWORD_LENGTH:
        raise HTTPException(
            status_code=400,
            detail=f"Password must be at least {MIN_PASSWORD_LENGTH} characters long",
        )


def register_user(request: RegisterRequest, session: Session) -> AuthResponse:
    """Create a User-role account and sign it in"""
    if not request.name or not request.name.strip():
        raise HTTPException(status_code=400, detail="Name is required")
    if not request.email or not request.email.strip():
        raise HTTPException(status_code=400, detail="Email is required")
    if not request.password or not request.password.strip():
        raise HTTPException(status_code=400, detail="Password is required")
    _check_password(request.password)

    if _find_by_email(request.email, session):
        raise HTTPException(
            status_code=409, detail="User with this email already exists"
        )

    user = User(
        name=request.name.strip(),
        email=_normalize_email(request.email),
        password_hash=hash_password(request.password),
        role=Role.USER.value,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("Registered user %s (%s)", user.id, user.email)

    token = create_user_token(user)
    return AuthResponse(
        access_token=token,
        token_type="bearer",
        token=token,
        message="Registration successful",
        user=open_user(user),
    )


def login_user(request: LoginRequest, session: Session) -> AuthResponse:
    user = _find_by_email(request.email, session)
    if not user or not user.verify_password(request.password):
        raise HTTPException(
            status_code=401,
            detail="Invalid email or password.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    token = create_user_token(user)
    return AuthResponse(
        access_token=token, token_type="bearer", token=token, message="Login successful"
    )


def get_all_users(session: Session) -> list[OpenUser]:
    users = session.exec(select(User).order_by(User.id)).all()
    return [open_user(user) for user in users]


def get_user(user_id: int, session: Session) -> OpenUser:
    return open_user(_get_user_or_404(user_id, session))


def update_user(
    user_id: int, request: UpdateUserRequest, session: Session
) -> UserUpdateResponse:
    user = _get_user_or_404(user_id, session)

    if request.name and request.name.strip():
        user.name = request.name.strip()

    if request.email and request.email.strip():
        existing = _find_by_email(request.email, session)
        if existing and existing.id != user_id:
            raise HTTPException(
                status_code=409, detail="Email is already taken by another user"
            )
        user.email = _normalize_email(request.email)

    if request.role and request.role.strip():
        if request.role not in ROLE_NAMES:
            raise HTTPException(
                status_code=400,
                detail="Invalid role. Valid roles are: " + ", ".join(ROLE_NAMES),
            )
        user.role = request.role

    if request.password and request.password.strip():
        _check_password(request.password)
        user.password_hash = hash_password(request.password)

    session.add(user)
    session.commit()
    session.refresh(user)
    return UserUpdateResponse(message="User updated successfully", user=open_user(user))


def update_user_role(user_id: int, role: str, session: Session) -> UserUpdateResponse:
    user = _get_user_or_404(user_id, session)
    if not role or role not in ROLE_NAMES:
        raise HTTPException(
            status_code=400,
            detail="Invalid role. Valid roles are: " + ", ".join(ROLE_NAMES),
        )
    user.role = role
    session.add(user)
    session.commit()
    session.refresh(user)
    logger.info("User %s role changed to %s", user.id, role)
    return UserUpdateResponse(
        message="User role updated successfully", user=open_user(user)
    )


def delete_user(user_id: int, current_user_id: int, session: Session):
    """Delete a user with everything that hangs off the account"""
    user = _get_user_or_404(user_id, session)
    if user.id == current_user_id:
        raise HTTPException(status_code=400, detail="Cannot delete your own account")

    booking_ids = select(Booking.id).where(Booking.user_id == user_id)
    owner_ids = select(FlightOwner.id).where(FlightOwner.user_id == user_id)
    try:
        session.exec(
            delete(PassengerDetail).where(
                (PassengerDetail.user_id == user_id)
                | (PassengerDetail.booking_id.in_(booking_ids))
            )
        )
        session.exec(delete(Booking).where(Booking.user_id == user_id))
        session.exec(delete(Review).where(Review.user_id == user_id))
        session.exec(
            delete(FlightDetail).where(FlightDetail.flight_owner_id.in_(owner_ids))
        )
        session.exec(delete(FlightOwner).where(FlightOwner.user_id == user_id))
        session.delete(user)
        session.commit()
    except SQLAlchemyError:
        session.rollback()
        raise
    logger.info("User %s deleted by %s", user_id, current_user_id)
    return {"message": "User deleted successfully"}
