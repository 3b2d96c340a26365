from fastapi import APIRouter

from ..auth.token import AdminInfo, StaffInfo, UserInfo
from ..db.api_responses import AuthResponse, MeResponse, UserUpdateResponse
from ..db.bookings import MessageResponse
from ..db.session import SessionDep
from ..db.users import LoginRequest, OpenUser, RegisterRequest, UpdateUserRequest
from ..services.user import (
    delete_user,
    get_all_users,
    get_user,
    login_user,
    register_user,
    update_user,
)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post(
    "/register",
    summary="Create a new user account",
    responses={
        200: {"description": "User created and signed in"},
        400: {"description": "Missing name, email or password"},
        409: {"description": "Email already registered"},
    },
)
def register_endpoint(request: RegisterRequest, session: SessionDep) -> AuthResponse:
    """
    Create a User-role account from name, email and password
    """
    return register_user(request, session)


@router.post("/login")
def login_endpoint(request: LoginRequest, session: SessionDep) -> AuthResponse:
    """
    Authenticate user and return access token
    """
    return login_user(request, session)


@router.get("/me")
def me_endpoint(user_info: UserInfo) -> MeResponse:
    return MeResponse(
        id=user_info["id"],
        name=user_info.get("name"),
        email=user_info.get("email"),
        role=user_info.get("role"),
    )


@router.get("/users")
def get_users_endpoint(session: SessionDep, user_info: StaffInfo) -> list[OpenUser]:
    del user_info
    return get_all_users(session)


@router.get("/user/{user_id}")
def get_user_endpoint(user_id: int, session: SessionDep, user_info: AdminInfo) -> OpenUser:
    del user_info
    return get_user(user_id, session)


@router.put("/user/{user_id}")
def update_user_endpoint(
    user_id: int, request: UpdateUserRequest, session: SessionDep, user_info: AdminInfo
) -> UserUpdateResponse:
    del user_info
    return update_user(user_id, request, session)


@router.delete("/user/{user_id}")
def delete_user_endpoint(
    user_id: int, session: SessionDep, user_info: AdminInfo
) -> MessageResponse:
    return delete_user(user_id, user_info["id"], session)
