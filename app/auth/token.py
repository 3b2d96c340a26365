from datetime import timedelta, datetime, timezone
from typing import Annotated

from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
import jwt

from .. import config
from ..db.users import Role, User

logger = config.get_logger(__name__)

security = HTTPBearer(auto_error=False)


# JWT validation
def validate_jwt(token: str) -> dict:
    try:
        payload = jwt.decode(
            token,
            config.SECRET_KEY,
            algorithms=[config.ALGORITHM],
            options={"verify_exp": True},
        )
        return payload
    except jwt.ExpiredSignatureError:
        raise HTTPException(status_code=401, detail="Token expired")
    except jwt.PyJWTError as e:
        logger.warning("Invalid token: %s", e)
        raise HTTPException(status_code=401, detail="Invalid token")


def create_jwt(data: dict, expires_delta: timedelta | None = None) -> str:
    to_encode = data.copy()
    if expires_delta:
        expire = datetime.now(timezone.utc) + expires_delta
    else:
        expire = datetime.now(timezone.utc) + timedelta(minutes=config.TOKEN_LIFETIME)
    to_encode.update({"exp": expire})
    encoded_jwt = jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)
    return encoded_jwt


def create_user_token(user: User) -> str:
    """Issue a token carrying the subject id, email, role and display name"""
    return create_jwt(
        data={
            "sub": str(user.id),  # JWT subject identifier
            "id": user.id,
            "email": user.email,
            "role": user.role,
            "name": user.name,
        }
    )


def auth_dependency(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> dict:
    if credentials is None:
        raise HTTPException(401, "Not authenticated")
    payload = validate_jwt(credentials.credentials)
    if "id" not in payload:
        raise HTTPException(401, "User ID not found.")
    return payload


UserInfo = Annotated[dict, Depends(auth_dependency)]


def require_roles(*roles: Role):
    """Build a dependency admitting only callers whose role is in ``roles``"""
    allowed = {role.value for role in roles}

    def role_dependency(user_info: UserInfo) -> dict:
        if user_info.get("role") not in allowed:
            raise HTTPException(403, "You are not allowed to perform this action")
        return user_info

    return role_dependency


def is_admin(user_info: dict) -> bool:
    return user_info.get("role") == Role.ADMIN.value


AdminInfo = Annotated[dict, Depends(require_roles(Role.ADMIN))]
StaffInfo = Annotated[dict, Depends(require_roles(Role.ADMIN, Role.FLIGHT_OWNER))]
OwnerInfo = Annotated[dict, Depends(require_roles(Role.FLIGHT_OWNER))]
CustomerInfo = Annotated[dict, Depends(require_roles(Role.USER))]
