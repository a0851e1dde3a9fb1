import logging
from datetime import datetime, timedelta
from typing import Optional
from uuid import UUID
from fastapi import Depends, Request, Response, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import ValidationError
from sqlalchemy import false
from sqlalchemy.orm import Session

from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import ROLE_HIERARCHY, UserRole
from shared.core.config import settings
from shared.helpers.json_response_helper import error_response, forbidden
from shared.core.schemas import UserToken
from shared.core.database import get_db

logger = logging.getLogger(__name__)

# cookie is the primary carrier; bearer header is accepted for API clients
security = HTTPBearer(auto_error=False)


def create_access_token(data: dict):
    payload = data.copy()
    expires = datetime.utcnow() + timedelta(minutes=settings.JWT_EXPIRE_MINUTES)
    payload['exp'] = expires
    return jwt.encode(payload, settings.JWT_SECRET,
                      algorithm=settings.JWT_ALGORITHM)


def token_payload(user: Users) -> dict:
    return {
        "user_id": str(user.id),
        "email": user.email,
        "name": user.full_name,
        "role": user.role,
        "hotel_id": str(user.hotel_id) if user.hotel_id else None,
    }


def set_auth_cookie(response: Response, token: str):
    response.set_cookie(
        key=settings.AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite="lax",
        max_age=settings.JWT_EXPIRE_MINUTES * 60,
    )


def remove_auth_cookie(response: Response):
    response.delete_cookie(settings.AUTH_COOKIE_NAME)


def verify_token(token: str) -> UserToken:
    """Verify and decode a JWT token."""
    try:
        payload = jwt.decode(token, settings.JWT_SECRET,
                             algorithms=[settings.JWT_ALGORITHM])
    except JWTError:
        logger.warning("Rejected invalid or expired token")
        return error_response(
            message="Invalid or expired token",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_EXPIRED),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if not payload.get("user_id") or not payload.get("email"):
        return error_response(
            message="Invalid token structure",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    try:
        return UserToken(**payload)
    except ValidationError:
        return error_response(
            message="Invalid token structure",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )


def validate_current_token(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Session = Depends(get_db)
) -> UserToken:
    token = credentials.credentials if credentials else request.cookies.get(
        settings.AUTH_COOKIE_NAME)
    if not token:
        return error_response(
            message="Not authenticated",
            status_code=str(AppStatusCode.AUTHENTICATION_TOKEN_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    user_data = verify_token(token)

    user = db.query(Users).filter(
        Users.id == user_data.user_id,
        Users.is_deleted == False
    ).first()
    if not user:
        return error_response(
            message="User not found",
            status_code=str(AppStatusCode.AUTHENTICATION_USER_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if not user.is_active:
        return error_response(
            message="User is not active. Access denied",
            status_code=str(AppStatusCode.AUTHENTICATION_USER_INACTIVE),
            http_status=status.HTTP_403_FORBIDDEN
        )

    # the stored row wins over stale claims
    user_data.role = UserRole(user.role)
    user_data.hotel_id = user.hotel_id
    return user_data


def has_minimum_role(user: UserToken, minimum_role: UserRole) -> bool:
    return ROLE_HIERARCHY[UserRole(user.role)] >= ROLE_HIERARCHY[UserRole(minimum_role)]


def can_access_hotel(user: UserToken, hotel_id) -> bool:
    if user.role == UserRole.SUPER_ADMIN:
        return True
    return user.hotel_id is not None and hotel_id is not None and str(user.hotel_id) == str(hotel_id)


def require_role(minimum_role: UserRole):
    def role_checker(current_user: UserToken = Depends(validate_current_token)):
        if not has_minimum_role(current_user, minimum_role):
            return forbidden()
        return current_user
    return role_checker


def allow_super_admin(current_user: UserToken = Depends(validate_current_token)):
    if current_user.role != UserRole.SUPER_ADMIN:
        return forbidden()
    return current_user


def hotel_scope_filters(column, user: UserToken, hotel_id: Optional[UUID] = None):
    """Query filters restricting `column` to the hotels the user may read."""
    if user.role == UserRole.SUPER_ADMIN:
        return [column == hotel_id] if hotel_id else []
    if not user.hotel_id:
        return [false()]
    return [column == user.hotel_id]


def resolve_hotel_scope(user: UserToken, hotel_id: Optional[UUID] = None) -> Optional[UUID]:
    if user.role == UserRole.SUPER_ADMIN:
        return hotel_id
    return user.hotel_id


def resolve_target_hotel(user: UserToken, hotel_id: Optional[UUID] = None) -> UUID:
    """Hotel a write lands in: SUPER_ADMIN names it, everyone else uses their own."""
    target = hotel_id if user.role == UserRole.SUPER_ADMIN else user.hotel_id
    if not target:
        return error_response(
            message="Hotel ID is required",
            status_code=str(AppStatusCode.REQUIRED_VALIDATION_ERROR),
            http_status=400
        )
    if not can_access_hotel(user, target):
        return forbidden()
    return target
