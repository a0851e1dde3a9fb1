import logging
from datetime import datetime, timezone
from fastapi import Response, status
from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from shared.core import auth
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, not_found
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import UserRole
from ..schemas import authchemas

logger = logging.getLogger(__name__)


def get_user_by_email(db: Session, email: str):
    return db.query(Users).filter(
        func.lower(Users.email) == email.lower(),
        Users.is_deleted == False
    ).first()


def _issue_credential(response: Response, user: Users) -> authchemas.AuthenticationResponse:
    token = auth.create_access_token(auth.token_payload(user))
    auth.set_auth_cookie(response, token)
    return authchemas.AuthenticationResponse(
        access_token=token,
        user=authchemas.UserResponse.model_validate(user)
    )


#### EMAIL / PASSWORD ###

def signup(db: Session, response: Response, req: authchemas.SignUpRequest):
    email = req.email.lower()
    if db.query(Users.id).filter(func.lower(Users.email) == email).first():
        return error_response(
            message="Email already in use",
            status_code=str(AppStatusCode.DUPLICATE_ADD_ERROR),
            http_status=status.HTTP_400_BAD_REQUEST
        )

    # the very first account bootstraps the chain
    is_first_user = db.query(func.count(Users.id)).scalar() == 0
    user = Users(
        email=email,
        first_name=req.first_name,
        last_name=req.last_name,
        phone=req.phone,
        role=(UserRole.SUPER_ADMIN if is_first_user else UserRole.STAFF).value,
        hotel_id=None,
        is_active=True,
    )
    user.set_password(req.password)
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User %s signed up as %s", user.email, user.role)
    return _issue_credential(response, user)


def signin(db: Session, response: Response, req: authchemas.SignInRequest):
    user = get_user_by_email(db, req.email)
    if not user or not user.verify_password(req.password):
        logger.warning("Failed sign-in for %s", req.email)
        return error_response(
            message="Invalid email or password",
            status_code=str(AppStatusCode.AUTHENTICATION_CREDENTIALS_INVALID),
            http_status=status.HTTP_401_UNAUTHORIZED
        )

    if not user.is_active:
        return error_response(
            message="User is not active. Access denied",
            status_code=str(AppStatusCode.AUTHENTICATION_USER_INACTIVE),
            http_status=status.HTTP_403_FORBIDDEN
        )

    user.last_login = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return _issue_credential(response, user)


def signout(response: Response):
    auth.remove_auth_cookie(response)
    return {"message": "Signed out successfully"}


def get_me(db: Session, current_user: UserToken):
    user = db.query(Users).options(joinedload(Users.hotel)).filter(
        Users.id == current_user.user_id).first()
    if not user:
        return not_found("User")
    return authchemas.UserResponse.model_validate(user)
