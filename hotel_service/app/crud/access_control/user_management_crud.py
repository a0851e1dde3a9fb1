from uuid import UUID
from sqlalchemy import func, or_
from sqlalchemy.orm import Session, joinedload

from shared.core.auth import resolve_target_hotel
from shared.core.schemas import UserToken
from shared.helpers.json_response_helper import error_response, forbidden, not_found
from shared.models.hotels import Hotel
from shared.models.users import Users
from shared.utils.app_status_code import AppStatusCode
from shared.utils.enums import ADMIN_ROLES, UserRole
from ...schemas.access_control.user_management_schemas import (
    UserCreate, UserOut, UserRequest, UserUpdate
)


def _email_in_use(db: Session, email: str, exclude_id: UUID = None) -> bool:
    query = db.query(Users.id).filter(func.lower(Users.email) == email.lower())
    if exclude_id:
        query = query.filter(Users.id != exclude_id)
    return query.first() is not None


def _duplicate_email():
    return error_response(
        message="Email already in use",
        status_code=str(AppStatusCode.DUPLICATE_ADD_ERROR),
        http_status=400
    )


def _ensure_hotel_exists(db: Session, hotel_id: UUID):
    if not db.query(Hotel.id).filter(Hotel.id == hotel_id).first():
        return not_found("Hotel")


def _is_super_admin(user: UserToken) -> bool:
    return user.role == UserRole.SUPER_ADMIN


def get_user_or_404(db: Session, current_user: UserToken, user_id: UUID) -> Users:
    user = (
        db.query(Users)
        .options(joinedload(Users.hotel))
        .filter(Users.id == user_id, Users.is_deleted == False)
        .first()
    )
    if not user:
        return not_found("User")

    # HOTEL_ADMIN only manages users of its own hotel
    if not _is_super_admin(current_user) and user.hotel_id != current_user.hotel_id:
        return forbidden()
    return user


def get_users(db: Session, current_user: UserToken, params: UserRequest):
    user_query = db.query(Users).filter(Users.is_deleted == False)

    if _is_super_admin(current_user):
        if params.hotel_id:
            user_query = user_query.filter(Users.hotel_id == params.hotel_id)
    else:
        user_query = user_query.filter(Users.hotel_id == current_user.hotel_id)

    if params.role and params.role.lower() != "all":
        user_query = user_query.filter(Users.role == params.role.upper())

    if params.search:
        search_term = f"%{params.search}%"
        user_query = user_query.filter(
            or_(
                Users.first_name.ilike(search_term),
                Users.last_name.ilike(search_term),
                Users.email.ilike(search_term)
            )
        )

    total = user_query.with_entities(func.count(Users.id)).scalar()
    users = (
        user_query
        .options(joinedload(Users.hotel))
        .order_by(Users.created_at.desc())
        .offset(params.skip)
        .limit(params.limit)
        .all()
    )

    return {
        "users": [UserOut.model_validate(u) for u in users],
        "total": total
    }


def get_user(db: Session, current_user: UserToken, user_id: UUID):
    return UserOut.model_validate(get_user_or_404(db, current_user, user_id))


def create_user(db: Session, current_user: UserToken, user: UserCreate):
    if not _is_super_admin(current_user) and user.role in ADMIN_ROLES:
        return forbidden("Cannot create admin users")

    email = user.email.lower()
    if _email_in_use(db, email):
        return _duplicate_email()

    if user.role == UserRole.SUPER_ADMIN:
        hotel_id = None
    else:
        hotel_id = resolve_target_hotel(current_user, user.hotel_id)
        _ensure_hotel_exists(db, hotel_id)

    db_user = Users(
        email=email,
        first_name=user.first_name,
        last_name=user.last_name,
        phone=user.phone,
        role=user.role.value,
        hotel_id=hotel_id,
        is_active=True,
    )
    db_user.set_password(user.password)
    db.add(db_user)
    db.commit()
    db.refresh(db_user)
    return UserOut.model_validate(db_user)


def update_user(db: Session, current_user: UserToken, user_id: UUID, user: UserUpdate):
    db_user = get_user_or_404(db, current_user, user_id)
    update_data = user.model_dump(exclude_unset=True, exclude_none=True)

    if not _is_super_admin(current_user):
        if "role" in update_data and update_data["role"] in ADMIN_ROLES:
            return forbidden("Cannot assign admin roles")
        if "role" in update_data and UserRole(db_user.role) in ADMIN_ROLES \
                and update_data["role"] != UserRole(db_user.role):
            return forbidden("Cannot revoke admin roles")
        # moving users across hotels is a chain-level decision
        update_data.pop("hotel_id", None)

    if "email" in update_data:
        update_data["email"] = update_data["email"].lower()
        if update_data["email"] != db_user.email and _email_in_use(db, update_data["email"], db_user.id):
            return _duplicate_email()

    password = update_data.pop("password", None)
    if password:
        db_user.set_password(password)

    if "role" in update_data:
        update_data["role"] = UserRole(update_data["role"]).value

    role = update_data.get("role", db_user.role)
    if role == UserRole.SUPER_ADMIN.value:
        update_data["hotel_id"] = None
    elif "hotel_id" in update_data:
        _ensure_hotel_exists(db, update_data["hotel_id"])

    for key, value in update_data.items():
        setattr(db_user, key, value)

    db.commit()
    db.refresh(db_user)
    return UserOut.model_validate(db_user)


def delete_user(db: Session, current_user: UserToken, user_id: UUID):
    if str(user_id) == str(current_user.user_id):
        return error_response(
            message="Cannot delete your own account",
            status_code=str(AppStatusCode.OPERATION_ERROR),
            http_status=400
        )

    db_user = get_user_or_404(db, current_user, user_id)

    if not _is_super_admin(current_user) and UserRole(db_user.role) in ADMIN_ROLES:
        return forbidden("Cannot delete admin users")

    # soft delete, the user stays referenced by reservations and ledger entries
    db_user.is_deleted = True
    db_user.is_active = False
    db.commit()
    return {"message": "User deleted successfully"}
