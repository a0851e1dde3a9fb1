from uuid import UUID
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from shared.core.auth import require_role
from shared.core.database import get_db
from shared.core.schemas import UserToken
from shared.utils.enums import UserRole
from ...crud.access_control import user_management_crud as crud
from ...schemas.access_control.user_management_schemas import (
    UserCreate, UserListResponse, UserOut, UserRequest, UserUpdate
)

router = APIRouter(
    prefix="/api/users",
    tags=["User Management"],
    dependencies=[Depends(require_role(UserRole.HOTEL_ADMIN))]
)


@router.get("", response_model=UserListResponse)
def get_users(
    params: UserRequest = Depends(),
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.HOTEL_ADMIN))
):
    return crud.get_users(db, current_user, params)


@router.post("", response_model=UserOut)
def create_user(
    user: UserCreate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.HOTEL_ADMIN))
):
    return crud.create_user(db, current_user, user)


@router.get("/{user_id}", response_model=UserOut)
def get_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.HOTEL_ADMIN))
):
    return crud.get_user(db, current_user, user_id)


@router.put("/{user_id}", response_model=UserOut)
def update_user(
    user_id: UUID,
    user: UserUpdate,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.HOTEL_ADMIN))
):
    return crud.update_user(db, current_user, user_id, user)


@router.delete("/{user_id}")
def delete_user(
    user_id: UUID,
    db: Session = Depends(get_db),
    current_user: UserToken = Depends(require_role(UserRole.HOTEL_ADMIN))
):
    return crud.delete_user(db, current_user, user_id)
