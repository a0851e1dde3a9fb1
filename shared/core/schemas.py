
from pydantic import BaseModel
from typing import Generic, Optional, TypeVar
from uuid import UUID

from shared.utils.enums import UserRole
from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: UUID
    email: str
    name: Optional[str] = None
    role: UserRole
    hotel_id: Optional[UUID] = None
    exp: Optional[int] = None


class CommonQueryParams(EmptyStringModel):
    search: Optional[str] = None
    skip: Optional[int] = 0
    limit: Optional[int] = 100


class HotelRef(BaseModel):
    id: UUID
    name: str
    code: str

    model_config = {"from_attributes": True}


class JsonOutResult(EmptyStringModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
