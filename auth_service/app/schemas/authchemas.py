from datetime import datetime
from typing import Optional
from uuid import UUID
from pydantic import BaseModel, ConfigDict, EmailStr, Field

from shared.core.schemas import HotelRef
from shared.utils.enums import UserRole


# -------- Email & Password --------

class SignUpRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=6)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    phone: Optional[str] = None


class SignInRequest(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


# -------Common----------

class UserResponse(BaseModel):
    id: UUID
    email: str
    first_name: str
    last_name: str
    full_name: str
    phone: Optional[str] = None
    role: UserRole
    hotel_id: Optional[UUID] = None
    hotel: Optional[HotelRef] = None
    is_active: bool
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)


class AuthenticationResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserResponse
