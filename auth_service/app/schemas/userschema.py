from pydantic import BaseModel
from typing import List, Optional
from datetime import datetime

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties


class UserBase(BaseModel):
    id: int
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True  # allows Pydantic to work with SQLAlchemy objects


# For reading a user (response model)
class UserRead(UserBase):
    status: Optional[str] = None
    created_at: Optional[datetime] = None


class UserListResponse(BaseModel):
    users: List[UserRead]


class UserSignup(EmptyStringModel):
    name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    role: Optional[str] = None


class UserSignin(EmptyStringModel):
    email: Optional[str] = None
    password: Optional[str] = None


class SignupResponse(BaseModel):
    id: int
    role: str


class SigninResponse(BaseModel):
    token: str
    data: UserBase


class ChangePasswordRequest(EmptyStringModel):
    userId: Optional[int] = None
    newPassword: Optional[str] = None


class UserStatusResponse(BaseModel):
    id: int
    status: str
