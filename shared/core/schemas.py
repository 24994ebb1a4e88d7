from pydantic import BaseModel
from typing import Generic, Optional, TypeVar, Union

from shared.wrappers.empty_string_model_wrapper import EmptyStringModel

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: int
    email: Optional[str] = None
    role: str
    status: Optional[str] = None
    exp: Optional[int] = None


class CommonQueryParams(EmptyStringModel):
    search: Optional[str] = None
    page: int = 1
    limit: int = 20


class Lookup(BaseModel):
    id: Union[int, str]
    value: str

    class Config:
        from_attributes = True


class JsonOutResult(EmptyStringModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
