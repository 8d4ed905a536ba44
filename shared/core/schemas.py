from pydantic import BaseModel
from typing import Generic, List, Optional, TypeVar

# Shared properties
T = TypeVar("T")


class UserToken(BaseModel):
    user_id: str
    name: Optional[str] = None
    account_type: str
    roles: List[str] = []
    exp: Optional[int] = None


class JsonOutResult(BaseModel, Generic[T]):
    data: Optional[T] = None
    status: str
    status_code: str
    message: str
