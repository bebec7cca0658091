from pydantic import BaseModel, constr
from datetime import datetime
from typing import Optional
from .base import CamelModel

class LoginRequest(BaseModel):
    username: constr(min_length=1, max_length=50)
    password: constr(min_length=1, max_length=100)

class UserResponse(CamelModel):
    id: int
    username: str
    role: str
    last_login: Optional[datetime] = None
    created_at: Optional[datetime] = None
