from typing import Optional

from app.schemas.base import CamelModel
from app.security.context import Session


class AdminLogin(CamelModel):
    email: str
    password: str


class UserLogin(CamelModel):
    username: str
    password: str


class SessionState(CamelModel):
    admin: Optional[Session] = None
    user: Optional[Session] = None
