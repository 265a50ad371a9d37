"""
Auth and user request / response schemas.
"""
from datetime import datetime

from pydantic import BaseModel

from app.models.user import UserRole
from app.schemas.common import CamelModel


class RegisterIn(CamelModel):
    name: str
    last_name: str
    email: str
    password: str
    location: str


class LoginIn(CamelModel):
    email: str
    password: str


class UpdateUserIn(CamelModel):
    name: str
    last_name: str
    email: str
    location: str


class UserOut(CamelModel):
    id: int
    name: str
    last_name: str
    email: str
    location: str
    role: UserRole
    created_at: datetime


class CurrentUserResponse(BaseModel):
    user: UserOut


class AppStatsResponse(BaseModel):
    users: int
    jobs: int
