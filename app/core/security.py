"""
Password hashing and session-backed identity.

The session cookie is signed by Starlette's SessionMiddleware; after login
it holds {"userId": "<id>", "role": "<role>"}.
"""
from __future__ import annotations

import hashlib
import hmac
import secrets
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, Request

from app.core.errors import UnauthenticatedError, UnauthorizedError
from app.models.user import UserRole

_SCRYPT_N = 2 ** 14
_SCRYPT_R = 8
_SCRYPT_P = 1


def hash_password(password: str) -> str:
    salt = secrets.token_bytes(16)
    digest = hashlib.scrypt(
        password.encode(), salt=salt, n=_SCRYPT_N, r=_SCRYPT_R, p=_SCRYPT_P
    )
    return f"scrypt${salt.hex()}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    try:
        scheme, salt_hex, digest_hex = stored.split("$")
    except ValueError:
        return False
    if scheme != "scrypt":
        return False
    digest = hashlib.scrypt(
        password.encode(), salt=bytes.fromhex(salt_hex), n=_SCRYPT_N, r=_SCRYPT_R, p=_SCRYPT_P
    )
    return hmac.compare_digest(digest.hex(), digest_hex)


@dataclass(frozen=True)
class CurrentUser:
    """Identity resolved from the session. `user_id` is kept as a string."""
    user_id: str
    role: str

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.admin.value

    def owns(self, owner_id: object) -> bool:
        return self.user_id == str(owner_id)


def start_session(request: Request, user_id: int, role: str) -> None:
    role = role.value if hasattr(role, "value") else str(role)
    request.session["user"] = {"userId": str(user_id), "role": role}


def end_session(request: Request) -> None:
    request.session.clear()


def get_optional_user(request: Request) -> Optional[CurrentUser]:
    data = request.session.get("user") if "session" in request.scope else None
    if not data:
        return None
    return CurrentUser(user_id=str(data["userId"]), role=data["role"])


def get_current_user(request: Request) -> CurrentUser:
    user = get_optional_user(request)
    if user is None:
        raise UnauthenticatedError()
    return user


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    if not user.is_admin:
        raise UnauthorizedError("Not authorized to access this route")
    return user
