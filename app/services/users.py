"""
User service: lookups used by the validation gates plus the account flows
behind /auth and /users.
"""
from __future__ import annotations

import logging
from typing import Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from app.core.errors import UnauthenticatedError
from app.core.security import hash_password, verify_password
from app.models.job import Job
from app.models.user import User, UserRole

logger = logging.getLogger(__name__)


def get_user(db: Session, user_id: int) -> Optional[User]:
    return db.get(User, user_id)


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def register_user(
    db: Session,
    *,
    name: str,
    last_name: str,
    email: str,
    password: str,
    location: str,
) -> User:
    """Create an account. The very first account becomes an admin."""
    is_first_account = (db.query(func.count(User.id)).scalar() or 0) == 0
    user = User(
        name=name,
        last_name=last_name,
        email=email,
        password_hash=hash_password(password),
        location=location,
        role=UserRole.admin if is_first_account else UserRole.user,
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered user %s (role=%s)", user.id, user.role.value)
    return user


def authenticate(db: Session, email: str, password: str) -> User:
    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Failed login for %s", email)
        raise UnauthenticatedError("invalid credentials")
    return user


def update_user(
    db: Session,
    user: User,
    *,
    name: str,
    last_name: str,
    email: str,
    location: str,
) -> User:
    user.name = name
    user.last_name = last_name
    user.email = email
    user.location = location
    db.commit()
    db.refresh(user)
    return user


def application_stats(db: Session) -> dict[str, int]:
    return {
        "users": db.query(func.count(User.id)).scalar() or 0,
        "jobs": db.query(func.count(Job.id)).scalar() or 0,
    }
