"""
Users router. Every route requires a session.

GET   /users/current-user
GET   /users/admin/app-stats   (admin only)
PATCH /users/update-user
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from app.core.errors import UnauthenticatedError
from app.core.security import CurrentUser, get_current_user, require_admin
from app.db.base import get_db
from app.models.user import User
from app.schemas.common import MessageResponse
from app.schemas.user import AppStatsResponse, CurrentUserResponse, UpdateUserIn, UserOut
from app.services.users import application_stats, get_user, update_user
from app.validation import validate_update_user_input

router = APIRouter(
    prefix="/users",
    tags=["users"],
    dependencies=[Depends(get_current_user)],
)


def _load(db: Session, current: CurrentUser) -> User:
    user = get_user(db, int(current.user_id))
    if user is None:
        # Session outlived the account.
        raise UnauthenticatedError()
    return user


@router.get("/current-user", response_model=CurrentUserResponse, summary="The logged-in user")
def current_user(
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    return CurrentUserResponse(user=UserOut.model_validate(_load(db, current)))


@router.get(
    "/admin/app-stats",
    response_model=AppStatsResponse,
    dependencies=[Depends(require_admin)],
    responses={403: {"description": "Requester is not an admin."}},
    summary="Total users and jobs",
)
def app_stats(db: Session = Depends(get_db)):
    return AppStatsResponse(**application_stats(db))


@router.patch(
    "/update-user",
    response_model=MessageResponse,
    dependencies=[Depends(validate_update_user_input)],
    responses={400: {"description": "Missing fields, bad email or email used by another account."}},
    summary="Update the logged-in user's profile",
)
def update(
    payload: UpdateUserIn,
    current: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    update_user(
        db=db,
        user=_load(db, current),
        name=payload.name,
        last_name=payload.last_name,
        email=payload.email,
        location=payload.location,
    )
    return MessageResponse(msg="user updated")
