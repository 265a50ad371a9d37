"""
Auth router.

POST /auth/register
POST /auth/login
GET  /auth/logout
"""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session

from app.core.security import end_session, start_session
from app.db.base import get_db
from app.schemas.common import MessageResponse
from app.schemas.user import LoginIn, RegisterIn
from app.services.users import authenticate, register_user
from app.validation import validate_login_input, validate_register_input

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post(
    "/register",
    response_model=MessageResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(validate_register_input)],
    responses={400: {"description": "Missing fields, bad email, taken email or short password."}},
    summary="Create an account",
)
def register(payload: RegisterIn, db: Session = Depends(get_db)):
    """The first account ever registered is given the `admin` role."""
    register_user(
        db=db,
        name=payload.name,
        last_name=payload.last_name,
        email=payload.email,
        password=payload.password,
        location=payload.location,
    )
    return MessageResponse(msg="user created")


@router.post(
    "/login",
    response_model=MessageResponse,
    dependencies=[Depends(validate_login_input)],
    responses={
        400: {"description": "Missing fields or bad email."},
        401: {"description": "Invalid credentials."},
    },
    summary="Log in and start a session",
)
def login(payload: LoginIn, request: Request, db: Session = Depends(get_db)):
    user = authenticate(db=db, email=payload.email, password=payload.password)
    start_session(request, user_id=user.id, role=user.role)
    return MessageResponse(msg="user logged in")


@router.get("/logout", response_model=MessageResponse, summary="End the session")
def logout(request: Request):
    end_session(request)
    return MessageResponse(msg="user logged out")
