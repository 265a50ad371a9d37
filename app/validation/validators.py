"""
Request gates for the job board.

Declaration order matters: the first failure decides which error kind the
gate raises.
"""
from __future__ import annotations

from typing import Any

from starlette.concurrency import run_in_threadpool

from app.core.config import settings
from app.core.errors import BadRequestError, NotFoundError, UnauthorizedError
from app.models.job import JobStatus, JobType
from app.services.jobs import get_job
from app.services.users import get_user_by_email
from app.validation.gate import guard
from app.validation.rules import RequestContext, as_text, body, param

# Largest value the INTEGER primary key columns can hold.
MAX_ID = 2 ** 31 - 1


def is_valid_id(value: Any) -> bool:
    text = as_text(value)
    return text.isascii() and text.isdigit() and 0 < int(text) <= MAX_ID


# ---------------------------------------------------------------------------
# Custom checks
# ---------------------------------------------------------------------------

async def check_job_access(value: Any, ctx: RequestContext) -> None:
    if not is_valid_id(value):
        raise BadRequestError("Invalid Id")
    job = await run_in_threadpool(get_job, ctx.db, int(value))
    if job is None:
        raise NotFoundError(f"No job exists for given id {value}")
    user = ctx.user
    if user is None or not (user.is_admin or user.owns(job.created_by)):
        raise UnauthorizedError("Not authorized to access this route")


async def check_email_available(email: Any, ctx: RequestContext) -> None:
    if not as_text(email):
        return
    user = await run_in_threadpool(get_user_by_email, ctx.db, as_text(email))
    if user is not None:
        raise BadRequestError("Email already exists")


async def check_email_available_to_requester(email: Any, ctx: RequestContext) -> None:
    """Like check_email_available, but the requester's own address is fine."""
    if not as_text(email):
        return
    user = await run_in_threadpool(get_user_by_email, ctx.db, as_text(email))
    if user is None:
        return
    if ctx.user is None or not ctx.user.owns(user.id):
        raise BadRequestError("Email already exists")


# ---------------------------------------------------------------------------
# Gates
# ---------------------------------------------------------------------------

validate_job_input = guard(
    body("company").not_empty("Company is required"),
    body("position").not_empty("Position is required"),
    body("jobLocation").not_empty("Job Location is required"),
    body("jobStatus").is_in(JobStatus, "Invalid status value"),
    body("jobType").is_in(JobType, "Invalid type value"),
)

validate_id_param = guard(
    param("id").custom(check_job_access),
)

validate_register_input = guard(
    body("name").not_empty("Name is required"),
    body("email")
    .not_empty("Email is required")
    .is_email("Invalid Email format")
    .custom(check_email_available),
    body("password")
    .not_empty("Password is required")
    .min_length(
        settings.MIN_PASSWORD_LENGTH,
        f"Password must be at least {settings.MIN_PASSWORD_LENGTH} character long",
    ),
    body("location").not_empty("Location is required"),
    body("lastName").not_empty("Last name is required"),
)

validate_login_input = guard(
    body("email").not_empty("Email is required").is_email("Invalid email format"),
    body("password").not_empty("Password is required"),
)

validate_update_user_input = guard(
    body("name").not_empty("Name is required"),
    body("email")
    .not_empty("Email is required")
    .is_email("Invalid Email format")
    .custom(check_email_available_to_requester),
    body("location").not_empty("Location is required"),
    body("lastName").not_empty("Last name is required"),
)
