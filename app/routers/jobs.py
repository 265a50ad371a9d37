"""
Jobs router. Every route requires a session.

GET    /jobs          — list the requester's jobs (search / filter / sort / paginate)
POST   /jobs          — create
GET    /jobs/stats    — status counts + monthly applications
GET    /jobs/{id}     — read     (owner or admin)
PATCH  /jobs/{id}     — update   (owner or admin)
DELETE /jobs/{id}     — delete   (owner or admin)
"""
from __future__ import annotations

import enum
from typing import Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.errors import BadRequestError
from app.core.security import CurrentUser, get_current_user
from app.db.base import get_db
from app.models.job import Job, JobSort, JobStatus, JobType
from app.schemas.common import ErrorResponse
from app.schemas.job import (
    JobIn,
    JobListResponse,
    JobOut,
    JobResponse,
    JobStatsResponse,
    JobUpdatedResponse,
)
from app.services.jobs import (
    JobData,
    JobFilters,
    create_job,
    delete_job,
    get_job,
    job_stats,
    list_jobs,
    update_job,
)
from app.validation import validate_id_param, validate_job_input

router = APIRouter(
    prefix="/jobs",
    tags=["jobs"],
    dependencies=[Depends(get_current_user)],
)

_GATE_RESPONSES = {
    400: {"model": ErrorResponse, "description": "Field validation failed."},
    401: {"model": ErrorResponse, "description": "No session."},
}
_ID_RESPONSES = {
    **_GATE_RESPONSES,
    403: {"model": ErrorResponse, "description": "Requester is neither the creator nor an admin."},
    404: {"model": ErrorResponse, "description": "No job with this id."},
}


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _enum_filter(enum_cls: type[enum.Enum], value: Optional[str], name: str):
    """`None` and "all" mean no filter."""
    if value is None or value == "all":
        return None
    try:
        return enum_cls(value)
    except ValueError:
        raise BadRequestError(f"Invalid {name} filter: {value}") from None


def _job_data(payload: JobIn) -> JobData:
    return JobData(
        company=payload.company,
        position=payload.position,
        job_location=payload.job_location,
        job_status=payload.job_status,
        job_type=payload.job_type,
    )


def _out(job: Job) -> JobOut:
    return JobOut.model_validate(job)


# ---------------------------------------------------------------------------
# Collection
# ---------------------------------------------------------------------------

@router.get("", response_model=JobListResponse, summary="List the requester's jobs")
def get_all_jobs(
    search: Optional[str] = Query(default=None, description="Matches position or company."),
    job_status: Optional[str] = Query(default=None, alias="jobStatus", examples=["interview"]),
    job_type: Optional[str] = Query(default=None, alias="jobType", examples=["full-time"]),
    sort: JobSort = Query(default=JobSort.newest),
    page: int = Query(default=1, ge=1),
    limit: int = Query(default=10, ge=1, le=100),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    filters = JobFilters(
        search=search or None,
        job_status=_enum_filter(JobStatus, job_status, "status"),
        job_type=_enum_filter(JobType, job_type, "type"),
        sort=sort,
        page=page,
        limit=limit,
    )
    result = list_jobs(db=db, owner_id=int(user.user_id), filters=filters)
    return JobListResponse(
        total_jobs=result.total_jobs,
        num_of_pages=result.num_of_pages,
        current_page=result.current_page,
        jobs=[_out(j) for j in result.jobs],
    )


@router.post(
    "",
    response_model=JobResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(validate_job_input)],
    responses=_GATE_RESPONSES,
    summary="Create a job",
)
def create(
    payload: JobIn,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    job = create_job(db=db, owner_id=int(user.user_id), data=_job_data(payload))
    return JobResponse(job=_out(job))


@router.get("/stats", response_model=JobStatsResponse, summary="Application stats")
def stats(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    data = job_stats(db=db, owner_id=int(user.user_id))
    return JobStatsResponse(
        default_stats=data["defaultStats"],
        monthly_applications=data["monthlyApplications"],
    )


# ---------------------------------------------------------------------------
# Single job: the id-param gate has already checked existence and access
# ---------------------------------------------------------------------------

@router.get(
    "/{id}",
    response_model=JobResponse,
    dependencies=[Depends(validate_id_param)],
    responses=_ID_RESPONSES,
    summary="Read one job",
)
def get_one(id: int, db: Session = Depends(get_db)):
    return JobResponse(job=_out(get_job(db, id)))


@router.patch(
    "/{id}",
    response_model=JobUpdatedResponse,
    dependencies=[Depends(validate_job_input), Depends(validate_id_param)],
    responses=_ID_RESPONSES,
    summary="Update one job",
)
def update(id: int, payload: JobIn, db: Session = Depends(get_db)):
    job = update_job(db=db, job=get_job(db, id), data=_job_data(payload))
    return JobUpdatedResponse(msg="job modified", job=_out(job))


@router.delete(
    "/{id}",
    response_model=JobUpdatedResponse,
    dependencies=[Depends(validate_id_param)],
    responses=_ID_RESPONSES,
    summary="Delete one job",
)
def delete(id: int, db: Session = Depends(get_db)):
    job = get_job(db, id)
    removed = _out(job)
    delete_job(db=db, job=job)
    return JobUpdatedResponse(msg="job deleted", job=removed)
