"""
Job service: record lookup for the id-param gate, CRUD, listing and stats.

Public API
----------
get_job(db, job_id)                         → Job | None
list_jobs(db, owner_id, filters)            → JobPage
create_job(db, owner_id, data)              → Job
update_job(db, job, data)                   → Job
delete_job(db, job)                         → None
job_stats(db, owner_id, today)              → dict
"""
from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.orm import Session

from app.models.job import Job, JobSort, JobStatus, JobType

MONTHLY_WINDOW = 6

_ORDERING = {
    JobSort.newest: (Job.created_at.desc(), Job.id.desc()),
    JobSort.oldest: (Job.created_at.asc(), Job.id.asc()),
    JobSort.a_z: (Job.position.asc(), Job.id.asc()),
    JobSort.z_a: (Job.position.desc(), Job.id.desc()),
}


# ---------------------------------------------------------------------------
# DTOs
# ---------------------------------------------------------------------------

@dataclass
class JobData:
    """Validated job fields, independent of the HTTP schema."""
    company: str
    position: str
    job_location: str
    job_status: JobStatus = JobStatus.pending
    job_type: JobType = JobType.full_time


@dataclass
class JobFilters:
    search: Optional[str] = None
    job_status: Optional[JobStatus] = None
    job_type: Optional[JobType] = None
    sort: JobSort = JobSort.newest
    page: int = 1
    limit: int = 10


@dataclass
class JobPage:
    total_jobs: int
    num_of_pages: int
    current_page: int
    jobs: list[Job] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

def get_job(db: Session, job_id: int) -> Optional[Job]:
    return db.get(Job, job_id)


def list_jobs(db: Session, owner_id: int, filters: JobFilters) -> JobPage:
    query = db.query(Job).filter(Job.created_by == owner_id)
    if filters.search:
        pattern = f"%{filters.search}%"
        query = query.filter(or_(Job.position.ilike(pattern), Job.company.ilike(pattern)))
    if filters.job_status is not None:
        query = query.filter(Job.job_status == filters.job_status)
    if filters.job_type is not None:
        query = query.filter(Job.job_type == filters.job_type)

    total = query.count()
    jobs = (
        query.order_by(*_ORDERING[filters.sort])
        .offset((filters.page - 1) * filters.limit)
        .limit(filters.limit)
        .all()
    )
    return JobPage(
        total_jobs=total,
        num_of_pages=math.ceil(total / filters.limit),
        current_page=filters.page,
        jobs=jobs,
    )


def job_stats(db: Session, owner_id: int, today: Optional[date] = None) -> dict:
    """
    Per-status counts and applications per month for the last
    MONTHLY_WINDOW months (oldest first), scoped to one owner.
    """
    rows = (
        db.query(Job.job_status, func.count(Job.id))
        .filter(Job.created_by == owner_id)
        .group_by(Job.job_status)
        .all()
    )
    counts = {status_.value: 0 for status_ in JobStatus}
    for job_status, count in rows:
        counts[JobStatus(job_status).value] = count

    today = today or datetime.now(tz=timezone.utc).date()
    months = _last_months(today, MONTHLY_WINDOW)
    created = (
        db.query(Job.created_at).filter(Job.created_by == owner_id).all()
    )
    per_month = Counter((row.created_at.year, row.created_at.month) for row in created)
    monthly = [
        {"date": date(year, month, 1).strftime("%b %y"), "count": per_month[(year, month)]}
        for year, month in months
    ]
    return {"defaultStats": counts, "monthlyApplications": monthly}


def _last_months(today: date, window: int) -> list[tuple[int, int]]:
    months = []
    year, month = today.year, today.month
    for _ in range(window):
        months.append((year, month))
        year, month = (year - 1, 12) if month == 1 else (year, month - 1)
    return list(reversed(months))


# ---------------------------------------------------------------------------
# Mutations
# ---------------------------------------------------------------------------

def create_job(db: Session, owner_id: int, data: JobData) -> Job:
    job = Job(
        company=data.company,
        position=data.position,
        job_location=data.job_location,
        job_status=data.job_status,
        job_type=data.job_type,
        created_by=owner_id,
    )
    db.add(job)
    db.commit()
    db.refresh(job)
    return job


def update_job(db: Session, job: Job, data: JobData) -> Job:
    job.company = data.company
    job.position = data.position
    job.job_location = data.job_location
    job.job_status = data.job_status
    job.job_type = data.job_type
    db.commit()
    db.refresh(job)
    return job


def delete_job(db: Session, job: Job) -> None:
    db.delete(job)
    db.commit()
