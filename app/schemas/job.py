"""
Job request / response schemas.

POST  /jobs          → JobIn  → JobResponse
PATCH /jobs/{id}     → JobIn  → JobUpdatedResponse
GET   /jobs          → JobListResponse
GET   /jobs/stats    → JobStatsResponse
"""
from datetime import datetime

from pydantic import BaseModel, Field

from app.models.job import JobStatus, JobType
from app.schemas.common import CamelModel


class JobIn(CamelModel):
    """Job fields accepted from clients. Presence and enum membership are
    enforced by the job-input gate before this model is parsed."""
    company: str
    position: str
    job_location: str
    job_status: JobStatus = JobStatus.pending
    job_type: JobType = JobType.full_time


class JobOut(CamelModel):
    id: int
    company: str
    position: str
    job_location: str
    job_status: JobStatus
    job_type: JobType
    created_by: int
    created_at: datetime
    updated_at: datetime


class JobResponse(BaseModel):
    job: JobOut


class JobUpdatedResponse(BaseModel):
    msg: str
    job: JobOut


class JobListResponse(CamelModel):
    total_jobs: int
    num_of_pages: int
    current_page: int
    jobs: list[JobOut]


class MonthlyApplications(BaseModel):
    date: str = Field(description='Month label, e.g. "Oct 26".')
    count: int


class JobStatsResponse(CamelModel):
    default_stats: dict[str, int] = Field(description="Job count per status.")
    monthly_applications: list[MonthlyApplications]
