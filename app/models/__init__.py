from .user import User, UserRole
from .job import Job, JobStatus, JobType, JobSort

__all__ = [
    "User",
    "UserRole",
    "Job",
    "JobStatus",
    "JobType",
    "JobSort",
]
