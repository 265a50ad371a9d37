from datetime import datetime
from sqlalchemy import Integer, String, DateTime, Enum, ForeignKey, func
from sqlalchemy.orm import Mapped, mapped_column
import enum

from app.db.base import Base


class JobStatus(str, enum.Enum):
    pending = "pending"
    interview = "interview"
    declined = "declined"


class JobType(str, enum.Enum):
    full_time = "full-time"
    part_time = "part-time"
    internship = "internship"


class JobSort(str, enum.Enum):
    newest = "newest"
    oldest = "oldest"
    a_z = "a-z"
    z_a = "z-a"


def _enum_values(enum_cls: type[enum.Enum]) -> list[str]:
    # Persist "full-time", not the member name "full_time".
    return [member.value for member in enum_cls]


class Job(Base):
    __tablename__ = "jobs"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, index=True)
    company: Mapped[str] = mapped_column(String(256), nullable=False)
    position: Mapped[str] = mapped_column(String(256), nullable=False)
    job_status: Mapped[str] = mapped_column(
        Enum(JobStatus, name="job_status_enum", values_callable=_enum_values),
        nullable=False,
        default=JobStatus.pending,
    )
    job_type: Mapped[str] = mapped_column(
        Enum(JobType, name="job_type_enum", values_callable=_enum_values),
        nullable=False,
        default=JobType.full_time,
    )
    job_location: Mapped[str] = mapped_column(String(256), nullable=False, default="my city")
    created_by: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )
