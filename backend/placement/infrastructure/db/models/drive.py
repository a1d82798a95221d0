"""
Drive SQLModel

A hiring campaign run by one company, with its eligibility criteria.
Owned by the drive catalog; the selection pipeline only reads it.
"""

from datetime import datetime
from typing import Optional

from pydantic import field_validator
from sqlalchemy import DateTime
from sqlmodel import Field, SQLModel

from placement.domain.eligibility.interfaces import parse_branches
from placement.domain.models import DriveStatus
from placement.infrastructure.db.models.base import TimestampMixin, UUIDMixin


class DriveBase(SQLModel):
    """Base schema for Drive."""

    company_name: str = Field(..., max_length=200, index=True)
    job_role: str = Field(..., max_length=200)
    ctc: Optional[float] = Field(
        default=None,
        ge=0.0,
        description="Offered compensation (LPA)"
    )

    # Eligibility criteria
    min_cgpa: float = Field(default=0.0, ge=0.0, le=10.0)
    min_percent: float = Field(default=0.0, ge=0.0, le=100.0)
    allowed_branches: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Comma separated branch codes, e.g. 'CSE,IT,ECE'"
    )

    drive_date: Optional[datetime] = Field(default=None, sa_type=DateTime(timezone=True))
    description: Optional[str] = None
    status: DriveStatus = Field(default=DriveStatus.UPCOMING, index=True)

    @field_validator("allowed_branches")
    @classmethod
    def validate_branches(cls, v: str) -> str:
        if not parse_branches(v):
            raise ValueError("allowed_branches must name at least one branch")
        return v


class Drive(DriveBase, UUIDMixin, TimestampMixin, table=True):
    """Drive database table model."""

    __tablename__ = "drives"


class DriveCreate(DriveBase):
    """Schema for creating a drive."""
    pass
