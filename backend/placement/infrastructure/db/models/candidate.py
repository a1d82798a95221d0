"""
Candidate SQLModel

Academic record of a student. Owned by the profile store; the selection
pipeline only reads it.
"""

from typing import Optional
from uuid import UUID

from sqlmodel import Field, SQLModel

from placement.infrastructure.db.models.base import TimestampMixin, UUIDMixin


class CandidateBase(SQLModel):
    """Base schema for Candidate (shared between create/read)."""

    # Identity (display only, never used for eligibility)
    first_name: str = Field(..., max_length=100)
    last_name: str = Field(..., max_length=100)
    email: str = Field(..., max_length=255)
    enrollment_number: str = Field(
        ...,
        max_length=50,
        unique=True,
        description="College enrollment number"
    )

    # Academic metrics
    branch: str = Field(
        ...,
        max_length=20,
        index=True,
        description="Branch code, e.g. CSE"
    )
    cgpa: float = Field(
        ...,
        ge=0.0,
        le=10.0,
        description="Cumulative grade average on a 10 point scale"
    )
    tenth_percent: float = Field(..., ge=0.0, le=100.0)
    twelfth_percent: float = Field(..., ge=0.0, le=100.0)
    has_active_backlog: bool = Field(
        default=False,
        description="Has at least one unresolved backlog"
    )


class Candidate(CandidateBase, UUIDMixin, TimestampMixin, table=True):
    """Candidate database table model."""

    __tablename__ = "candidates"

    user_id: Optional[UUID] = Field(
        default=None,
        index=True,
        unique=True,
        description="Identity service user this candidate belongs to"
    )

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class CandidateCreate(CandidateBase):
    """Schema for creating a candidate."""
    user_id: Optional[UUID] = None
