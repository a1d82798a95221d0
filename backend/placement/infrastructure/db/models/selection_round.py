"""
Selection Round and Round Result Models

SQLModels for:
- SelectionRound: One numbered stage of a drive's elimination pipeline
- RoundResult: One candidate's outcome in one round
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from placement.domain.models import ResultStatus
from placement.infrastructure.db.models.base import TimestampMixin, UUIDMixin, utcnow


class SelectionRoundBase(SQLModel):
    """Base schema for selection rounds."""

    round_number: int = Field(
        ...,
        ge=1,
        description="1-based position in the drive's pipeline"
    )
    name: str = Field(..., min_length=1, max_length=200)
    scheduled_at: datetime = Field(
        ...,
        sa_type=DateTime(timezone=True),
        description="When the round takes place"
    )
    notes: Optional[str] = Field(default=None)


class SelectionRound(SelectionRoundBase, UUIDMixin, table=True):
    """Selection round. Immutable once created."""

    __tablename__ = "selection_rounds"
    __table_args__ = (
        UniqueConstraint(
            "drive_id", "round_number",
            name="uq_selection_rounds_drive_number"
        ),
    )

    drive_id: UUID = Field(
        ...,
        foreign_key="drives.id",
        index=True,
    )
    created_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),
    )


class SelectionRoundCreate(SelectionRoundBase):
    """Schema for creating a selection round."""
    drive_id: UUID


# =============================================================================
# Round Results
# =============================================================================

class RoundResultBase(SQLModel):
    """Base schema for round results."""

    status: ResultStatus = Field(default=ResultStatus.PENDING, index=True)
    feedback: Optional[str] = Field(default=None, max_length=2000)


class RoundResult(RoundResultBase, UUIDMixin, TimestampMixin, table=True):
    """Outcome of one candidate in one round."""

    __tablename__ = "round_results"
    __table_args__ = (
        UniqueConstraint(
            "round_id", "candidate_id",
            name="uq_round_results_round_candidate"
        ),
    )

    round_id: UUID = Field(
        ...,
        foreign_key="selection_rounds.id",
        index=True,
    )
    candidate_id: UUID = Field(
        ...,
        foreign_key="candidates.id",
        index=True,
    )


class RoundResultCreate(RoundResultBase):
    """Schema for creating a round result."""
    round_id: UUID
    candidate_id: UUID
