"""
Drive Registration SQLModel

Links one candidate to one drive, at most once.
Only eligible registrations are ever stored.
"""

from datetime import datetime
from uuid import UUID

from sqlalchemy import DateTime, UniqueConstraint
from sqlmodel import Field, SQLModel

from placement.infrastructure.db.models.base import UUIDMixin, utcnow


class DriveRegistration(UUIDMixin, table=True):
    """Registration of a candidate for a drive."""

    __tablename__ = "drive_registrations"
    __table_args__ = (
        UniqueConstraint(
            "drive_id", "candidate_id",
            name="uq_drive_registrations_drive_candidate"
        ),
    )

    drive_id: UUID = Field(
        ...,
        foreign_key="drives.id",
        index=True,
    )
    candidate_id: UUID = Field(
        ...,
        foreign_key="candidates.id",
        index=True,
    )
    is_eligible: bool = Field(
        default=True,
        description="Always True: rejected attempts are never stored"
    )
    registered_at: datetime = Field(
        default_factory=utcnow,
        nullable=False,
        sa_type=DateTime(timezone=True),
    )


class DriveRegistrationCreate(SQLModel):
    """Schema for creating a registration."""
    drive_id: UUID
    candidate_id: UUID
    is_eligible: bool = True
