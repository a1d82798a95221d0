"""
Dependency Injection Providers for the Placement Tracker

Provides FastAPI dependencies for database sessions.
"""

from typing import Annotated

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from placement.infrastructure.db.database import get_session


# Type alias for session dependency
SessionDep = Annotated[AsyncSession, Depends(get_session)]


__all__ = ["get_session", "SessionDep"]
