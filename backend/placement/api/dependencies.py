"""
API Dependencies

FastAPI dependency injection for authentication and role guards.

Security: tokens are issued by the identity service and signed with the
shared secret (HS256 by default). They are always verified before any
claim is trusted.
"""

import logging
from dataclasses import dataclass
from typing import Optional
from uuid import UUID

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.ext.asyncio import AsyncSession

from placement.config.settings import get_settings
from placement.domain.models import UserRole
from placement.infrastructure.db.dependencies import get_session
from placement.infrastructure.db.repositories.candidate_repository import CandidateRepository


logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)


@dataclass(frozen=True)
class Principal:
    """The verified caller of a request."""
    user_id: str
    role: UserRole
    candidate_id: Optional[UUID] = None


def _decode_token(token: str) -> dict:
    """Verify signature and expiry, requiring the claims the engine relies on."""
    settings = get_settings()
    return jwt.decode(
        token,
        settings.jwt_secret_key,
        algorithms=[settings.jwt_algorithm],
        options={"require": ["exp", "sub", "role"]},
    )


def _parse_uuid(value: Optional[str]) -> Optional[UUID]:
    if not value:
        return None
    try:
        return UUID(str(value))
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: malformed identifier",
        )


async def get_current_principal(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Principal:
    """
    Extract and verify the caller from a bearer JWT.

    Returns:
        Principal built from the ``sub``, ``role`` and ``candidate_id`` claims.

    Raises:
        HTTPException 401: token missing, expired, invalid, or with an unknown role.
    """
    if not credentials:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Missing authorization token",
            headers={"WWW-Authenticate": "Bearer"},
        )

    try:
        payload = _decode_token(credentials.credentials)
    except jwt.ExpiredSignatureError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Token has expired",
        )
    except jwt.InvalidTokenError as e:
        logger.warning("JWT verification failed: %s", e)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or unverifiable token",
        )

    try:
        role = UserRole(str(payload["role"]).upper())
    except ValueError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid token: unknown role",
        )

    return Principal(
        user_id=str(payload["sub"]),
        role=role,
        candidate_id=_parse_uuid(payload.get("candidate_id")),
    )


async def require_admin(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """Allow only administrators."""
    if principal.role != UserRole.ADMIN:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Administrator role required",
        )
    return principal


async def require_student(
    principal: Principal = Depends(get_current_principal),
) -> Principal:
    """Allow only students."""
    if principal.role != UserRole.STUDENT:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Student role required",
        )
    return principal


async def get_current_candidate_id(
    principal: Principal = Depends(require_student),
    session: AsyncSession = Depends(get_session),
) -> UUID:
    """
    Resolve the candidate acting in a student request.

    Uses the ``candidate_id`` claim when present, otherwise looks the
    candidate up by the token subject.

    Raises:
        HTTPException 404: no candidate profile is linked to the user.
    """
    if principal.candidate_id is not None:
        return principal.candidate_id

    user_id = _parse_uuid(principal.user_id)
    candidate = await CandidateRepository(session).get_by_user_id(user_id)
    if candidate is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Candidate profile not found",
        )
    return candidate.id


# =============================================================================
# Re-export DB dependencies for a single import source
# Routers should import from api.dependencies, not db.dependencies directly.
# =============================================================================
from placement.infrastructure.db.dependencies import SessionDep  # noqa: E402, F401
