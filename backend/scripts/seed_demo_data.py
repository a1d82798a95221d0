"""
Seed Demo Data Script

Inserts a small set of candidates and drives so the selection pipeline
can be exercised locally. Candidates and drives normally come from the
profile store and drive catalog.

Usage:
    cd backend
    alembic upgrade head
    python scripts/seed_demo_data.py
"""

import asyncio
import logging
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from placement.config.settings import settings
from placement.domain.models import DriveStatus
from placement.infrastructure.db.database import close_db, get_session_context
from placement.infrastructure.db.models import CandidateCreate, DriveCreate
from placement.infrastructure.db.repositories import CandidateRepository, DriveRepository

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


DEMO_CANDIDATES = [
    # first, last, enrollment, branch, cgpa, 10th, 12th, backlog
    ("Aarav", "Sharma", "CS2021001", "CSE", 8.7, 92.0, 88.5, False),
    ("Diya", "Patel", "CS2021002", "CSE", 6.8, 85.0, 79.0, False),
    ("Kabir", "Singh", "IT2021001", "IT", 7.9, 74.0, 70.5, False),
    ("Meera", "Iyer", "EC2021001", "ECE", 9.1, 95.0, 93.0, False),
    ("Rohan", "Gupta", "ME2021001", "MECH", 7.4, 68.0, 64.0, True),
]

DEMO_DRIVES = [
    # company, role, ctc, min cgpa, min %, branches, status
    ("Acme Systems", "Software Engineer", 12.0, 7.0, 60.0, "CSE,IT", DriveStatus.ACTIVE),
    ("Globex", "Data Analyst", 9.5, 6.5, 55.0, "CSE,IT,ECE", DriveStatus.ACTIVE),
    ("Initech", "Embedded Engineer", 8.0, 7.5, 65.0, "ECE,MECH", DriveStatus.UPCOMING),
]


async def seed_demo_data():
    """Insert demo candidates and drives in one transaction."""
    logger.info(f"Seeding demo data into {settings.database_url.split('@')[-1]}")
    drive_date = datetime.now(timezone.utc) + timedelta(days=14)

    async with get_session_context() as session:
        candidates = await CandidateRepository(session).create_many([
            CandidateCreate(
                first_name=first,
                last_name=last,
                email=f"{first.lower()}.{last.lower()}@college.edu",
                enrollment_number=enrollment,
                branch=branch,
                cgpa=cgpa,
                tenth_percent=tenth,
                twelfth_percent=twelfth,
                has_active_backlog=backlog,
            )
            for first, last, enrollment, branch, cgpa, tenth, twelfth, backlog in DEMO_CANDIDATES
        ])
        drives = await DriveRepository(session).create_many([
            DriveCreate(
                company_name=company,
                job_role=role,
                ctc=ctc,
                min_cgpa=min_cgpa,
                min_percent=min_percent,
                allowed_branches=branches,
                drive_date=drive_date,
                status=status,
            )
            for company, role, ctc, min_cgpa, min_percent, branches, status in DEMO_DRIVES
        ])

    logger.info(f"Inserted {len(candidates)} candidates and {len(drives)} drives")
    await close_db()


if __name__ == "__main__":
    asyncio.run(seed_demo_data())
