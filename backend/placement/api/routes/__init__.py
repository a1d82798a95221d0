"""
API Routes

Routers for drives, rounds, reports and student progress.
"""

from placement.api.routes import drives, reports, rounds, students


__all__ = ["drives", "reports", "rounds", "students"]
