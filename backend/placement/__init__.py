"""
Campus Placement Tracker

Selection pipeline and eligibility engine for campus placement drives.
"""

__version__ = "1.0.0"
