"""
Eligibility Filter - which drives a student may see, and whether a drive
is still current.

A drive is visible to a student when:
- the drive is active (admins hide drives by deactivating them)
- the student's specialization is in drive.eligibleCourses
- the student's passout year is in drive.eligiblePassoutYears

Current vs. past is derived from the deadline on every read. Nothing about
it is stored on the drive.
"""

from datetime import datetime
from enum import Enum
from typing import Iterable, List, Optional, Tuple

from pymongo import DESCENDING
from pymongo.collection import Collection

from app.db.mongodb import COLLECTIONS, get_collection, serialize_docs, utcnow


class DrivePhase(str, Enum):
    current = "current"
    past = "past"


def eligibility_query(student: dict) -> dict:
    """MongoDB filter matching the active drives a student is eligible for."""
    return {
        "isActive": True,
        "eligibleCourses": student.get("specialization"),
        "eligiblePassoutYears": student.get("passoutYear"),
    }


def classify(drive: dict, now: Optional[datetime] = None) -> DrivePhase:
    """Past iff the deadline is strictly before now."""
    now = now or utcnow()
    return DrivePhase.past if drive["deadline"] < now else DrivePhase.current


def is_past(drive: dict, now: Optional[datetime] = None) -> bool:
    return classify(drive, now) is DrivePhase.past


def annotate_is_past(drive: dict, now: Optional[datetime] = None) -> dict:
    """Return a copy of the drive with a freshly computed isPast flag."""
    return {**drive, "isPast": is_past(drive, now)}


def split_drives(drives: Iterable[dict], now: Optional[datetime] = None) -> Tuple[List[dict], List[dict]]:
    """Split drives into (current, past), keeping their order."""
    now = now or utcnow()
    current, past = [], []
    for drive in drives:
        (past if is_past(drive, now) else current).append(drive)
    return current, past


class EligibilityFilter:
    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["drives"])

    def list_eligible_drives(self, student: dict, phase: Optional[DrivePhase] = None,
                             now: Optional[datetime] = None) -> List[dict]:
        """
        Active drives the student is eligible for, newest first.

        With no phase both current and past drives are returned. A phase
        keeps only that side of the deadline split.
        """
        cursor = self.collection.find(eligibility_query(student)).sort("createdAt", DESCENDING)
        drives = serialize_docs(cursor)
        if phase is None:
            return drives
        current, past = split_drives(drives, now)
        return past if phase is DrivePhase.past else current


def get_eligibility_filter() -> EligibilityFilter:
    return EligibilityFilter()
