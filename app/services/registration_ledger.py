"""
Registration Ledger - a student's declared stage within one drive.

Registrations are embedded in their drive document:

    drive.registrations = [
        {"userId": ObjectId, "userName": ..., "status": "Interview", "timestamp": ...},
        ...
    ]

Rules:
- at most one registration per (drive, student)
- no student writes once now >= drive.deadline
- the first write stores a full profile snapshot; later writes only refresh
  status, timestamp, name, email and mobile

Each write is one conditional update on the drive document, so MongoDB's
document-level atomicity keeps the one-per-student rule without locks.
Concurrent writes for the same student: last write wins.
"""

import logging
from datetime import datetime
from typing import List, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from app.core.config import get_settings
from app.core.exceptions import DeadlinePassed, NotFoundError, ValidationError
from app.db.mongodb import (
    COLLECTIONS, get_collection, parse_object_id, serialize_doc, serialize_docs, utcnow
)

logger = logging.getLogger(__name__)


def registration_snapshot(student: dict, status: str, now: datetime) -> dict:
    """Full registration entry written on a student's first submission."""
    return {
        "userId": student["_id"],
        "userName": student.get("name"),
        "userEmail": student.get("email"),
        "userRegNo": student.get("regNo"),
        "userMobile": student.get("mobile"),
        "userSpecialization": student.get("specialization"),
        "userBranch": student.get("branch"),
        "userYear": student.get("year"),
        "userPassoutYear": student.get("passoutYear"),
        "status": status,
        "timestamp": now,
    }


def registration_refresh(student: dict, status: str, now: datetime) -> dict:
    """
    $set payload for an existing registration.

    Only name/email/mobile are refreshed; the academic fields keep the
    values captured on first submission.
    """
    return {
        "registrations.$.status": status,
        "registrations.$.timestamp": now,
        "registrations.$.userName": student.get("name"),
        "registrations.$.userEmail": student.get("email"),
        "registrations.$.userMobile": student.get("mobile"),
    }


class RegistrationLedger:
    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["drives"])

    def submit_status(self, drive_id, student: dict, status: Optional[str],
                      now: Optional[datetime] = None) -> dict:
        """
        Record or update the student's status for a drive.

        Args:
            drive_id: drive ObjectId (string)
            student: student document from StudentDirectory (with ObjectId _id)
            status: stage label chosen by the student
            now: clock override, defaults to current UTC time

        Returns:
            The updated drive

        Raises:
            ValidationError: missing drive id / status, or status not in
                drive.statuses when membership is enforced
            NotFoundError: unknown drive
            DeadlinePassed: now >= deadline (checked before membership)
        """
        if not drive_id or not status or not str(status).strip():
            raise ValidationError("Drive ID and status required")

        oid = parse_object_id(drive_id)
        if oid is None:
            raise NotFoundError("Drive not found")

        now = now or utcnow()
        user_id = student["_id"]

        current = self.collection.find_one({"_id": oid}, {"deadline": 1, "statuses": 1})
        if current is None:
            raise NotFoundError("Drive not found")
        self._check_open(current, oid, user_id, now)
        if get_settings().enforce_status_membership and status not in current.get("statuses", []):
            raise ValidationError(f"Status must be one of: {', '.join(current.get('statuses', []))}")

        drive = self._update_existing(oid, user_id, student, status, now)
        if drive is None:
            drive = self._append_new(oid, user_id, student, status, now)
        if drive is None:
            # Neither update matched: the drive changed after the read above
            current = self.collection.find_one({"_id": oid}, {"deadline": 1})
            if current is None:
                raise NotFoundError("Drive not found")
            self._check_open(current, oid, user_id, now)
            # A concurrent first submission won the $push; update that entry instead
            drive = self._update_existing(oid, user_id, student, status, now)
            if drive is None:
                raise NotFoundError("Drive not found")

        logger.info("Student %s set status %r on drive %s", user_id, status, oid)
        return serialize_doc(drive)

    @staticmethod
    def _check_open(drive: dict, oid, user_id, now: datetime) -> None:
        if now >= drive["deadline"]:
            logger.warning("Rejected status update for drive %s by %s: deadline passed", oid, user_id)
            raise DeadlinePassed()

    def _update_existing(self, oid, user_id, student, status, now) -> Optional[dict]:
        return self.collection.find_one_and_update(
            {"_id": oid, "deadline": {"$gt": now}, "registrations.userId": user_id},
            {"$set": registration_refresh(student, status, now)},
            return_document=ReturnDocument.AFTER,
        )

    def _append_new(self, oid, user_id, student, status, now) -> Optional[dict]:
        return self.collection.find_one_and_update(
            {"_id": oid, "deadline": {"$gt": now}, "registrations.userId": {"$ne": user_id}},
            {"$push": {"registrations": registration_snapshot(student, status, now)}},
            return_document=ReturnDocument.AFTER,
        )

    def drives_for_student(self, student_id) -> List[dict]:
        """Every drive the student has registered in, newest first."""
        oid = parse_object_id(student_id)
        if oid is None:
            return []
        cursor = self.collection.find({"registrations.userId": oid}).sort("createdAt", DESCENDING)
        return serialize_docs(cursor)


def get_registration_ledger() -> RegistrationLedger:
    return RegistrationLedger()
