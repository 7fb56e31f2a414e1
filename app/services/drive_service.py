"""
Drive Administration - lifecycle of placement drive definitions.

Admins create, edit, deactivate and delete drives. Deleting a drive also
discards every registration embedded in it.

A usable drive always has a company name, a deadline, at least one
eligible course, at least one eligible passout year and at least one
status. That is checked here on create and update, whichever client calls.
"""

import logging
from datetime import datetime
from typing import List, Optional

from pymongo import DESCENDING, ReturnDocument
from pymongo.collection import Collection

from app.core.exceptions import NotFoundError, ValidationError
from app.db.mongodb import (
    COLLECTIONS, get_collection, parse_object_id, serialize_doc, to_utc_naive, utcnow
)
from app.schemas.schemas import DriveFields, DriveUpdate
from app.services.eligibility import annotate_is_past
from app.services.student_service import StudentDirectory

logger = logging.getLogger(__name__)


def _clean_list(values: Optional[List[str]]) -> List[str]:
    """Strip entries, drop blanks and duplicates, keep order."""
    out = []
    for value in values or []:
        value = value.strip() if isinstance(value, str) else value
        if value and value not in out:
            out.append(value)
    return out


def drive_definition(fields: DriveFields) -> dict:
    """
    Validate and normalize the admin-editable drive fields.

    Raises:
        ValidationError: any required field missing or empty
    """
    company_name = (fields.company_name or "").strip()
    statuses = _clean_list(fields.statuses)
    eligible_courses = _clean_list(fields.eligible_courses)
    eligible_years = _clean_list(fields.eligible_passout_years)

    if not company_name or fields.deadline is None or not statuses \
            or not eligible_courses or not eligible_years:
        raise ValidationError("All fields are required")

    return {
        "companyName": company_name,
        "statuses": statuses,
        "deadline": to_utc_naive(fields.deadline),
        "eligibleCourses": eligible_courses,
        "eligiblePassoutYears": eligible_years,
    }


class DriveAdministration:
    def __init__(self, students: Optional[StudentDirectory] = None):
        self.collection: Collection = get_collection(COLLECTIONS["drives"])
        self.students = students or StudentDirectory()

    def create(self, fields: DriveFields) -> dict:
        """Create an active drive with no registrations."""
        doc = drive_definition(fields)
        doc.update({
            "registrations": [],
            "isActive": True,
            "createdAt": utcnow(),
        })
        result = self.collection.insert_one(doc)
        doc["_id"] = result.inserted_id
        logger.info("Created drive %s for %s (deadline %s)", doc["_id"], doc["companyName"], doc["deadline"])
        return serialize_doc(doc)

    def update(self, drive_id, fields: DriveUpdate) -> dict:
        """
        Replace the drive definition; registrations are left alone.
        isActive is only changed when supplied.
        """
        oid = self._oid(drive_id)
        if self.collection.find_one({"_id": oid}, {"_id": 1}) is None:
            raise NotFoundError("Drive not found")
        changes = drive_definition(fields)
        if fields.is_active is not None:
            changes["isActive"] = fields.is_active

        drive = self.collection.find_one_and_update(
            {"_id": oid},
            {"$set": changes},
            return_document=ReturnDocument.AFTER,
        )
        if drive is None:
            raise NotFoundError("Drive not found")

        logger.info("Updated drive %s", oid)
        return serialize_doc(drive)

    def delete(self, drive_id) -> None:
        oid = self._oid(drive_id)
        result = self.collection.delete_one({"_id": oid})
        if result.deleted_count == 0:
            raise NotFoundError("Drive not found")
        logger.info("Deleted drive %s", oid)

    def get_all(self, now: Optional[datetime] = None) -> List[dict]:
        """Every drive, newest first, each with a fresh isPast flag."""
        now = now or utcnow()
        cursor = self.collection.find().sort("createdAt", DESCENDING)
        return [annotate_is_past(serialize_doc(doc), now) for doc in cursor]

    def get_one(self, drive_id, now: Optional[datetime] = None) -> dict:
        """
        One drive with each registration's userId replaced by the student's
        current summary (None when the account no longer exists).
        """
        oid = self._oid(drive_id)
        doc = self.collection.find_one({"_id": oid})
        if doc is None:
            raise NotFoundError("Drive not found")

        drive = serialize_doc(doc)
        drive.setdefault("registrations", [])
        summaries = self.students.summaries(r.get("userId") for r in drive["registrations"])
        for reg in drive["registrations"]:
            reg["userId"] = summaries.get(reg.get("userId"))

        return annotate_is_past(drive, now or utcnow())

    def _oid(self, drive_id):
        oid = parse_object_id(drive_id)
        if oid is None:
            raise NotFoundError("Drive not found")
        return oid


def get_drive_administration() -> DriveAdministration:
    return DriveAdministration()
