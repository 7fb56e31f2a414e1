"""
Student Directory - student accounts stored in the `users` collection.

Drives only ever read students through this service:
- find_by_id / get: profile used to snapshot a registration
- summaries: the admin-facing join for a drive's registrations
"""

import logging
import re
from typing import Dict, Iterable, List, Optional

from pymongo.collection import Collection
from pymongo.errors import DuplicateKeyError

from app.core.auth import hash_password, verify_password
from app.core.config import get_settings
from app.core.exceptions import NotFoundError, Unauthorized, ValidationError
from app.db.mongodb import COLLECTIONS, get_collection, parse_object_id, utcnow
from app.schemas.schemas import StudentRegisterRequest

logger = logging.getLogger(__name__)

MOBILE_PATTERN = re.compile(r"^\d{10}$")

REGISTER_FIELDS = [
    "name", "email", "collegeEmail", "password", "mobile", "rollNo", "regNo",
    "collegeName", "specialization", "branch", "year", "passoutYear",
]

# Never leaves the service
PRIVATE_FIELDS = {"password": 0}

SUMMARY_FIELDS = {"name": 1, "email": 1, "specialization": 1, "branch": 1, "year": 1}


def public_student(doc: dict) -> dict:
    """Drop the password hash and stringify the id."""
    if doc is None:
        return None
    doc = {k: v for k, v in doc.items() if k != "password"}
    doc["_id"] = str(doc["_id"])
    return doc


class StudentDirectory:
    """Lookup and registration of student accounts."""

    def __init__(self):
        self.collection: Collection = get_collection(COLLECTIONS["users"])

    def register(self, data: StudentRegisterRequest) -> dict:
        """
        Create a student account.

        Raises:
            ValidationError: missing field, bad college email / mobile,
                or email / college email / regNo already taken
        """
        settings = get_settings()
        values = data.model_dump(by_alias=True)
        values = {k: v.strip() if isinstance(v, str) else v for k, v in values.items()}

        if any(not values.get(field) for field in REGISTER_FIELDS):
            raise ValidationError("All fields are required")

        values["email"] = values["email"].lower()
        values["collegeEmail"] = values["collegeEmail"].lower()

        if not values["collegeEmail"].endswith(settings.college_email_domain.lower()):
            raise ValidationError(f"College email must end with {settings.college_email_domain}")
        if not MOBILE_PATTERN.match(values["mobile"]):
            raise ValidationError("Mobile number must be exactly 10 digits")
        if len(values["password"]) < 6:
            raise ValidationError("Password must be at least 6 characters")

        if self.collection.find_one({"email": values["email"]}):
            raise ValidationError("Email already registered")
        if self.collection.find_one({"collegeEmail": values["collegeEmail"]}):
            raise ValidationError("College email already registered")
        if self.collection.find_one({"regNo": values["regNo"]}):
            raise ValidationError("Registration number already exists")

        doc = {field: values[field] for field in REGISTER_FIELDS}
        doc["password"] = hash_password(values["password"])
        doc["createdAt"] = utcnow()

        try:
            result = self.collection.insert_one(doc)
        except DuplicateKeyError:
            # Lost a race with a concurrent registration; the unique index decides
            raise ValidationError("Email or registration number already registered")

        doc["_id"] = result.inserted_id
        logger.info("Registered student %s (%s)", doc["_id"], doc["regNo"])
        return public_student(doc)

    def authenticate(self, email: Optional[str], password: Optional[str]) -> dict:
        if not email or not password:
            raise ValidationError("Email and password required")

        doc = self.collection.find_one({"email": email.strip().lower()})
        if not doc or not verify_password(password, doc["password"]):
            raise Unauthorized("Invalid email or password")
        return public_student(doc)

    def find_by_id(self, student_id) -> Optional[dict]:
        """Fetch a student by id; None for unknown or malformed ids."""
        oid = parse_object_id(student_id)
        if oid is None:
            return None
        doc = self.collection.find_one({"_id": oid}, PRIVATE_FIELDS)
        if doc is None:
            return None
        # Keep the ObjectId for registration references
        return doc

    def get(self, student_id) -> dict:
        """Like find_by_id but raises NotFoundError."""
        doc = self.find_by_id(student_id)
        if doc is None:
            raise NotFoundError("User not found")
        return doc

    def summaries(self, student_ids: Iterable) -> Dict[str, dict]:
        """Map id string -> summary view for every student that still exists."""
        oids = [oid for oid in (parse_object_id(s) for s in student_ids) if oid is not None]
        if not oids:
            return {}
        cursor = self.collection.find({"_id": {"$in": oids}}, SUMMARY_FIELDS)
        out = {}
        for doc in cursor:
            doc["_id"] = str(doc["_id"])
            out[doc["_id"]] = doc
        return out

    def college_stats(self) -> Dict[str, int]:
        """Count of students per college; known colleges appear even with 0."""
        result = self.collection.aggregate([
            {"$group": {"_id": "$collegeName", "count": {"$sum": 1}}}
        ])
        stats = {item["_id"]: item["count"] for item in result}
        for college in get_settings().colleges:
            stats.setdefault(college, 0)
        return stats

    def students_by_college(self, college: str) -> List[dict]:
        cursor = self.collection.find({"collegeName": college}, PRIVATE_FIELDS).sort("name", 1)
        return [public_student(doc) for doc in cursor]


def get_student_directory() -> StudentDirectory:
    return StudentDirectory()
