"""
MongoDB Connection Utility

MongoDB stores:
- users: student accounts (profile + bcrypt password hash)
- drives: one document per company placement drive, with the
  student registrations embedded in it

Registrations live inside their drive so that every status write is a
single-document update, which MongoDB applies atomically.
"""
import logging
from datetime import datetime, timezone
from typing import Optional

from bson import ObjectId
from pymongo import ASCENDING, DESCENDING, MongoClient
from pymongo.collection import Collection
from pymongo.database import Database

from app.core.config import get_settings

logger = logging.getLogger(__name__)

# Global client (connection pooling handled internally by pymongo)
_client: MongoClient = None
_db: Database = None


def get_mongo_client() -> MongoClient:
    """Get or create MongoDB client (singleton pattern)"""
    global _client
    if _client is None:
        _client = MongoClient(get_settings().mongodb_uri)
    return _client


def get_mongo_db() -> Database:
    """Get the portal database"""
    global _db
    if _db is None:
        client = get_mongo_client()
        _db = client[get_settings().mongodb_db]
    return _db


def set_mongo_db(client: Optional[MongoClient], db: Optional[Database]) -> None:
    """Swap the global client/database (used by tests and scripts)."""
    global _client, _db
    _client = client
    _db = db


def get_collection(name: str) -> Collection:
    db = get_mongo_db()
    return db[name]


def test_mongo_connection() -> bool:
    """
    Test if MongoDB is reachable.
    Returns True if connection successful, False otherwise.
    """
    try:
        client = get_mongo_client()
        # ping command checks connection
        client.admin.command('ping')
        return True
    except Exception as e:
        logger.error("MongoDB connection failed: %s", e)
        return False


# Collection name constants (avoid typos)
COLLECTIONS = {
    "users": "users",
    "drives": "placementdrives",
}


def init_mongo_indexes():
    """
    Create indexes for uniqueness and query performance.
    Call this once during app startup.
    """
    db = get_mongo_db()

    users = db[COLLECTIONS["users"]]
    users.create_index("email", unique=True)
    users.create_index("collegeEmail", unique=True)
    users.create_index("regNo", unique=True)
    users.create_index("collegeName")

    drives = db[COLLECTIONS["drives"]]
    # Student dashboard query
    drives.create_index([
        ("eligibleCourses", ASCENDING),
        ("eligiblePassoutYears", ASCENDING),
        ("isActive", ASCENDING),
    ])
    # Past drives lookup by registrant
    drives.create_index("registrations.userId")
    drives.create_index([("createdAt", DESCENDING)])

    logger.info("MongoDB indexes created successfully")


# ============================================================
# HELPERS
# ============================================================

def utcnow() -> datetime:
    """Current UTC time as a naive datetime, the form pymongo hands back."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_utc_naive(value: datetime) -> datetime:
    """Normalize a possibly tz-aware datetime to naive UTC for storage/comparison."""
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


def parse_object_id(value) -> Optional[ObjectId]:
    """Return an ObjectId for a valid id string (or ObjectId), else None."""
    if isinstance(value, ObjectId):
        return value
    if isinstance(value, str) and ObjectId.is_valid(value):
        return ObjectId(value)
    return None


def serialize_doc(doc: dict) -> dict:
    """Convert MongoDB document to JSON-serializable dict."""
    if doc is None:
        return None
    if "_id" in doc:
        doc["_id"] = str(doc["_id"])
    for reg in doc.get("registrations", []):
        if isinstance(reg.get("userId"), ObjectId):
            reg["userId"] = str(reg["userId"])
        if isinstance(reg.get("_id"), ObjectId):
            reg["_id"] = str(reg["_id"])
    return doc


def serialize_docs(docs) -> list:
    """Convert list of MongoDB documents to JSON-serializable list."""
    return [serialize_doc(doc) for doc in docs]
