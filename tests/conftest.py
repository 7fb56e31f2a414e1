from datetime import timedelta

import mongomock
import pytest
from fastapi.testclient import TestClient

from app.core.auth import create_admin_token, create_student_token
from app.db import mongodb
from app.db.mongodb import COLLECTIONS, utcnow
from app.main import app
from app.schemas.schemas import DriveCreate
from app.services.drive_service import DriveAdministration


@pytest.fixture(autouse=True)
def mongo_db():
    # Fresh in-memory database per test
    client = mongomock.MongoClient()
    db = client["placement_portal_test"]
    mongodb.set_mongo_db(client, db)
    yield db
    mongodb.set_mongo_db(None, None)


@pytest.fixture
def client():
    return TestClient(app)


@pytest.fixture
def make_student(mongo_db):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        n = counter["n"]
        doc = {
            "name": f"Student {n}",
            "email": f"student{n}@example.com",
            "collegeEmail": f"student{n}@raisoni.net",
            "password": "unused-hash",
            "mobile": "98765432%02d" % n,
            "rollNo": f"R{n}",
            "regNo": f"REG{n}",
            "collegeName": "GHRCEM",
            "specialization": "B.Tech",
            "branch": "CSE",
            "year": "4th",
            "passoutYear": "2026",
            "createdAt": utcnow(),
        }
        doc.update(overrides)
        doc["_id"] = mongo_db[COLLECTIONS["users"]].insert_one(doc).inserted_id
        doc.pop("password")
        return doc

    return _make


@pytest.fixture
def student(make_student):
    return make_student(name="Asha Patil", email="asha@example.com", mobile="9000000001")


@pytest.fixture
def make_drive(mongo_db):
    def _make(**overrides):
        fields = {
            "company_name": "Acme Corp",
            "statuses": ["Applied", "Interview", "Selected"],
            "deadline": utcnow() + timedelta(days=1),
            "eligible_courses": ["B.Tech"],
            "eligible_passout_years": ["2026"],
        }
        fields.update(overrides)
        return DriveAdministration().create(DriveCreate(**fields))

    return _make


@pytest.fixture
def admin_headers():
    return {"Authorization": f"Bearer {create_admin_token()}"}


def auth_headers(student: dict) -> dict:
    return {"Authorization": f"Bearer {create_student_token(student['_id'])}"}


@pytest.fixture
def student_headers(student):
    return auth_headers(student)
