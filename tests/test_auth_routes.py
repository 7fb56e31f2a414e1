import pytest

from app.core.auth import decode_token
from app.core.config import get_settings
from tests.conftest import auth_headers


def _register_payload(**overrides):
    payload = {
        "name": "Ravi Kumar",
        "email": "Ravi@Example.com",
        "collegeEmail": "ravi.kumar@raisoni.net",
        "password": "secret123",
        "mobile": "9876543210",
        "rollNo": "42",
        "regNo": "2022CSE042",
        "collegeName": "GHRCEM",
        "specialization": "B.Tech",
        "branch": "CSE",
        "year": "4th",
        "passoutYear": "2026",
    }
    payload.update(overrides)
    return payload


def test_register_and_login(client):
    response = client.post("/api/auth/register", json=_register_payload())
    assert response.status_code == 201
    data = response.json()
    assert data["message"] == "User registered successfully"
    assert data["user"]["email"] == "ravi@example.com"
    assert decode_token(data["token"])["role"] == "student"

    response = client.post("/api/auth/login", json={"email": "ravi@example.com", "password": "secret123"})
    assert response.status_code == 200
    assert response.json()["user"]["passoutYear"] == "2026"

    response = client.post("/api/auth/login", json={"email": "ravi@example.com", "password": "wrong"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid email or password"


def test_register_accepts_numeric_passout_year(client):
    response = client.post("/api/auth/register", json=_register_payload(passoutYear=2026))
    assert response.status_code == 201
    assert response.json()["user"]["passoutYear"] == "2026"


@pytest.mark.parametrize("overrides,detail", [
    ({"name": ""}, "All fields are required"),
    ({"passoutYear": None}, "All fields are required"),
    ({"collegeEmail": "ravi@gmail.com"}, "College email must end with raisoni.net"),
    ({"mobile": "12345"}, "Mobile number must be exactly 10 digits"),
])
def test_register_validation(client, overrides, detail):
    response = client.post("/api/auth/register", json=_register_payload(**overrides))
    assert response.status_code == 400
    assert response.json()["detail"] == detail


def test_register_duplicates(client):
    assert client.post("/api/auth/register", json=_register_payload()).status_code == 201

    response = client.post("/api/auth/register", json=_register_payload(regNo="OTHER"))
    assert response.json()["detail"] == "Email already registered"

    response = client.post("/api/auth/register", json=_register_payload(
        email="other@example.com", collegeEmail="other@raisoni.net"))
    assert response.status_code == 400
    assert response.json()["detail"] == "Registration number already exists"


def test_profile_hides_password(client, student, student_headers):
    response = client.get("/api/auth/profile", headers=student_headers)
    assert response.status_code == 200
    data = response.json()
    assert data["_id"] == str(student["_id"])
    assert data["regNo"] == student["regNo"]
    assert "password" not in data


def test_admin_login(client):
    response = client.post("/api/admin/auth/login", json={"password": get_settings().admin_password})
    assert response.status_code == 200
    assert response.json()["admin"] == {"id": "admin", "role": "admin"}
    assert decode_token(response.json()["token"])["role"] == "admin"

    assert client.post("/api/admin/auth/login", json={"password": "nope"}).status_code == 401
    assert client.post("/api/admin/auth/login", json={}).status_code == 400


def test_college_stats(client, admin_headers, make_student):
    make_student(collegeName="GHRCEM")
    make_student(collegeName="GHRCEM")
    make_student(collegeName="GHRUA")

    response = client.get("/api/admin/college-stats", headers=admin_headers)
    assert response.status_code == 200
    stats = response.json()
    assert stats["GHRCEM"] == 2
    assert stats["GHRUA"] == 1
    assert stats["GHRISTU"] == 0


def test_students_by_college(client, admin_headers, make_student):
    make_student(name="Zara", collegeName="GHRCEM")
    make_student(name="Aman", collegeName="GHRCEM")
    other = make_student(name="Neha", collegeName="GHRUA")

    response = client.get("/api/admin/students-by-college/GHRCEM", headers=admin_headers)
    assert response.status_code == 200
    assert [s["name"] for s in response.json()] == ["Aman", "Zara"]
    assert all("password" not in s for s in response.json())

    assert client.get("/api/admin/college-stats", headers=auth_headers(other)).status_code == 403
