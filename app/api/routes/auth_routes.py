"""
Authentication Routes

POST /auth/register - Register new student account
POST /auth/login - Login and get JWT token
GET /auth/profile - Get current student's profile
"""

from fastapi import APIRouter, Depends

from app.core.auth import create_student_token, get_current_student
from app.services.student_service import StudentDirectory, get_student_directory, public_student
from app.schemas.schemas import (
    StudentRegisterRequest, LoginRequest, TokenResponse, StudentResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])


def _user_summary(student: dict) -> dict:
    return {
        "id": student["_id"],
        "name": student["name"],
        "email": student["email"],
        "collegeEmail": student.get("collegeEmail"),
        "specialization": student.get("specialization"),
        "branch": student.get("branch"),
        "year": student.get("year"),
        "passoutYear": student.get("passoutYear"),
    }


@router.post("/register", response_model=TokenResponse, status_code=201)
async def register(request: StudentRegisterRequest,
                   students: StudentDirectory = Depends(get_student_directory)):
    """
    Register a new student account.

    Returns a token right away so the student lands logged in.
    """
    student = students.register(request)
    return TokenResponse(
        message="User registered successfully",
        token=create_student_token(student["_id"]),
        user=_user_summary(student),
    )


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest,
                students: StudentDirectory = Depends(get_student_directory)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    student = students.authenticate(request.email, request.password)
    return TokenResponse(
        message="Login successful",
        token=create_student_token(student["_id"]),
        user=_user_summary(student),
    )


@router.get("/profile", response_model=StudentResponse)
async def get_profile(user: dict = Depends(get_current_student),
                      students: StudentDirectory = Depends(get_student_directory)):
    """Get current student's profile (without password)."""
    return public_student(students.get(user["id"]))
