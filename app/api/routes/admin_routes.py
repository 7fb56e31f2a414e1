"""
Admin Routes

POST /admin/auth/login - Exchange the shared admin password for a token
GET /admin/college-stats - Number of students per college
GET /admin/students-by-college/{college} - Students of one college
"""

import hmac
from typing import List

from fastapi import APIRouter, Depends

from app.core.auth import create_admin_token, get_current_admin
from app.core.config import get_settings
from app.core.exceptions import Unauthorized, ValidationError
from app.services.student_service import StudentDirectory, get_student_directory
from app.schemas.schemas import (
    AdminLoginRequest, AdminTokenResponse, AdminPrincipal, CollegeStatsResponse, StudentResponse
)

router = APIRouter(prefix="/admin", tags=["Admin"])


@router.post("/auth/login", response_model=AdminTokenResponse)
async def admin_login(request: AdminLoginRequest):
    """Admin login. There is a single admin principal guarded by one password."""
    if not request.password:
        raise ValidationError("Password required")

    if not hmac.compare_digest(request.password.encode(), get_settings().admin_password.encode()):
        raise Unauthorized("Invalid admin password")

    return AdminTokenResponse(
        message="Admin login successful",
        token=create_admin_token(),
        admin=AdminPrincipal(),
    )


@router.get("/college-stats", response_model=CollegeStatsResponse)
async def college_stats(admin: dict = Depends(get_current_admin),
                        students: StudentDirectory = Depends(get_student_directory)):
    """Count of registered students per college."""
    return students.college_stats()


@router.get("/students-by-college/{college}", response_model=List[StudentResponse])
async def students_by_college(college: str, admin: dict = Depends(get_current_admin),
                              students: StudentDirectory = Depends(get_student_directory)):
    """All students of a college, sorted by name."""
    return students.students_by_college(college)
