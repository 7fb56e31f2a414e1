"""
Placement Drive Routes

Admin:
POST /placement/create-drive - Create a drive
GET /placement/admin/all-drives - All drives with isPast
GET /placement/admin/drive/{drive_id} - One drive with registrant details
PUT /placement/admin/update-drive/{drive_id} - Replace a drive definition
DELETE /placement/admin/delete-drive/{drive_id} - Delete a drive and its registrations

Student:
GET /placement/get-drives - Active drives the student is eligible for (?phase=current|past)
POST /placement/update-status - Record own status in a drive (before deadline)
GET /placement/past-drives - Drives the student has registered in
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from app.core.auth import get_current_admin, get_current_student
from app.services.drive_service import DriveAdministration, get_drive_administration
from app.services.eligibility import DrivePhase, EligibilityFilter, get_eligibility_filter
from app.services.registration_ledger import RegistrationLedger, get_registration_ledger
from app.services.student_service import StudentDirectory, get_student_directory
from app.schemas.schemas import (
    DriveCreate, DriveUpdate, DriveResponse, DriveMessageResponse,
    StatusUpdateRequest, MessageResponse
)

router = APIRouter(prefix="/placement", tags=["Placement Drives"])


# ============================================================
# ADMIN
# ============================================================

@router.post("/create-drive", response_model=DriveMessageResponse, status_code=201)
async def create_drive(data: DriveCreate, admin: dict = Depends(get_current_admin),
                       drives: DriveAdministration = Depends(get_drive_administration)):
    """Create a new placement drive. It starts active with no registrations."""
    drive = drives.create(data)
    return {"message": "Placement drive created successfully", "drive": drive}


@router.get("/admin/all-drives", response_model=List[DriveResponse])
async def all_drives(admin: dict = Depends(get_current_admin),
                     drives: DriveAdministration = Depends(get_drive_administration)):
    """All drives, newest first, flagged past/current at request time."""
    return drives.get_all()


@router.get("/admin/drive/{drive_id}", response_model=DriveResponse)
async def get_drive(drive_id: str, admin: dict = Depends(get_current_admin),
                    drives: DriveAdministration = Depends(get_drive_administration)):
    """Single drive with registrations joined to student details."""
    return drives.get_one(drive_id)


@router.put("/admin/update-drive/{drive_id}", response_model=DriveMessageResponse)
async def update_drive(drive_id: str, data: DriveUpdate, admin: dict = Depends(get_current_admin),
                       drives: DriveAdministration = Depends(get_drive_administration)):
    """Replace a drive's definition. Registrations are kept as they are."""
    drive = drives.update(drive_id, data)
    return {"message": "Drive updated successfully", "drive": drive}


@router.delete("/admin/delete-drive/{drive_id}", response_model=MessageResponse)
async def delete_drive(drive_id: str, admin: dict = Depends(get_current_admin),
                       drives: DriveAdministration = Depends(get_drive_administration)):
    """Delete a drive. All of its registrations go with it."""
    drives.delete(drive_id)
    return MessageResponse(message="Drive deleted successfully")


# ============================================================
# STUDENT
# ============================================================

@router.get("/get-drives", response_model=List[DriveResponse])
async def get_drives(phase: Optional[DrivePhase] = Query(None),
                     user: dict = Depends(get_current_student),
                     students: StudentDirectory = Depends(get_student_directory),
                     eligibility: EligibilityFilter = Depends(get_eligibility_filter)):
    """
    Drives matching the student's specialization and passout year.

    Without a phase, current and past drives are both returned.
    """
    student = students.get(user["id"])
    return eligibility.list_eligible_drives(student, phase)


@router.post("/update-status", response_model=DriveMessageResponse)
async def update_status(request: StatusUpdateRequest, user: dict = Depends(get_current_student),
                        students: StudentDirectory = Depends(get_student_directory),
                        ledger: RegistrationLedger = Depends(get_registration_ledger)):
    """Record the student's current stage in a drive. Rejected after the deadline."""
    student = students.get(user["id"])
    drive = ledger.submit_status(request.drive_id, student, request.status)
    return {"message": "Status updated successfully", "drive": drive}


@router.get("/past-drives", response_model=List[DriveResponse])
async def past_drives(user: dict = Depends(get_current_student),
                      ledger: RegistrationLedger = Depends(get_registration_ledger)):
    """Every drive the student has a registration in."""
    return ledger.drives_for_student(user["id"])
