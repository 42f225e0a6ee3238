# api/attendance/admin/admin_routes.py

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.admin_middleware import require_admin_query, require_admin_body
from api.attendance.admin.admin_schema import (
    UpdateStatusIn,
    SettingsUpdateIn,
    LocationsIn,
    ManualUpdateIn,
    BatchUpdateIn,
)
from api.attendance.admin.admin_controller import AttendanceAdminController, preflight
from utils.schemas import parse_body

router = APIRouter(prefix="/attendance/admin", tags=["attendance-admin"])


@router.get(
    "/students",
    summary="Registrant roster with per-campus counts",
    dependencies=[Depends(require_admin_query)],
)
def list_students(
    campus: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return AttendanceAdminController.list_students(campus, db)


@router.get(
    "/student-history",
    summary="A registrant's attendance records, newest first",
    dependencies=[Depends(require_admin_query)],
)
def student_history(
    student_id: Optional[str] = Query(None, alias="studentId"),
    limit: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return AttendanceAdminController.student_history(student_id, limit, db)


@router.get(
    "/student-record",
    summary="A registrant's attendance record for one day",
    dependencies=[Depends(require_admin_query)],
)
def student_record(
    student_id: Optional[str] = Query(None, alias="studentId"),
    date: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return AttendanceAdminController.student_record(student_id, date, db)


@router.get(
    "/records",
    summary="Filtered attendance records with dashboard figures",
    dependencies=[Depends(require_admin_query)],
)
def list_records(
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    student_id: Optional[str] = Query(None, alias="studentId"),
    status: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return AttendanceAdminController.records(start_date, end_date, student_id, status, db)


@router.get(
    "/stats",
    summary="Today's and this week's attendance figures",
    dependencies=[Depends(require_admin_query)],
)
def stats(db: Session = Depends(get_db)):
    return AttendanceAdminController.stats(db)


@router.post("/update-status", summary="Bulk attendance status correction")
def update_status(
    body: Dict[str, Any] = Depends(require_admin_body),
    db: Session = Depends(get_db),
):
    return AttendanceAdminController.update_status(parse_body(UpdateStatusIn, body), db)


@router.post("/update-manual", summary="Create or edit one attendance record")
def update_manual(
    body: Dict[str, Any] = Depends(require_admin_body),
    db: Session = Depends(get_db),
):
    return AttendanceAdminController.update_manual(parse_body(ManualUpdateIn, body), db)


@router.post("/batch-update", summary="Apply one day's attendance to many students")
def batch_update(
    body: Dict[str, Any] = Depends(require_admin_body),
    db: Session = Depends(get_db),
):
    return AttendanceAdminController.batch_update(parse_body(BatchUpdateIn, body), db)


@router.post(
    "/verify",
    summary="Check the admin password and open a dashboard session",
    dependencies=[Depends(require_admin_body)],
)
def verify(response: Response):
    return AttendanceAdminController.verify(response)


@router.options("/verify", include_in_schema=False)
def verify_preflight():
    return preflight("POST, OPTIONS")


@router.get(
    "/settings",
    summary="Current attendance settings",
    dependencies=[Depends(require_admin_query)],
)
def get_settings(db: Session = Depends(get_db)):
    return AttendanceAdminController.get_settings(db)


@router.post("/settings", summary="Update attendance settings")
def update_settings(
    body: Dict[str, Any] = Depends(require_admin_body),
    db: Session = Depends(get_db),
):
    return AttendanceAdminController.update_settings(parse_body(SettingsUpdateIn, body), db)


@router.options("/settings", include_in_schema=False)
def settings_preflight():
    return preflight("GET, POST, OPTIONS")


@router.post("/locations", summary="List, create, update or toggle campus locations")
def manage_locations(
    body: Dict[str, Any] = Depends(require_admin_body),
    db: Session = Depends(get_db),
):
    return AttendanceAdminController.manage_locations(parse_body(LocationsIn, body), db)


@router.options("/locations", include_in_schema=False)
def locations_preflight():
    return preflight("POST, OPTIONS")
