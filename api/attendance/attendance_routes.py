# api/attendance/attendance_routes.py

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.admin_middleware import require_admin_query, require_admin_body
from api.attendance.attendance_schema import SessionStartIn, SessionTokenIn, ScanIn
from api.attendance.attendance_controller import AttendanceController
from utils.schemas import parse_body

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("", summary="Start (or resume) a registrant's attendance session")
def start_session(
    payload: Optional[SessionStartIn] = None,
    db: Session = Depends(get_db),
):
    return AttendanceController.start_session(payload or SessionStartIn(), db)


@router.get("", summary="Current rotating QR payload for an attendance session")
def current_qr(
    token: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return AttendanceController.current_qr(token, db)


@router.patch("", summary="Check that an attendance token is still valid")
def verify_session(
    payload: Optional[SessionTokenIn] = None,
    db: Session = Depends(get_db),
):
    return AttendanceController.verify_session(payload or SessionTokenIn(), db)


@router.delete(
    "",
    summary="Invalidate a registrant's attendance token",
    dependencies=[Depends(require_admin_query)],
)
def invalidate_session(
    email: Optional[str] = Query(None),
    db: Session = Depends(get_db),
):
    return AttendanceController.invalidate_session(email, db)


@router.post("/check", summary="Record a check-in or check-out from a scanned QR code")
def record_scan(
    body: Dict[str, Any] = Depends(require_admin_body),
    db: Session = Depends(get_db),
):
    return AttendanceController.record_scan(parse_body(ScanIn, body), db)


@router.get(
    "/check",
    summary="List attendance records with summary statistics",
    dependencies=[Depends(require_admin_query)],
)
def list_records(
    email: Optional[str] = Query(None),
    start_date: Optional[str] = Query(None, alias="startDate"),
    end_date: Optional[str] = Query(None, alias="endDate"),
    db: Session = Depends(get_db),
):
    return AttendanceController.list_records(email, start_date, end_date, db)
