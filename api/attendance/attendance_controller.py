# api/attendance/attendance_controller.py

from datetime import timedelta
from typing import Any, Dict, Optional

from sqlalchemy.orm import Session

from api.attendance.attendance_service import AttendanceService, summarize_records
from api.attendance.attendance_schema import (
    SessionStartIn,
    SessionTokenIn,
    ScanIn,
    AttendanceRecordWithStudent,
)
from utils.errors import ValidationError, shielded
from utils.schemas import serialize
from utils.time_utils import local_midnight, parse_day


def _student_summary(registrant) -> Dict[str, Any]:
    return {
        "name": registrant.name,
        "email": registrant.email,
        "regno": registrant.regno,
        "branch": registrant.branch,
        "campus": registrant.campus,
    }


class AttendanceController:
    @staticmethod
    @shielded("Internal Server Error. Please try again.")
    def start_session(payload: SessionStartIn, db: Session) -> Dict[str, Any]:
        if not payload.email:
            raise ValidationError("Email is required")

        token, registrant, created = AttendanceService(db).start_session(payload.email)
        return {
            "success": True,
            "message": "Attendance token created successfully" if created else "Token already exists",
            "token": token.token,
            "user": _student_summary(registrant),
        }

    @staticmethod
    @shielded("Internal Server Error. Please try again.")
    def current_qr(token: Optional[str], db: Session) -> Dict[str, Any]:
        if not token:
            raise ValidationError("Token is required")
        return {"success": True, "qrData": AttendanceService(db).current_qr(token)}

    @staticmethod
    @shielded("Internal Server Error. Please try again.")
    def verify_session(payload: SessionTokenIn, db: Session) -> Dict[str, Any]:
        if not payload.token:
            raise ValidationError("Token is required")
        record = AttendanceService(db).authenticate(payload.token)
        return {"success": True, "message": "Token is valid", "email": record.email}

    @staticmethod
    @shielded("Internal Server Error. Please try again.")
    def invalidate_session(email: Optional[str], db: Session) -> Dict[str, Any]:
        if not email:
            raise ValidationError("Email is required")
        AttendanceService(db).invalidate(email)
        return {"success": True, "message": "Token invalidated successfully"}

    @staticmethod
    @shielded("Internal Server Error. Please try again.")
    def record_scan(payload: ScanIn, db: Session) -> Dict[str, Any]:
        if not payload.qr_data or not payload.action:
            raise ValidationError("QR data and action (check-in/check-out) are required")

        rec, name = AttendanceService(db).record_scan(payload.qr_data, payload.action)
        data: Dict[str, Any] = {
            "email": rec.email,
            "name": name,
            "checkInTime": rec.check_in_time.isoformat(),
        }
        if payload.action == "check-out":
            data["checkOutTime"] = rec.check_out_time.isoformat()
            data["duration"] = rec.duration
            data["status"] = rec.status.value
            message = "Check-out recorded successfully"
        else:
            message = "Check-in recorded successfully"
        return {"success": True, "message": message, "data": data}

    @staticmethod
    @shielded("Internal Server Error. Please try again.")
    def list_records(
        email: Optional[str],
        start_date: Optional[str],
        end_date: Optional[str],
        db: Session,
    ) -> Dict[str, Any]:
        try:
            start = local_midnight(parse_day(start_date)) if start_date else None
            # the end date is inclusive of its whole day
            end = local_midnight(parse_day(end_date)) + timedelta(days=1) - timedelta(microseconds=1) if end_date else None
        except ValueError:
            raise ValidationError("Invalid date format")

        records = AttendanceService(db).list_records(email=email, start=start, end=end)
        return {
            "success": True,
            "data": [serialize(AttendanceRecordWithStudent, r) for r in records],
            "stats": summarize_records(records),
        }
