# api/attendance/admin/admin_controller.py

import logging
from datetime import datetime
from typing import Any, Dict, Optional

from fastapi import Response
from sqlalchemy.orm import Session

from api.attendance.admin.admin_service import AttendanceAdminService, RecordEntry
from api.attendance.admin.admin_schema import (
    UpdateStatusIn,
    SettingsUpdateIn,
    LocationsIn,
    ManualUpdateIn,
    BatchUpdateIn,
    SettingsOut,
    CampusLocationOut,
)
from api.attendance.attendance_records_model import AttendanceStatus
from api.attendance.attendance_schema import AttendanceRecordOut, AttendanceRecordWithStudent
from api.attendance.campus_locations_model import CAMPUSES
from api.testusers.testusers_schema import RegistrantOut
from config.settings import settings
from utils.errors import ValidationError, shielded
from utils.schemas import serialize
from utils.time_utils import parse_day

logger = logging.getLogger(__name__)

DEFAULT_HISTORY_LIMIT = 30


def _parse_student_id(raw: Optional[str]) -> int:
    if not raw:
        raise ValidationError("Student ID is required")
    try:
        return int(raw)
    except ValueError:
        raise ValidationError("Invalid student ID")


def _parse_limit(raw: Optional[str]) -> int:
    try:
        limit = int(raw)
    except (TypeError, ValueError):
        return DEFAULT_HISTORY_LIMIT
    return limit if limit > 0 else DEFAULT_HISTORY_LIMIT


def _parse_moment(raw: Optional[str]) -> Optional[datetime]:
    if not raw:
        return None
    try:
        return parse_day(raw)
    except ValueError:
        raise ValidationError("Invalid date format")


def _parse_status(raw: Optional[str]) -> Optional[AttendanceStatus]:
    if not raw:
        return None
    try:
        return AttendanceStatus(raw)
    except ValueError:
        raise ValidationError("Invalid status")


def _entry(data) -> RecordEntry:
    return RecordEntry(
        status=_parse_status(data.status),
        check_in=_parse_moment(data.check_in_time),
        check_out=_parse_moment(data.check_out_time),
        duration=data.duration,
    )


def preflight(methods: str) -> Response:
    """Bare CORS preflight answer for the dashboard's cross-origin calls."""
    return Response(
        status_code=200,
        headers={
            "Access-Control-Allow-Origin": "*",
            "Access-Control-Allow-Methods": methods,
            "Access-Control-Allow-Headers": "Content-Type, Authorization",
        },
    )


class AttendanceAdminController:
    @staticmethod
    @shielded("Error fetching students")
    def list_students(campus: Optional[str], db: Session) -> Dict[str, Any]:
        service = AttendanceAdminService(db)
        students = service.list_students(campus)
        return {
            "success": True,
            "students": [serialize(RegistrantOut, s) for s in students],
            "campusCounts": service.campus_counts(),
            "totalCount": len(students),
        }

    @staticmethod
    @shielded("Error fetching student history")
    def student_history(student_id: Optional[str], limit: Optional[str], db: Session) -> Dict[str, Any]:
        sid = _parse_student_id(student_id)
        records = AttendanceAdminService(db).student_history(sid, _parse_limit(limit))
        return {"success": True, "records": [serialize(AttendanceRecordOut, r) for r in records]}

    @staticmethod
    @shielded("Error fetching student record")
    def student_record(student_id: Optional[str], day: Optional[str], db: Session) -> Dict[str, Any]:
        sid = _parse_student_id(student_id)
        try:
            moment = parse_day(day) if day else None
        except ValueError:
            raise ValidationError("Invalid date format")

        record = AttendanceAdminService(db).student_record(sid, moment)
        return {
            "success": True,
            "record": serialize(AttendanceRecordOut, record) if record is not None else None,
        }

    @staticmethod
    @shielded("Error updating attendance status")
    def update_status(payload: UpdateStatusIn, db: Session) -> Dict[str, Any]:
        updated = AttendanceAdminService(db).correct_statuses(payload.update_type)
        return {
            "success": True,
            "message": "Attendance status updated successfully",
            "updatedCount": updated,
        }

    @staticmethod
    def verify(response: Response) -> Dict[str, Any]:
        # the password itself was checked by require_admin_body
        response.set_cookie(
            key=settings.ADMIN_COOKIE_NAME,
            value="true",
            httponly=True,
            samesite="strict",
            secure=settings.is_production,
        )
        logger.info("Admin dashboard session granted")
        return {"success": True, "message": "Admin authentication successful"}

    @staticmethod
    @shielded("Error fetching attendance settings")
    def get_settings(db: Session) -> Dict[str, Any]:
        current = AttendanceAdminService(db).get_settings()
        return {"success": True, "settings": serialize(SettingsOut, current)}

    @staticmethod
    @shielded("Error updating attendance settings")
    def update_settings(payload: SettingsUpdateIn, db: Session) -> Dict[str, Any]:
        if payload.settings is None:
            raise ValidationError("No settings provided")

        changes = payload.settings.model_dump(exclude_unset=True, exclude_none=True)
        updated = AttendanceAdminService(db).update_settings(changes)
        return {
            "success": True,
            "message": "Attendance settings updated successfully",
            "settings": serialize(SettingsOut, updated),
        }

    @staticmethod
    @shielded("Error managing campus locations")
    def manage_locations(payload: LocationsIn, db: Session):
        service = AttendanceAdminService(db)
        action = payload.action
        campus = payload.campus_data

        if action == "get":
            return {
                "success": True,
                "locations": [serialize(CampusLocationOut, loc) for loc in service.list_locations()],
            }

        if action in ("create", "update"):
            if campus is None or not campus.name or campus.latitude is None or campus.longitude is None:
                raise ValidationError("Missing required campus data fields")
            if campus.name not in CAMPUSES:
                raise ValidationError("Invalid campus name. Must be one of: bbsr, pkd, vzm")

            location = service.upsert_location(campus.model_dump(exclude_unset=True, exclude_none=True))
            verb = "created" if action == "create" else "updated"
            return {
                "success": True,
                "message": f"Campus location {verb} successfully",
                "location": serialize(CampusLocationOut, location),
            }

        if action == "toggle":
            if campus is None or not campus.name:
                raise ValidationError("Missing campus name")
            location = service.toggle_location(campus.name)
            state = "enabled" if location.enabled else "disabled"
            return {
                "success": True,
                "message": f"Campus location {state} successfully",
                "location": serialize(CampusLocationOut, location),
            }

        raise ValidationError("Invalid action")

    @staticmethod
    @shielded("Error updating attendance record")
    def update_manual(payload: ManualUpdateIn, db: Session) -> Dict[str, Any]:
        data = payload.record
        if data is None or data.test_user_id is None or not data.email or not data.date:
            raise ValidationError("Missing required fields in attendance record")

        day = _parse_moment(data.date)
        record = AttendanceAdminService(db).save_manual_record(
            data.test_user_id,
            data.email,
            day,
            _entry(data),
            record_id=data.id,
        )
        return {
            "success": True,
            "message": "Attendance record updated successfully",
            "record": serialize(AttendanceRecordOut, record),
        }

    @staticmethod
    @shielded("Error processing batch update")
    def batch_update(payload: BatchUpdateIn, db: Session) -> Dict[str, Any]:
        if not payload.student_ids:
            raise ValidationError("No students specified for batch update")
        data = payload.attendance_data
        if data is None or not data.date or not data.status:
            raise ValidationError("Missing required fields in attendance data")

        day = _parse_moment(data.date)
        updated, errors = AttendanceAdminService(db).batch_update(payload.student_ids, day, _entry(data))
        result: Dict[str, Any] = {
            "success": True,
            "message": f"Batch update completed successfully for {updated} students",
            "updateCount": updated,
        }
        if errors:
            result["errors"] = errors
        return result

    @staticmethod
    @shielded("Internal server error")
    def stats(db: Session) -> Dict[str, Any]:
        service = AttendanceAdminService(db)
        figures = service.dashboard_stats()
        figures["latestCheckIns"] = [
            serialize(AttendanceRecordWithStudent, r) for r in service.latest_check_ins()
        ]
        return {"success": True, "stats": figures}

    @staticmethod
    @shielded("Error fetching attendance records")
    def records(
        start_date: Optional[str],
        end_date: Optional[str],
        student_id: Optional[str],
        status: Optional[str],
        db: Session,
    ) -> Dict[str, Any]:
        start = _parse_moment(start_date) if start_date else None
        end = _parse_moment(end_date) if end_date else None
        sid = _parse_student_id(student_id) if student_id else None
        wanted = _parse_status(status) if status and status != "all" else None

        service = AttendanceAdminService(db)
        records = service.list_records(start, end, sid, wanted)
        students = service.list_students()
        return {
            "success": True,
            "records": [serialize(AttendanceRecordWithStudent, r) for r in records],
            "students": [serialize(RegistrantOut, s) for s in students],
            "stats": service.records_overview(records, len(students)),
        }
