# api/attendance/attendance_schema.py

from typing import Optional
from datetime import datetime

from api.attendance.attendance_records_model import AttendanceStatus
from utils.schemas import CamelModel, LenientBody


class AttendanceRecordOut(CamelModel):
    id: int
    test_user_id: int
    email: str
    date: datetime
    check_in_time: datetime
    check_out_time: Optional[datetime] = None
    duration: Optional[int] = None
    status: AttendanceStatus
    created_at: datetime
    updated_at: datetime


class RegistrantSummary(CamelModel):
    name: str
    email: str
    regno: Optional[str] = None
    branch: Optional[str] = None
    campus: Optional[str] = None


class AttendanceRecordWithStudent(AttendanceRecordOut):
    student: Optional[RegistrantSummary] = None


class SessionStartIn(LenientBody):
    email: Optional[str] = None


class SessionTokenIn(LenientBody):
    token: Optional[str] = None


class ScanIn(LenientBody):
    """
    A QR scan submitted by an admin. qr_data is the JSON string produced
    by GET /api/attendance.
    """
    qr_data: Optional[str] = None
    action: Optional[str] = None
