# api/attendance/admin/admin_schema.py

from typing import List, Optional
from datetime import datetime

from pydantic import Field

from utils.schemas import CamelModel, LenientBody


class UpdateStatusIn(LenientBody):
    update_type: Optional[str] = None


class SettingsFields(LenientBody):
    geo_location_enabled: Optional[bool] = None
    default_radius: Optional[int] = Field(None, ge=0)
    max_qr_validity_seconds: Optional[int] = Field(None, ge=1)
    multi_device_limit: Optional[bool] = None
    require_check_out: Optional[bool] = None


class SettingsUpdateIn(LenientBody):
    settings: Optional[SettingsFields] = None


class CampusDataIn(LenientBody):
    name: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[float] = Field(None, ge=0)
    enabled: Optional[bool] = None


class LocationsIn(LenientBody):
    action: Optional[str] = None
    campus_data: Optional[CampusDataIn] = None


class SettingsOut(CamelModel):
    id: int
    geo_location_enabled: bool
    default_radius: int
    max_qr_validity_seconds: int
    multi_device_limit: bool
    require_check_out: bool
    last_updated: datetime
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CampusLocationOut(CamelModel):
    id: int
    name: str
    latitude: float
    longitude: float
    radius: float
    enabled: bool
    last_updated: datetime
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class ManualRecordIn(LenientBody):
    """One attendance record as edited on the dashboard. id picks an existing row."""
    id: Optional[int] = None
    test_user_id: Optional[int] = None
    email: Optional[str] = None
    date: Optional[str] = None
    status: Optional[str] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)


class ManualUpdateIn(LenientBody):
    record: Optional[ManualRecordIn] = None


class BatchAttendanceIn(LenientBody):
    date: Optional[str] = None
    status: Optional[str] = None
    check_in_time: Optional[str] = None
    check_out_time: Optional[str] = None
    duration: Optional[int] = Field(None, ge=0)


class BatchUpdateIn(LenientBody):
    student_ids: Optional[List[int]] = None
    attendance_data: Optional[BatchAttendanceIn] = None
