from datetime import datetime

from sqlalchemy import Column, Integer, String, Boolean, DateTime
from config.database import Base


class AttendanceSettings(Base):
    """Single-row table holding the attendance configuration."""
    __tablename__ = "attendance_settings"

    id                      = Column(Integer, primary_key=True)
    geo_location_enabled    = Column(Boolean, nullable=False, default=False)
    default_radius          = Column(Integer, nullable=False, default=50)
    max_qr_validity_seconds = Column(Integer, nullable=False, default=1800)
    multi_device_limit      = Column(Boolean, nullable=False, default=True)
    require_check_out       = Column(Boolean, nullable=False, default=True)
    last_updated            = Column(DateTime, default=datetime.now, nullable=False)
    updated_by              = Column(String(100), nullable=True)
    created_at              = Column(DateTime, default=datetime.now, nullable=False)
    updated_at              = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)
