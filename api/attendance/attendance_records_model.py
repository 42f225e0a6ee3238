from datetime import datetime

from sqlalchemy import (
    Column,
    Integer,
    String,
    DateTime,
    Enum,
    ForeignKey,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship
import enum
from config.database import Base


class AttendanceStatus(str, enum.Enum):
    present  = "present"
    absent   = "absent"
    late     = "late"
    half_day = "half-day"


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"
    __table_args__ = (
        UniqueConstraint("test_user_id", "date", name="uq_attendance_student_date"),
    )

    id             = Column(Integer, primary_key=True, index=True)
    test_user_id   = Column(Integer, ForeignKey("test_users.id"), nullable=False, index=True)
    email          = Column(String(255), nullable=False, index=True)
    # local midnight of the attendance day
    date           = Column(DateTime, nullable=False, index=True)
    check_in_time  = Column(DateTime, nullable=False)
    check_out_time = Column(DateTime, nullable=True)
    duration       = Column(Integer, nullable=True)  # minutes
    status         = Column(
        Enum(
            AttendanceStatus,
            native_enum=False,
            length=20,
            values_callable=lambda e: [m.value for m in e],
        ),
        nullable=False,
        default=AttendanceStatus.present,
    )
    created_at     = Column(DateTime, default=datetime.now, nullable=False)
    updated_at     = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False)

    student = relationship("Registrant")
