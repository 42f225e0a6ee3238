# api/attendance/admin/admin_service.py

import logging
import math
from datetime import datetime, timedelta
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.orm import Session, joinedload

from api.attendance.attendance_records_model import AttendanceRecord, AttendanceStatus
from api.attendance.attendance_settings_model import AttendanceSettings
from api.attendance.attendance_tokens_model import AttendanceToken
from api.attendance.attendance_service import purge_expired_tokens
from api.attendance.campus_locations_model import CampusLocation, CAMPUSES
from api.testusers.testusers_model import Registrant
from utils.errors import NotFound, ValidationError
from utils.time_utils import day_bounds

logger = logging.getLogger(__name__)

PENDING_CHECKOUTS = "pending-checkouts"
UPDATED_BY = "admin"

# weeks start on Sunday
WEEKDAY_LABELS = ("Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat")
MONTH_LABELS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")
LATEST_CHECK_INS = 5
MONTHLY_WINDOW_DAYS = 30


class RecordEntry(NamedTuple):
    """Admin-supplied values for one attendance day."""
    status: Optional[AttendanceStatus]
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    duration: Optional[int]


def round_half_up(value: float) -> int:
    return math.floor(value + 0.5)


def percent(part: int, whole: int) -> int:
    return round_half_up(part / whole * 100) if whole else 0


def week_start(today: datetime) -> datetime:
    return today - timedelta(days=(today.weekday() + 1) % 7)


class AttendanceAdminService:
    def __init__(self, db: Session):
        self.db = db

    # ─── Roster ──────────────────────────────────────────────────────────────
    def list_students(self, campus: Optional[str] = None) -> List[Registrant]:
        query = self.db.query(Registrant)
        if campus and campus != "all":
            query = query.filter(func.lower(Registrant.campus) == campus.lower())
        return query.order_by(Registrant.name.asc()).all()

    def campus_counts(self) -> Dict[str, int]:
        """Registrants per known campus over the whole roster."""
        counts = {c: 0 for c in CAMPUSES}
        campus = func.lower(Registrant.campus)
        rows = (
            self.db.query(campus, func.count(Registrant.id))
            .filter(campus.in_(CAMPUSES))
            .group_by(campus)
            .all()
        )
        for name, count in rows:
            counts[name] = count
        return counts

    # ─── Records ─────────────────────────────────────────────────────────────
    def student_history(self, student_id: int, limit: int) -> List[AttendanceRecord]:
        return (
            self.db.query(AttendanceRecord)
            .filter_by(test_user_id=student_id)
            .order_by(AttendanceRecord.date.desc())
            .limit(limit)
            .all()
        )

    def student_record(self, student_id: int, day: Optional[datetime] = None) -> Optional[AttendanceRecord]:
        start, end = day_bounds(day)
        return (
            self.db.query(AttendanceRecord)
            .filter(
                AttendanceRecord.test_user_id == student_id,
                AttendanceRecord.date >= start,
                AttendanceRecord.date < end,
            )
            .first()
        )

    def correct_statuses(self, update_type: Optional[str], now: Optional[datetime] = None) -> int:
        """
        Bulk status correction. Only "pending-checkouts" changes anything:
        today's present records with a check-in and no check-out become
        half-day. Returns the number of rows changed.
        """
        if update_type != PENDING_CHECKOUTS:
            return 0

        start, end = day_bounds(now)
        updated = (
            self.db.query(AttendanceRecord)
            .filter(
                AttendanceRecord.date >= start,
                AttendanceRecord.date < end,
                AttendanceRecord.check_in_time.isnot(None),
                AttendanceRecord.check_out_time.is_(None),
                AttendanceRecord.status == AttendanceStatus.present,
            )
            .update({AttendanceRecord.status: AttendanceStatus.half_day}, synchronize_session=False)
        )
        self.db.commit()
        logger.info("Marked %d pending check-outs as half-day", updated)
        return updated

    # ─── Manual edits ────────────────────────────────────────────────────────
    def _day_record(self, student_id: int, day: datetime) -> Optional[AttendanceRecord]:
        start, end = day_bounds(day)
        return (
            self.db.query(AttendanceRecord)
            .filter(
                AttendanceRecord.test_user_id == student_id,
                AttendanceRecord.date >= start,
                AttendanceRecord.date < end,
            )
            .first()
        )

    @staticmethod
    def _apply(record: AttendanceRecord, entry: RecordEntry) -> None:
        """
        Overwrite a record with admin values. An omitted check-in keeps the
        stored one; an omitted check-out clears it. Duration is taken as
        given, else recomputed from the two times.
        """
        if entry.status is not None:
            record.status = entry.status
        if entry.check_in is not None:
            record.check_in_time = entry.check_in
        record.check_out_time = entry.check_out

        if entry.duration:
            record.duration = entry.duration
        elif record.check_in_time and record.check_out_time:
            minutes = (record.check_out_time - record.check_in_time).total_seconds() / 60
            record.duration = round_half_up(minutes)
        else:
            record.duration = None

    def _new_record(self, student_id: int, email: str, day: datetime, entry: RecordEntry) -> AttendanceRecord:
        if entry.check_in is None:
            raise ValidationError("Check-in time is required for a new record")
        record = AttendanceRecord(
            test_user_id=student_id,
            email=email,
            date=day_bounds(day)[0],
            status=entry.status or AttendanceStatus.present,
        )
        self.db.add(record)
        return record

    def save_manual_record(
        self,
        student_id: int,
        email: str,
        day: datetime,
        entry: RecordEntry,
        record_id: Optional[int] = None,
    ) -> AttendanceRecord:
        """
        Edit the record with record_id, or the student's record for day,
        creating it when there is none.
        """
        if self.db.get(Registrant, student_id) is None:
            raise NotFound("Student not found")

        if record_id is not None:
            record = self.db.get(AttendanceRecord, record_id)
            if record is None:
                raise NotFound("Attendance record not found")
        else:
            record = self._day_record(student_id, day)
            if record is None:
                record = self._new_record(student_id, email, day, entry)

        self._apply(record, entry)
        self.db.commit()
        self.db.refresh(record)
        logger.info("Attendance record %s saved manually", record.id)
        return record

    def batch_update(self, student_ids: List[int], day: datetime, entry: RecordEntry) -> Tuple[int, List[str]]:
        """
        Apply one day's entry to every listed student. Students that cannot
        be updated are reported, not fatal. Returns (updated, errors).
        """
        students = self.db.query(Registrant).filter(Registrant.id.in_(student_ids)).all()
        if not students:
            raise NotFound("No valid students found")

        updated = 0
        errors: List[str] = []
        for student in students:
            record = self._day_record(student.id, day)
            if record is None:
                if entry.check_in is None:
                    errors.append(
                        f"Error for student {student.name} ({student.email}): "
                        "check-in time is required for a new record"
                    )
                    continue
                record = self._new_record(student.id, student.email, day, entry)
            self._apply(record, entry)
            updated += 1

        self.db.commit()
        logger.info("Batch attendance update touched %d of %d students", updated, len(students))
        return updated, errors

    # ─── Dashboard figures ───────────────────────────────────────────────────
    def _records_between(self, start: datetime, end: datetime) -> List[AttendanceRecord]:
        return (
            self.db.query(AttendanceRecord)
            .filter(AttendanceRecord.date >= start, AttendanceRecord.date < end)
            .all()
        )

    def active_sessions(self) -> int:
        purge_expired_tokens(self.db)
        return self.db.query(AttendanceToken).filter_by(is_active=True).count()

    def total_students(self) -> int:
        return self.db.query(func.count(Registrant.id)).scalar() or 0

    def dashboard_stats(self, now: Optional[datetime] = None) -> Dict[str, Any]:
        """Today's and this week's attendance figures for the scanner dashboard."""
        today, tomorrow = day_bounds(now)
        total = self.total_students()
        todays = self._records_between(today, tomorrow)
        unique_today = len({r.email for r in todays})

        start = week_start(today)
        weekly = self._records_between(start, tomorrow)
        weekly_stats = []
        for offset, label in enumerate(WEEKDAY_LABELS):
            day = start + timedelta(days=offset)
            attendees = len({r.email for r in weekly if day <= r.date < day + timedelta(days=1)})
            weekly_stats.append({"day": label, "attendance": attendees, "rate": percent(attendees, total)})

        durations = [r.duration for r in todays if r.duration]
        return {
            "todayCheckins": sum(1 for r in todays if r.check_out_time is None),
            "todayCheckouts": sum(1 for r in todays if r.check_out_time is not None),
            "activeSessions": self.active_sessions(),
            "totalStudents": total,
            "uniqueAttendees": unique_today,
            "attendanceRate": percent(unique_today, total),
            "weeklyStats": weekly_stats,
            "avgDuration": round_half_up(sum(durations) / len(durations)) if durations else 0,
        }

    def latest_check_ins(self, limit: int = LATEST_CHECK_INS) -> List[AttendanceRecord]:
        return (
            self.db.query(AttendanceRecord)
            .options(joinedload(AttendanceRecord.student))
            .filter(AttendanceRecord.check_out_time.is_(None))
            .order_by(AttendanceRecord.check_in_time.desc())
            .limit(limit)
            .all()
        )

    def list_records(
        self,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
        student_id: Optional[int] = None,
        status: Optional[AttendanceStatus] = None,
    ) -> List[AttendanceRecord]:
        query = self.db.query(AttendanceRecord).options(joinedload(AttendanceRecord.student))
        if start is not None:
            query = query.filter(AttendanceRecord.date >= start)
        if end is not None:
            query = query.filter(AttendanceRecord.date <= end)
        if student_id is not None:
            query = query.filter(AttendanceRecord.test_user_id == student_id)
        if status is not None:
            query = query.filter(AttendanceRecord.status == status)
        return query.order_by(AttendanceRecord.date.desc()).all()

    def records_overview(
        self,
        records: List[AttendanceRecord],
        total: int,
        now: Optional[datetime] = None,
    ) -> Dict[str, Any]:
        """Today/week/month figures over an already filtered record list."""
        today, tomorrow = day_bounds(now)

        def on_day(day: datetime) -> List[AttendanceRecord]:
            return [r for r in records if day <= r.date < day + timedelta(days=1)]

        todays = on_day(today)
        present_today = sum(1 for r in todays if r.status == AttendanceStatus.present)
        partial_today = sum(1 for r in todays if r.status == AttendanceStatus.half_day)

        start = week_start(today)
        weekly = [
            sum(1 for r in on_day(start + timedelta(days=i)) if r.status == AttendanceStatus.present)
            for i in range(7)
        ]

        labels, present, absent, partial = [], [], [], []
        for back in range(MONTHLY_WINDOW_DAYS - 1, -1, -1):
            day = today - timedelta(days=back)
            rows = on_day(day)
            p = sum(1 for r in rows if r.status == AttendanceStatus.present)
            h = sum(1 for r in rows if r.status == AttendanceStatus.half_day)
            labels.append(f"{MONTH_LABELS[day.month - 1]} {day.day}")
            present.append(p)
            partial.append(h)
            absent.append(max(0, total - (p + h)))

        durations = [r.duration for r in todays if r.duration]
        return {
            "totalStudents": total,
            "presentToday": present_today,
            "absentToday": max(0, total - (present_today + partial_today)),
            "partialToday": partial_today,
            "checkInsToday": sum(1 for r in todays if r.check_out_time is None),
            "checkOutsToday": sum(1 for r in todays if r.check_out_time is not None),
            "avgDuration": round(sum(durations) / len(durations), 2) if durations else 0,
            "weeklyAttendance": weekly,
            "monthlyAttendance": {
                "labels": labels,
                "present": present,
                "absent": absent,
                "partial": partial,
            },
            "activeSessions": self.active_sessions(),
        }

    # ─── Settings ────────────────────────────────────────────────────────────
    def get_settings(self) -> AttendanceSettings:
        settings = self.db.query(AttendanceSettings).order_by(AttendanceSettings.id.asc()).first()
        if settings is None:
            settings = AttendanceSettings(last_updated=datetime.now(), updated_by=UPDATED_BY)
            self.db.add(settings)
            self.db.commit()
            self.db.refresh(settings)
        return settings

    def update_settings(self, changes: Dict[str, Any]) -> AttendanceSettings:
        settings = self.get_settings()
        for field, value in changes.items():
            setattr(settings, field, value)
        settings.last_updated = datetime.now()
        settings.updated_by = UPDATED_BY
        self.db.commit()
        self.db.refresh(settings)
        return settings

    # ─── Campus locations ────────────────────────────────────────────────────
    def list_locations(self) -> List[CampusLocation]:
        return self.db.query(CampusLocation).order_by(CampusLocation.name.asc()).all()

    def upsert_location(self, data: Dict[str, Any]) -> CampusLocation:
        location = self.db.query(CampusLocation).filter_by(name=data["name"]).one_or_none()
        if location is None:
            location = CampusLocation(name=data["name"])
            self.db.add(location)
        for field, value in data.items():
            setattr(location, field, value)
        location.last_updated = datetime.now()
        location.updated_by = UPDATED_BY
        self.db.commit()
        self.db.refresh(location)
        return location

    def toggle_location(self, name: str) -> CampusLocation:
        location = self.db.query(CampusLocation).filter_by(name=name).one_or_none()
        if location is None:
            raise NotFound("Campus location not found")
        location.enabled = not location.enabled
        location.last_updated = datetime.now()
        location.updated_by = UPDATED_BY
        self.db.commit()
        self.db.refresh(location)
        return location
