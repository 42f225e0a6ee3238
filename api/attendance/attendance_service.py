# api/attendance/attendance_service.py

import hashlib
import hmac
import json
import logging
import math
import secrets
import time
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy.orm import Session, joinedload

from api.attendance.attendance_tokens_model import AttendanceToken, TOKEN_TTL
from api.attendance.attendance_records_model import AttendanceRecord, AttendanceStatus
from api.testusers.testusers_model import Registrant
from helpers.token_helper import issue_attendance_token, verify_token
from utils.errors import Conflict, InvalidToken, NotFound, ValidationError
from utils.time_utils import local_midnight

logger = logging.getLogger(__name__)

# QR codes rotate every QR_INTERVAL_SECONDS and stay scannable for
# QR_MAX_AGE_INTERVALS rotations
QR_INTERVAL_SECONDS = 2
QR_MAX_AGE_INTERVALS = 5

# a check-out earlier than this after check-in counts as half a day
FULL_DAY_MINUTES = 240

SCAN_ACTIONS = ("check-in", "check-out")


def purge_expired_tokens(db: Session, now: Optional[datetime] = None) -> int:
    """Delete attendance tokens older than their TTL. Returns rows removed."""
    cutoff = (now or datetime.now()) - TOKEN_TTL
    removed = (
        db.query(AttendanceToken)
        .filter(AttendanceToken.created_at < cutoff)
        .delete(synchronize_session=False)
    )
    db.commit()
    return removed


def qr_interval(epoch_seconds: Optional[float] = None) -> int:
    if epoch_seconds is None:
        epoch_seconds = time.time()
    return math.floor(epoch_seconds / QR_INTERVAL_SECONDS)


def qr_code(salt: str, interval: int) -> str:
    return hmac.new(salt.encode("utf-8"), str(interval).encode("utf-8"), hashlib.sha256).hexdigest()


def summarize_records(records: List[AttendanceRecord]) -> Dict[str, Any]:
    total = len(records)
    present = sum(1 for r in records if r.status == AttendanceStatus.present)
    half_days = sum(1 for r in records if r.status == AttendanceStatus.half_day)
    absent = sum(1 for r in records if r.status == AttendanceStatus.absent)
    percentage = f"{(present + half_days * 0.5) / total * 100:.2f}" if total else "0"
    return {
        "totalDays": total,
        "presentDays": present,
        "halfDays": half_days,
        "absentDays": absent,
        "attendancePercentage": percentage,
    }


class AttendanceService:
    def __init__(self, db: Session):
        self.db = db

    # ─── Session tokens ──────────────────────────────────────────────────────
    def _active_token(self, email: str) -> Optional[AttendanceToken]:
        purge_expired_tokens(self.db)
        return (
            self.db.query(AttendanceToken)
            .filter_by(email=email, is_active=True)
            .one_or_none()
        )

    def start_session(self, email: str) -> Tuple[AttendanceToken, Registrant, bool]:
        """
        Return the live attendance token for email, creating one if needed.
        Returns (token, registrant, created).
        """
        registrant = self.db.query(Registrant).filter(Registrant.email == email).first()
        if not registrant:
            raise NotFound("User not registered for baseline. Please register first.")

        purge_expired_tokens(self.db)
        existing = self.db.query(AttendanceToken).filter_by(email=email).one_or_none()
        if existing is not None and existing.is_active:
            existing.last_active = datetime.now()
            self.db.commit()
            return existing, registrant, False

        if existing is not None:
            # an invalidated token is replaced, not revived
            self.db.delete(existing)
            self.db.flush()

        salt = secrets.token_hex(16)
        token = AttendanceToken(
            email=email,
            test_user_id=registrant.id,
            token=issue_attendance_token(email, registrant.id, salt),
            salt=salt,
        )
        self.db.add(token)
        self.db.commit()
        self.db.refresh(token)
        return token, registrant, True

    def authenticate(self, token_str: Optional[str]) -> AttendanceToken:
        """
        Verify a presented attendance token against its stored, active
        record and mark it as just used.
        """
        decoded = verify_token(token_str)
        record = self._active_token(decoded["email"])
        if record is None or record.token != token_str:
            raise InvalidToken("Invalid or expired token")

        record.last_active = datetime.now()
        self.db.commit()
        return record

    def current_qr(self, token_str: Optional[str], epoch_seconds: Optional[float] = None) -> str:
        record = self.authenticate(token_str)
        interval = qr_interval(epoch_seconds)
        return json.dumps({
            "email": record.email,
            "id": record.test_user_id,
            "code": qr_code(record.salt, interval),
            "timestamp": interval,
        })

    def invalidate(self, email: str) -> AttendanceToken:
        record = self.db.query(AttendanceToken).filter_by(email=email).one_or_none()
        if record is None:
            raise NotFound("No attendance token found for this email")
        record.is_active = False
        self.db.commit()
        return record

    # ─── Scans ───────────────────────────────────────────────────────────────
    def _verify_scan(self, qr_data: str, epoch_seconds: Optional[float]) -> AttendanceToken:
        try:
            payload = json.loads(qr_data)
        except (TypeError, ValueError):
            raise ValidationError("Invalid QR data format")
        if not isinstance(payload, dict):
            raise ValidationError("Invalid QR data format")

        email = payload.get("email")
        student_id = payload.get("id")
        code = payload.get("code")
        stamp = payload.get("timestamp")
        if not email or student_id is None or not code or not isinstance(stamp, int):
            raise ValidationError("Invalid QR data content")

        if qr_interval(epoch_seconds) - stamp > QR_MAX_AGE_INTERVALS:
            raise ValidationError("QR code has expired. Please refresh.")

        record = self._active_token(email)
        if record is None:
            raise InvalidToken("No active session found for this user")

        if str(record.test_user_id) != str(student_id):
            raise ValidationError("Invalid QR code")
        if not hmac.compare_digest(str(code), qr_code(record.salt, stamp)):
            logger.warning("Rejected QR scan with bad code for %s", email)
            raise ValidationError("Invalid QR code")
        return record

    def record_scan(
        self,
        qr_data: str,
        action: str,
        now: Optional[datetime] = None,
        epoch_seconds: Optional[float] = None,
    ) -> Tuple[AttendanceRecord, str]:
        if action not in SCAN_ACTIONS:
            raise ValidationError("Invalid action. Must be 'check-in' or 'check-out'")

        token = self._verify_scan(qr_data, epoch_seconds)
        now = now or datetime.now()
        today = local_midnight(now)

        rec = (
            self.db.query(AttendanceRecord)
            .filter_by(test_user_id=token.test_user_id, date=today)
            .one_or_none()
        )
        student = self.db.get(Registrant, token.test_user_id)
        name = student.name if student else "Unknown"

        if action == "check-in":
            if rec is not None:
                raise Conflict("Attendance already recorded for today")
            rec = AttendanceRecord(
                test_user_id=token.test_user_id,
                email=token.email,
                date=today,
                check_in_time=now,
                status=AttendanceStatus.present,
            )
            self.db.add(rec)
        else:
            if rec is None:
                raise NotFound("No check-in record found for today")
            if rec.check_out_time is not None:
                raise Conflict("Check-out already recorded for today")
            rec.check_out_time = now
            rec.duration = int((now - rec.check_in_time).total_seconds() // 60)
            if rec.duration < FULL_DAY_MINUTES:
                rec.status = AttendanceStatus.half_day

        self.db.commit()
        self.db.refresh(rec)
        return rec, name

    # ─── Listing ─────────────────────────────────────────────────────────────
    def list_records(
        self,
        email: Optional[str] = None,
        start: Optional[datetime] = None,
        end: Optional[datetime] = None,
    ) -> List[AttendanceRecord]:
        query = self.db.query(AttendanceRecord).options(joinedload(AttendanceRecord.student))
        if email:
            query = query.filter(AttendanceRecord.email == email)
        if start is not None:
            query = query.filter(AttendanceRecord.date >= start)
        if end is not None:
            query = query.filter(AttendanceRecord.date <= end)
        return (
            query.order_by(AttendanceRecord.date.desc(), AttendanceRecord.check_in_time.desc())
            .all()
        )
