# helpers/token_reaper.py

import logging

from apscheduler.schedulers.background import BackgroundScheduler

from api.attendance.attendance_service import purge_expired_tokens
from config.database import Database

logger = logging.getLogger(__name__)


def reap_expired_tokens(database: Database) -> int:
    db = database.session()
    try:
        removed = purge_expired_tokens(db)
        if removed:
            logger.info("Removed %d expired attendance tokens", removed)
        return removed
    finally:
        db.close()


def start_token_reaper(database: Database, interval_seconds: int) -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        reap_expired_tokens,
        "interval",
        seconds=interval_seconds,
        args=[database],
        id="attendance-token-reaper",
        max_instances=1,
        coalesce=True,
    )
    scheduler.start()
    logger.info("Attendance token reaper started (every %ss)", interval_seconds)
    return scheduler
