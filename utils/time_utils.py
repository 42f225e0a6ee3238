from datetime import datetime, timedelta
from typing import Optional, Tuple


def local_midnight(moment: Optional[datetime] = None) -> datetime:
    moment = moment or datetime.now()
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def day_bounds(moment: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """[00:00, next 00:00) of the local day containing moment."""
    start = local_midnight(moment)
    return start, start + timedelta(days=1)


def parse_day(value: str) -> datetime:
    """
    Parse an ISO date or datetime string into naive local time.
    Raises ValueError on anything else.
    """
    parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone().replace(tzinfo=None)
    return parsed
