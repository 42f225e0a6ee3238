from typing import Optional
from datetime import datetime

from utils.schemas import CamelModel, LenientBody

REQUIRED_FIELDS = ("name", "email", "regno", "phone", "branch")


class RegistrantIn(LenientBody):
    """
    Sign-up payload. Every field is optional at parse time; the route
    answers missing required fields itself.
    """
    name: Optional[str] = None
    email: Optional[str] = None
    regno: Optional[str] = None
    phone: Optional[str] = None
    branch: Optional[str] = None
    domain: Optional[str] = None
    campus: Optional[str] = None

    def missing_fields(self):
        return [f for f in REQUIRED_FIELDS if not (getattr(self, f) or "").strip()]


class RegistrantOut(CamelModel):
    id: int
    name: str
    email: str
    regno: str
    phone: str
    branch: str
    domain: Optional[str] = None
    campus: Optional[str] = None
    created_at: datetime
    updated_at: datetime
