import secrets
import string
from typing import List, Optional

from sqlalchemy.orm import Session, joinedload

from config.settings import settings
from api.events.event_reg_model import EventRegistration


def list_registrations(db: Session) -> List[EventRegistration]:
    """Full-table read with the owning user loaded; volumes are small."""
    return (
        db.query(EventRegistration)
        .options(joinedload(EventRegistration.user))
        .order_by(EventRegistration.id.asc())
        .all()
    )


def find_registration(db: Session, user_id: int, event_id: str) -> Optional[EventRegistration]:
    return (
        db.query(EventRegistration)
        .filter_by(user_id=user_id, event_id=event_id)
        .first()
    )


def generate_ticket_id(length: int = 6) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return "".join(secrets.choice(alphabet) for _ in range(length)) + "DSW"


def register_for_event(
    db: Session,
    user_id: int,
    email: str,
    event_id: str,
    event_name: str,
) -> EventRegistration:
    registration = EventRegistration(
        user_id=user_id,
        event_id=event_id,
        event_name=event_name,
        ticket_id=generate_ticket_id(),
        email=email,
        is_zentrone=event_name == settings.EVENT_NAME,
    )
    db.add(registration)
    db.commit()
    db.refresh(registration)
    return registration
