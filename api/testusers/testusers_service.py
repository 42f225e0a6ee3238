from typing import Optional, Tuple

from sqlalchemy.orm import Session

from api.testusers.testusers_model import Registrant
from api.testusers.testusers_schema import RegistrantIn
from helpers.token_helper import issue_token


def get_by_email(db: Session, email: str) -> Optional[Registrant]:
    return db.query(Registrant).filter(Registrant.email == email).first()


def register_or_login(db: Session, data: RegistrantIn) -> Tuple[Registrant, str, bool]:
    """
    Find the registrant by email or create it, then issue a fresh token.
    Returns (registrant, token, created).
    """
    existing = get_by_email(db, data.email)
    if existing is not None:
        return existing, issue_token(existing.email), False

    registrant = Registrant(
        name=data.name,
        email=data.email,
        regno=data.regno,
        phone=data.phone,
        branch=data.branch,
        domain=data.domain,
        campus=data.campus,
    )
    db.add(registrant)
    db.commit()
    db.refresh(registrant)
    return registrant, issue_token(registrant.email), True
