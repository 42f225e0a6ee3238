import logging
from typing import Any, Dict

from fastapi import Request
from sqlalchemy.orm import Session

from config.settings import settings
from helpers.token_helper import verify_token
from api.user.user_model import User
from api.events.event_reg_model import EventRegistration
from api.user.user_schema import UserOut
from api.events.events_schema import EventRegistrationOut
from utils.schemas import serialize

logger = logging.getLogger(__name__)

NOT_VERIFIED = {"isAuth": False, "error": "Error verifying user"}


def resolve_current_user(request: Request, db: Session) -> Dict[str, Any]:
    """
    Resolve the end user behind the session cookie.

    Never raises: a missing cookie, an unknown user and any internal failure
    all come back as {"isAuth": False, "error": ...}, which callers treat as
    unauthenticated.
    """
    try:
        token = request.cookies.get(settings.SESSION_COOKIE_NAME)
        if not token:
            return {"isAuth": False, "error": "No token found"}

        decoded = verify_token(token)
        email = decoded["email"]

        user = db.query(User).filter(User.email == email).first()
        if not user:
            return {"isAuth": False, "error": "No user found"}

        event = (
            db.query(EventRegistration)
            .filter(
                EventRegistration.email == email,
                EventRegistration.event_name == settings.EVENT_NAME,
            )
            .first()
        )

        return {
            "isAuth": True,
            "user": serialize(UserOut, user),
            "event": serialize(EventRegistrationOut, event) if event else None,
        }
    except Exception as exc:
        logger.error("Error in resolve_current_user: %s", exc)
        return dict(NOT_VERIFIED)


def current_user_middleware(request: Request) -> Dict[str, Any]:
    """
    Dependency form of resolve_current_user. Opens its own session so that
    an unreachable store also degrades to "not authenticated".
    """
    try:
        db = request.app.state.database.session()
    except Exception as exc:
        logger.error("Error in current_user_middleware: %s", exc)
        return dict(NOT_VERIFIED)
    try:
        return resolve_current_user(request, db)
    finally:
        db.close()
