import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from api.testusers.testusers_schema import RegistrantIn
from api.testusers.testusers_service import register_or_login
from utils.errors import shielded

logger = logging.getLogger(__name__)


class RegistrationController:
    @staticmethod
    @shielded("Internal Server Error. Please try again after sometime")
    def register(payload: RegistrantIn, db: Session) -> Dict[str, Any]:
        missing = payload.missing_fields()
        if missing:
            # answered with 200, the sign-up form reads the success flag
            logger.info("Registration rejected, missing fields: %s", ", ".join(missing))
            return {"message": "Please fill all the fields", "success": False}

        registrant, token, created = register_or_login(db, payload)
        return {
            "message": "User created successfully" if created else "User already exists",
            "success": True,
            "token": token,
        }
