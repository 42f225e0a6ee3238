from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from config.database import get_db
from api.testusers.testusers_schema import RegistrantIn
from api.testusers.testusers_controller import RegistrationController

router = APIRouter(prefix="/testusers", tags=["testusers"])


@router.post("", summary="Register a test registrant, or log in an existing one")
def register_test_user(
    payload: Optional[RegistrantIn] = None,
    db: Session = Depends(get_db),
):
    return RegistrationController.register(payload or RegistrantIn(), db)
