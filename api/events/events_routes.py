from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import current_user_middleware
from api.events.events_schema import EventRegisterIn
from api.events.events_controller import EventsController

router = APIRouter(tags=["events"])


@router.get("/userdata", summary="List every event registration with its user")
def user_data(request: Request):
    return EventsController.list_user_data(request.app.state.database)


@router.get("/claim", summary="Validate a ticket id")
def lookup_claim(id: Optional[str] = Query(None)):
    return EventsController.lookup_claim(id)


@router.post("/claim", summary="Claim a ticket (not available)")
def claim_ticket():
    return EventsController.claim_ticket()


@router.post("/event", summary="Register the signed-in user for an event")
def register_event(
    payload: Optional[EventRegisterIn] = None,
    current_user: Dict[str, Any] = Depends(current_user_middleware),
    db: Session = Depends(get_db),
):
    return EventsController.register(payload or EventRegisterIn(), current_user, db)
