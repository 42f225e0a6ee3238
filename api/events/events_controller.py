import logging
from typing import Any, Dict, Optional

from fastapi import status
from fastapi.responses import JSONResponse
from sqlalchemy.orm import Session

from config.database import Database
from api.events.events_schema import EventRegistrationPopulated, EventRegisterIn
from api.events.events_service import list_registrations, find_registration, register_for_event
from utils.errors import shielded
from utils.schemas import serialize

logger = logging.getLogger(__name__)


class EventsController:
    @staticmethod
    def list_user_data(database: Database):
        # this route keeps its own {status, message} error shape, including
        # when the store is unreachable, so it opens its own session
        db = None
        try:
            db = database.session()
            rows = list_registrations(db)
            data = [serialize(EventRegistrationPopulated, r) for r in rows]
        except Exception as e:
            logger.exception("Error listing event registrations: %s", e)
            return JSONResponse(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                content={
                    "status": 500,
                    "message": "Something went wrong please try again after sometime",
                },
            )
        finally:
            if db is not None:
                db.close()
        return {"status": 200, "data": data, "length": len(data)}

    @staticmethod
    def lookup_claim(ticket_id: Optional[str]) -> Dict[str, Any]:
        # no store lookup: the id is only validated and echoed back
        if not ticket_id:
            return {"success": False, "message": "Invalid request. Please provide a id in it"}
        return {"success": True, "id": ticket_id}

    @staticmethod
    def claim_ticket() -> JSONResponse:
        # TODO: decide claim semantics (mark-as-claimed vs. quantity) before persisting anything
        return JSONResponse(
            status_code=status.HTTP_501_NOT_IMPLEMENTED,
            content={"success": False, "message": "Ticket claiming is not available"},
        )

    @staticmethod
    @shielded("Error in Event Registration. Please try again later.")
    def register(
        payload: EventRegisterIn,
        current_user: Dict[str, Any],
        db: Session,
    ) -> Dict[str, Any]:
        if not current_user.get("isAuth"):
            return {"message": "User not authenticated. UnAuthorized access", "success": False}

        if not payload.eventid or not payload.eventname:
            return {"message": "Event id and event name are required", "success": False}

        user = current_user["user"]
        if find_registration(db, user["id"], payload.eventid):
            return {"message": "User already registered for the event", "success": False}

        registration = register_for_event(
            db,
            user_id=user["id"],
            email=user["email"],
            event_id=payload.eventid,
            event_name=payload.eventname,
        )
        return {
            "message": "Event Registered Successfully",
            "success": True,
            "ticketid": registration.ticket_id,
        }
