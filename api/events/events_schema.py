from typing import Optional
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from api.user.user_schema import UserOut
from utils.schemas import LenientBody


class EventRegistrationBase(BaseModel):
    """Wire names follow the ticketing frontend (eventid, ticketid, ...)."""
    model_config = ConfigDict(from_attributes=True, populate_by_name=True)

    id: int
    event_id: str = Field(alias="eventid")
    event_name: str = Field(alias="eventname")
    ticket_id: str = Field(alias="ticketid")
    email: str
    is_zentrone: bool = Field(alias="iszentrone")
    created_at: datetime = Field(alias="createdAt")
    updated_at: datetime = Field(alias="updatedAt")


class EventRegistrationOut(EventRegistrationBase):
    user_id: int = Field(alias="userid")


class EventRegistrationPopulated(EventRegistrationBase):
    # the owning user inlined in place of the bare id
    userid: Optional[UserOut] = Field(None, validation_alias="user")


class EventRegisterIn(LenientBody):
    eventid: Optional[str] = None
    eventname: Optional[str] = None
