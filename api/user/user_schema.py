from pydantic import EmailStr, Field
from typing import Optional
from datetime import datetime

from utils.schemas import CamelModel, LenientBody


# ----- Response Schema -----
class UserOut(CamelModel):
    """A user as exposed to clients; the password hash is never included."""
    id: int
    name: Optional[str] = None
    email: str
    created_at: datetime
    updated_at: datetime


# ----- Registration Schema -----
class UserRegister(LenientBody):
    name: Optional[str] = Field(None, max_length=100)
    email: EmailStr = Field(..., description="A valid email address")
    password: str = Field(..., min_length=8, description="At least 8 characters")


# ----- Auth Schema -----
class LoginRequest(LenientBody):
    email: EmailStr = Field(..., description="Registered user email")
    password: str = Field(..., min_length=1, description="User password")
