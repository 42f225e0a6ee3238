from typing import Any, Dict

from fastapi import Response
from sqlalchemy.orm import Session

from config.settings import settings
from api.user.user_schema import UserRegister, LoginRequest, UserOut
from api.user.user_service import create_user, authenticate_user, get_access_token
from utils.errors import shielded
from utils.schemas import serialize


@shielded("User registration failed")
def register_user(req: UserRegister, db: Session) -> Dict[str, Any]:
    user = create_user(db, req)
    return {
        "success": True,
        "message": "User created successfully",
        "user": serialize(UserOut, user),
    }


@shielded("Login failed")
def login_user(credentials: LoginRequest, response: Response, db: Session) -> Dict[str, Any]:
    user = authenticate_user(db, credentials.email, credentials.password)
    token = get_access_token(user)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.USER_TOKEN_EXPIRE_DAYS * 24 * 60 * 60,
        httponly=True,
        samesite="lax",
        secure=settings.is_production,
    )
    return {
        "success": True,
        "message": "Login successful",
        "token": token,
    }


def logout_user(response: Response) -> Dict[str, Any]:
    response.delete_cookie(settings.SESSION_COOKIE_NAME)
    return {"success": True, "message": "Logged out successfully"}
