from typing import Any, Dict

from fastapi import APIRouter, Depends, Response, status
from sqlalchemy.orm import Session

from config.database import get_db
from middlewares.auth_middleware import current_user_middleware
from api.user.user_schema import UserRegister, LoginRequest
from api.user.user_controller import register_user, login_user, logout_user

router = APIRouter(prefix="/auth", tags=["Authentication"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
def register(
    req: UserRegister,
    db: Session = Depends(get_db),
):
    """
    Create an end-user account. The password is stored as a bcrypt hash.
    """
    return register_user(req, db)


@router.post("/login")
def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
):
    """
    Check credentials and set the signed session cookie.
    """
    return login_user(credentials, response, db)


@router.post("/logout")
def logout(response: Response):
    return logout_user(response)


@router.get("/me", summary="Resolve the user behind the session cookie")
def me(current_user: Dict[str, Any] = Depends(current_user_middleware)):
    return current_user
