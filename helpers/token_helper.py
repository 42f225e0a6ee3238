import jwt
import datetime
import logging
import uuid
from typing import Any, Dict

from config.settings import settings  # must define JWT_SECRET and ALGORITHM
from utils.errors import InvalidToken

logger = logging.getLogger(__name__)


def create_access_token(
    payload: Dict[str, Any],
    expires_delta: datetime.timedelta,
) -> str:
    """
    Generate a JWT with the given payload and expiration.
    """
    now = datetime.datetime.now(datetime.timezone.utc)
    to_encode = payload.copy()
    to_encode.update({"iat": now, "exp": now + expires_delta})

    token = jwt.encode(to_encode, settings.JWT_SECRET, algorithm=settings.ALGORITHM)
    return token


def issue_token(email: str) -> str:
    """
    Sign an identity token for a registrant or user. Each call embeds a
    fresh jti, so re-registering yields a new, independently valid token.
    """
    return create_access_token(
        {"email": email, "jti": uuid.uuid4().hex},
        datetime.timedelta(days=settings.USER_TOKEN_EXPIRE_DAYS),
    )


def issue_attendance_token(email: str, student_id: int, salt: str) -> str:
    """Sign the attendance-session token carried by the QR page."""
    return create_access_token(
        {"email": email, "id": student_id, "salt": salt},
        datetime.timedelta(hours=settings.ATTENDANCE_TOKEN_EXPIRE_HOURS),
    )


def verify_token(token: str) -> Dict[str, Any]:
    """
    Decode and validate a token. Raises InvalidToken on a bad signature,
    expiry, or a payload without an email claim.
    """
    if not token:
        raise InvalidToken()
    try:
        decoded = jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.ALGORITHM])
    except jwt.ExpiredSignatureError:
        raise InvalidToken("Token has expired")
    except jwt.InvalidTokenError:
        logger.warning("Rejected token with invalid signature or format")
        raise InvalidToken()

    if not isinstance(decoded.get("email"), str) or not decoded["email"]:
        raise InvalidToken("Invalid token payload")
    return decoded
