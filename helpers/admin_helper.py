import hmac
import logging
from typing import Optional

from config.settings import settings
from utils.errors import ServerMisconfigured, Unauthorized

logger = logging.getLogger(__name__)


def verify_admin_password(submitted: Optional[str]) -> None:
    """
    Compare a submitted admin password against ADMIN_PASSWORD.
    Stateless; raises instead of returning a flag.
    """
    expected = settings.ADMIN_PASSWORD
    if not expected:
        logger.error("ADMIN_PASSWORD environment variable is not set")
        raise ServerMisconfigured()

    if not submitted:
        raise Unauthorized("Admin password is required")

    if not hmac.compare_digest(submitted.encode("utf-8"), expected.encode("utf-8")):
        logger.warning("Rejected admin request with invalid password")
        raise Unauthorized("Invalid admin password")
