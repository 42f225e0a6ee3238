# middlewares/edge_gate_middleware.py
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse
from config.settings import settings
import logging
logger = logging.getLogger("EdgeGateMiddleware")

ATTENDANCE_PREFIX = "/attendance"
ADMIN_PREFIX = "/attendance-admin"
ADMIN_LOGIN_PATH = "/attendance-admin"
ADMIN_DASHBOARD_PATH = "/attendance-admin-dashboard"


def security_headers(backend_url: str) -> dict:
    csp = (
        "default-src 'self'; "
        "script-src 'self' 'unsafe-inline'; "
        "style-src 'self' 'unsafe-inline'; "
        "img-src 'self' data:; "
        f"connect-src 'self' {backend_url}"
    )
    return {
        "X-Frame-Options": "DENY",
        "X-Content-Type-Options": "nosniff",
        "Referrer-Policy": "strict-origin-when-cross-origin",
        "X-XSS-Protection": "1; mode=block",
        "Content-Security-Policy": csp,
    }


class EdgeGateMiddleware(BaseHTTPMiddleware):
    """
    Keeps the attendance dashboard behind the admin cookie set by
    /api/attendance/admin/verify and hardens every /attendance* page.
    """

    async def dispatch(self, request: Request, call_next):
        path = request.url.path or "/"

        if not path.startswith(ATTENDANCE_PREFIX):
            return await call_next(request)

        response = None
        if path.startswith(ADMIN_PREFIX):
            authenticated = request.cookies.get(settings.ADMIN_COOKIE_NAME) == "true"
            if not authenticated and path == ADMIN_DASHBOARD_PATH:
                logger.info("Redirecting unauthenticated dashboard request to %s", ADMIN_LOGIN_PATH)
                response = RedirectResponse(url=ADMIN_LOGIN_PATH, status_code=307)

        if response is None:
            response = await call_next(request)

        for name, value in security_headers(settings.BACKEND_URL).items():
            response.headers[name] = value
        return response
