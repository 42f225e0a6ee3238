from typing import Any, Dict, Optional

from fastapi import Query, Request

from helpers.admin_helper import verify_admin_password


def require_admin_query(
    password: Optional[str] = Query(None, description="Admin password"),
) -> None:
    """Admin gate for GET routes; the password travels as ?password=."""
    verify_admin_password(password)


async def require_admin_body(request: Request) -> Dict[str, Any]:
    """
    Admin gate for POST routes; the password travels as body.adminPassword.

    Routes behind this gate declare no body model of their own: the body is
    read here, before anything validates it, so a malformed or missing body
    is an authentication failure. Returns the parsed JSON object.
    """
    try:
        data = await request.json()
    except ValueError:
        data = None

    submitted = data.get("adminPassword") if isinstance(data, dict) else None
    if submitted is not None and not isinstance(submitted, str):
        submitted = str(submitted)
    verify_admin_password(submitted)
    return data
