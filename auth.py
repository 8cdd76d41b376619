"""
Admin gate: one configured username/password pair and a logged-in flag.

The flag is a cookie (or an ``X-Admin: true`` header for scripted clients).
There are no sessions, expiry or hashing.
"""
import logging
import os
from typing import Optional

from fastapi import Cookie, Header, HTTPException

logger = logging.getLogger("rfap.auth")

ADMIN_USERNAME = os.getenv("ADMIN_USERNAME", "rfapLogin")
ADMIN_PASSWORD = os.getenv("ADMIN_PASSWORD", "rfapPass")

LOGIN_COOKIE = "adminLoggedIn"
LOGIN_FAILED_MESSAGE = "ভুল ইউজারনেম বা পাসওয়ার্ড"


def check_credentials(username: str, password: str) -> bool:
    ok = username == ADMIN_USERNAME and password == ADMIN_PASSWORD
    if not ok:
        logger.warning("Failed admin login for %r", username)
    return ok


def require_admin(
    admin_logged_in: Optional[str] = Cookie(None, alias=LOGIN_COOKIE),
    x_admin: Optional[str] = Header(None),
):
    if admin_logged_in != "true" and x_admin != "true":
        raise HTTPException(status_code=401, detail="Admin login required")
    return True
