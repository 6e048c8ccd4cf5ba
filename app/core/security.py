"""
Basic security implementation for the storefront admin endpoints
"""

import secrets
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from app.core.config import get_settings

security = HTTPBasic()


def get_current_username(credentials: HTTPBasicCredentials = Depends(security)) -> str:
    """
    Simple HTTP Basic Auth - checks username/password from settings
    """
    settings = get_settings()

    correct_username = settings.ADMIN_USERNAME
    correct_password = settings.ADMIN_PASSWORD

    # If no password is set in production, refuse to authenticate anyone
    if not correct_password and settings.ENVIRONMENT == "production":
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Admin password not configured"
        )

    # In development, allow a default password
    if not correct_password:
        correct_password = "changeme"

    is_correct_username = secrets.compare_digest(
        credentials.username.encode("utf8"),
        correct_username.encode("utf8")
    )
    is_correct_password = secrets.compare_digest(
        credentials.password.encode("utf8"),
        correct_password.encode("utf8")
    )

    if not (is_correct_username and is_correct_password):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Incorrect username or password",
            headers={"WWW-Authenticate": "Basic"},
        )

    return credentials.username


def is_admin(username: str) -> bool:
    """Only the configured admin account may change store settings"""
    return secrets.compare_digest(
        username.encode("utf8"),
        get_settings().ADMIN_USERNAME.encode("utf8")
    )


def get_admin_username(username: str = Depends(get_current_username)) -> str:
    if not is_admin(username):
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required",
        )
    return username


def require_admin():
    """
    Dependency to require an authenticated admin
    Usage: @router.post("/", dependencies=[require_admin()])
    """
    return Depends(get_admin_username)
