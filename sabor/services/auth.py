"""
Admin Login

Checks the admin panel credentials from settings and hands out an opaque
token. Token storage and verification belong to the client.
"""

import logging
import secrets
import time
from typing import Optional

from sabor.core.config import Settings, get_settings
from sabor.core.exceptions import AuthenticationError, ValidationError

logger = logging.getLogger(__name__)


def login(username: str, password: str, settings: Optional[Settings] = None) -> str:
    """
    Validate admin credentials.

    Returns:
        str: ``admin_token_<epoch millis>``

    Raises:
        ValidationError: Username or password missing
        AuthenticationError: Credentials do not match
    """
    settings = settings or get_settings()

    if not username or not password:
        raise ValidationError("Usuário e senha são obrigatórios.")

    if not (
        secrets.compare_digest(username.encode(), settings.admin_username.encode())
        and secrets.compare_digest(password.encode(), settings.admin_password.encode())
    ):
        logger.warning(f"Failed admin login for {username!r}")
        raise AuthenticationError()

    logger.info(f"Admin {username!r} logged in")
    return f"admin_token_{int(time.time() * 1000)}"
