"""
Local login flag.

There is no account backend: signing in stores ``auth = "1"`` in the
local store and every view checks the flag.
"""

from typing import Optional

from brewboard.services.storage import LocalStore
from brewboard.utils.constants import AUTH_KEY
from brewboard.utils.logger import get_logger
from brewboard.utils.validators import ValidationResult, validate_login

logger = get_logger(__name__)

DEFAULT_REDIRECT = "Overview"


def is_authenticated(store: LocalStore) -> bool:
    return store.get_item(AUTH_KEY) == "1"


def login(store: LocalStore, email: str, password: str) -> ValidationResult:
    """Validate the form and set the auth flag when it passes"""
    result = validate_login(email, password)
    if result.is_valid:
        store.set_item(AUTH_KEY, "1")
        logger.info(f"Signed in as {result.values['email']}")
    return result


def logout(store: LocalStore) -> None:
    store.remove_item(AUTH_KEY)
    logger.info("Signed out")


def redirect_target(requested: Optional[str], views) -> str:
    """View to open after login; unknown targets fall back to the overview"""
    if requested and requested in views:
        return requested
    return DEFAULT_REDIRECT
