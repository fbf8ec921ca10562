"""
Health-check helpers for liveness and readiness probes.

Liveness  — is the process alive?  (cheap, no I/O)
Readiness — can it serve traffic?  (bundled SQLite driver importable and answering)
"""

import logging

from sqlite_gateway.core.config import settings
from sqlite_gateway.core.driver import health_check, load_driver, resolve_driver
from sqlite_gateway.core.errors import ConfigurationError

logger = logging.getLogger(__name__)


def check_driver() -> bool:
    """Load the driver requests use by default and run SELECT 1 in memory."""
    try:
        selection = resolve_driver(use_default_driver=settings.SQLITE_USE_DEFAULT_DRIVER)
        driver = load_driver(selection)
    except ConfigurationError:
        logger.warning("SQLite driver check failed", exc_info=True)
        return False
    return health_check(driver)


def liveness_check() -> tuple[bool, list[str]]:
    """No I/O. Return format matches readiness_check."""
    return (True, [])


def readiness_check() -> tuple[bool, list[str]]:
    """Returns (ok, list of failure names)."""
    failures: list[str] = []

    if not check_driver():
        failures.append("sqlite_driver")

    return (len(failures) == 0, failures)
