"""Process-wide table of named drivers.

Drivers are registered once, typically at process or test-session start;
registering a name a second time is an error. Test suites that register per
test should `unregister` at teardown.
"""

from __future__ import annotations

import logging
import threading

from recordriver.core.errors import DriverAlreadyRegisteredError, InterfaceError
from recordriver.integrations.driver import Connection, Driver

LOGGER = logging.getLogger(__name__)

_DRIVERS: dict[str, Driver] = {}
_LOCK = threading.Lock()


def register(name: str, driver: Driver) -> None:
    with _LOCK:
        if name in _DRIVERS:
            raise DriverAlreadyRegisteredError(name)
        _DRIVERS[name] = driver
    LOGGER.debug("Registered driver %s", name)


def unregister(name: str) -> None:
    with _LOCK:
        _DRIVERS.pop(name, None)


def drivers() -> list[str]:
    """Return the registered driver names, sorted."""

    with _LOCK:
        return sorted(_DRIVERS)


def open_connection(driver_name: str, dsn: str) -> Connection:
    """Open *dsn* through the driver registered as *driver_name*."""

    with _LOCK:
        driver = _DRIVERS.get(driver_name)
    if driver is None:
        raise InterfaceError(f"Unknown driver '{driver_name}'")
    return driver.open(dsn)
