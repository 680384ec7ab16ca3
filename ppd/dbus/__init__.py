#!/usr/bin/env python3
"""
D-Bus client for power-profiles-daemon.

This package talks to the org.freedesktop.UPower.PowerProfiles interface
on the system bus. PowerProfilesProxy blocks the calling thread for each
call; AsyncPowerProfilesProxy offers the same operations as coroutines.
"""

from .async_proxy import AsyncPowerProfilesProxy, connect_async
from .proxy import OPERATIONS, PowerProfilesProxy, connect
from .structures import Action, ActiveHold, Profile
from .constants import (
    DBUS_SERVICE_NAME,
    DBUS_OBJECT_PATH,
    DBUS_INTERFACE_NAME,
    DEFAULT_TIMEOUT,
)

__all__ = [
    # Proxies
    "PowerProfilesProxy",
    "AsyncPowerProfilesProxy",
    "connect",
    "connect_async",
    "OPERATIONS",
    # Records
    "Profile",
    "Action",
    "ActiveHold",
    # Constants
    "DBUS_SERVICE_NAME",
    "DBUS_OBJECT_PATH",
    "DBUS_INTERFACE_NAME",
    "DEFAULT_TIMEOUT",
]
