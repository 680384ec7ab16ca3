"""Client library for power-profiles-daemon."""

from ppd.dbus import (
    Action,
    ActiveHold,
    AsyncPowerProfilesProxy,
    PowerProfilesProxy,
    Profile,
    connect,
    connect_async,
)
from ppd.errors import PpdError, RemoteError, TransportError
from ppd.types import ExitCode, PowerProfile

__version__ = "0.1.7"

__all__ = [
    "Action",
    "ActiveHold",
    "AsyncPowerProfilesProxy",
    "ExitCode",
    "PowerProfile",
    "PowerProfilesProxy",
    "PpdError",
    "Profile",
    "RemoteError",
    "TransportError",
    "connect",
    "connect_async",
]
