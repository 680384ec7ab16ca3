#!/usr/bin/env python3
"""
Blocking client for the org.freedesktop.UPower.PowerProfiles interface.

Every remote method and property of power-profiles-daemon gets one typed
method here. Replies are decoded into ppd.dbus.structures records at this
boundary and every failure is re-raised as a ppd.errors.PpdError.
"""

import logging
from contextlib import contextmanager
from typing import Callable, List, Optional

from dasbus.connection import MessageBus, SystemMessageBus
from dasbus.error import DBusError
from dasbus.loop import EventLoop
from dasbus.typing import Bool, Str, Variant, get_variant
from gi.repository import GLib

from ppd.errors import PpdError, RemoteError, TransportError, from_dbus_error, from_glib_error

from .constants import (
    DBUS_SERVICE_NAME,
    DBUS_OBJECT_PATH,
    DBUS_INTERFACE_NAME,
    DEFAULT_TIMEOUT,
)
from .structures import Action, ActiveHold, Profile, decode_list

# Set up logging
log = logging.getLogger(__name__)

# Operations shared by the blocking and the suspending proxy
OPERATIONS = (
    "active_profile",
    "set_active_profile",
    "profiles",
    "actions",
    "action_names",
    "set_action_enabled",
    "active_profile_holds",
    "hold_profile",
    "release_hold",
    "release_profile",
    "performance_degraded",
    "performance_inhibited",
    "battery_aware",
    "set_battery_aware",
    "version",
    "close",
)


@contextmanager
def translate_errors(member: str):
    """
    Re-raise dasbus and GLib failures of a D-Bus access as PpdError.

    Args:
        member: Name of the D-Bus member being accessed, used in messages
    """
    try:
        yield
    except GLib.Error as e:
        raise from_glib_error(e) from e
    except DBusError as e:
        raise from_dbus_error(e) from e
    except TimeoutError as e:
        # dasbus turns G_IO_ERROR_TIMED_OUT into the built-in TimeoutError
        log.debug(f"{member} timed out: {e}")
        raise TransportError(str(e)) from e


def _empty_to_none(value) -> Optional[str]:
    if not isinstance(value, str):
        raise TransportError(f"Malformed reply: expected a string, got {type(value).__name__}")
    return value or None


def _expect(value, kind: type, member: str):
    if not isinstance(value, kind):
        raise TransportError(f"Malformed reply: {member} is not of type {kind.__name__}")
    return value


class PowerProfilesProxy:
    """
    Blocking proxy of power-profiles-daemon.

    Each call occupies the calling thread until the daemon replies or the
    method call timeout elapses. Nothing is cached: every read is a fresh
    round trip. Use connect() to create one, and close it (or use it as a
    context manager) to release the bus connection.
    """

    def __init__(self, bus: Optional[MessageBus] = None, timeout: int = DEFAULT_TIMEOUT):
        """
        Initialize the proxy.

        Args:
            bus: Message bus to use, the system bus by default
            timeout: Method call timeout in milliseconds
        """
        self._bus = bus if bus is not None else SystemMessageBus()
        self._proxy = self._bus.get_proxy(DBUS_SERVICE_NAME, DBUS_OBJECT_PATH)
        self._timeout = timeout
        self._loop = None

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.close()

    @property
    def timeout(self) -> int:
        return self._timeout

    # ==================== Plumbing ====================

    def _member(self, name: str):
        with translate_errors(name):
            try:
                return getattr(self._proxy, name)
            except AttributeError as e:
                # dasbus raises AttributeError for members missing from the introspection data
                log.debug(f"{name} is not provided by the daemon: {e}")
                raise RemoteError(f"{DBUS_SERVICE_NAME} does not provide {name}") from e

    def _call(self, name: str, *args):
        log.debug(f"Call {name}{args}")
        method = self._member(name)
        with translate_errors(name):
            return method(*args, timeout=self._timeout)

    # Properties go through org.freedesktop.DBus.Properties so the call timeout applies
    def _get(self, name: str):
        return self._call("Get", DBUS_INTERFACE_NAME, name)

    def _set(self, name: str, value: Variant):
        self._call("Set", DBUS_INTERFACE_NAME, name, value)

    # ==================== Profiles ====================

    def active_profile(self) -> str:
        """The currently active profile name."""
        return _expect(self._get("ActiveProfile"), str, "ActiveProfile")

    def set_active_profile(self, profile: str):
        """
        Switch the active profile.

        The name is sent as given; the daemon decides whether it is valid
        and answers with a RemoteError if not.
        """
        self._set("ActiveProfile", get_variant(Str, str(profile)))

    def profiles(self) -> List[Profile]:
        """The profile catalog, in the order the daemon lists it."""
        return decode_list(Profile, self._get("Profiles"))

    def performance_degraded(self) -> Optional[str]:
        """Why performance is degraded, or None when it is not."""
        return _empty_to_none(self._get("PerformanceDegraded"))

    def performance_inhibited(self) -> Optional[str]:
        """Deprecated by the daemon in favour of PerformanceDegraded."""
        return _empty_to_none(self._get("PerformanceInhibited"))

    # ==================== Holds ====================

    def hold_profile(self, application_id: str, reason: str, profile: str) -> int:
        """
        Hold a profile for as long as this connection stays open.

        Args:
            application_id: Application identifier (e.g. "org.gnome.Settings")
            reason: Human-readable reason for the hold
            profile: Profile to hold

        Returns:
            Cookie to pass to release_hold()
        """
        cookie = self._call("HoldProfile", str(profile), reason, application_id)
        return _expect(cookie, int, "HoldProfile")

    def release_hold(self, cookie: int):
        """Release a hold returned by hold_profile()."""
        self._call("ReleaseProfile", cookie)

    release_profile = release_hold

    def active_profile_holds(self) -> List[ActiveHold]:
        return decode_list(ActiveHold, self._get("ActiveProfileHolds"))

    # ==================== Actions ====================

    def actions(self) -> List[Action]:
        """Every action the daemon knows about, with its enabled state."""
        return decode_list(Action, self._get("ActionsInfo"))

    def action_names(self) -> List[str]:
        names = _expect(self._get("Actions"), list, "Actions")
        return [_expect(name, str, "Actions") for name in names]

    def set_action_enabled(self, action: str, enabled: bool):
        self._call("SetActionEnabled", action, bool(enabled))

    def battery_aware(self) -> bool:
        """Whether the daemon follows charger and battery events."""
        return _expect(self._get("BatteryAware"), bool, "BatteryAware")

    def set_battery_aware(self, enabled: bool):
        self._set("BatteryAware", get_variant(Bool, bool(enabled)))

    def version(self) -> str:
        return _expect(self._get("Version"), str, "Version")

    # ==================== Signals ====================

    def on_active_profile_changed(self, callback: Callable[[str], None]):
        """
        Call callback with the new profile name whenever it changes.

        Callbacks only run while run() is driving the event loop.
        """
        def properties_changed(interface, changed, invalidated):
            if interface == DBUS_INTERFACE_NAME and "ActiveProfile" in changed:
                callback(changed["ActiveProfile"])

        signal = self._member("PropertiesChanged")
        with translate_errors("PropertiesChanged"):
            signal.connect(properties_changed)

    def on_profile_released(self, callback: Callable[[int], None]):
        """Call callback with the cookie of every hold the daemon releases."""
        signal = self._member("ProfileReleased")
        with translate_errors("ProfileReleased"):
            signal.connect(callback)

    def run(self):
        """Dispatch signals until quit() is called."""
        self._loop = EventLoop()
        self._loop.run()

    def quit(self):
        if self._loop is not None:
            self._loop.quit()

    # ==================== Lifecycle ====================

    def close(self):
        """Close the bus connection. Holds owned by it are dropped by the daemon."""
        self.quit()
        try:
            self._bus.disconnect()
        except GLib.Error as e:
            log.error(f"Error disconnecting from D-Bus: {e.message}")


def connect(bus: Optional[MessageBus] = None, timeout: int = DEFAULT_TIMEOUT) -> PowerProfilesProxy:
    """
    Connect to power-profiles-daemon on the system bus.

    Args:
        bus: Message bus to use, the system bus by default
        timeout: Method call timeout in milliseconds

    Returns:
        A blocking proxy bound to the daemon

    Raises:
        TransportError: If the bus is unreachable or the daemon is neither
            running nor activatable
    """
    bus = bus if bus is not None else SystemMessageBus()

    try:
        with translate_errors("org.freedesktop.DBus"):
            log.debug(f"Connecting to {DBUS_SERVICE_NAME}")
            bus.connection  # connects on first access
            if not (bus.proxy.NameHasOwner(DBUS_SERVICE_NAME)
                    or DBUS_SERVICE_NAME in bus.proxy.ListActivatableNames()):
                raise TransportError(f"{DBUS_SERVICE_NAME} is not registered on the bus")
    except PpdError:
        bus.disconnect()
        raise

    return PowerProfilesProxy(bus, timeout)
