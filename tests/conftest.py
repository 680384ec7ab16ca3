"""Shared fixtures: an in-memory power-profiles-daemon behind a fake dasbus bus."""

import logging
from unittest.mock import patch

import pytest
from click.testing import CliRunner
from dasbus.error import DBusError
from gi.repository import GLib

from ppd.dbus import DBUS_INTERFACE_NAME, DBUS_SERVICE_NAME, PowerProfilesProxy, connect

INVALID_ARGS = "org.freedesktop.DBus.Error.InvalidArgs"
SERVICE_UNKNOWN = "org.freedesktop.DBus.Error.ServiceUnknown"


def remote_error(name, message):
    """A DBusError as the dasbus error mapper creates it for a D-Bus error reply."""
    error = DBusError(message)
    error.dbus_name = name
    return error


class FakeSignal:
    def __init__(self):
        self.callbacks = []

    def connect(self, callback):
        self.callbacks.append(callback)

    def emit(self, *args):
        for callback in self.callbacks:
            callback(*args)


class FakeDaemon:
    """
    Stand-in for the dasbus proxy of power-profiles-daemon.

    Attribute names and argument orders follow the D-Bus interface, so the
    proxy under test talks to it exactly as it would to dasbus.
    """

    def __init__(self):
        self.Profiles = [
            {"Profile": "power-saver", "Driver": "multiple",
             "PlatformDriver": "platform_profile", "CpuDriver": "intel_pstate"},
            {"Profile": "balanced", "Driver": "multiple",
             "PlatformDriver": "platform_profile", "CpuDriver": "intel_pstate"},
            {"Profile": "performance", "Driver": "intel_pstate", "CpuDriver": "intel_pstate"},
        ]
        self.ActionsInfo = [
            {"Name": "trickle_charge", "Description": "Trickle charge on battery", "Enabled": True},
            {"Name": "amdgpu_panel_power", "Description": "", "Enabled": False},
        ]
        self.PerformanceDegraded = ""
        self.PerformanceInhibited = ""
        self.Version = "0.30"
        self.BatteryAware = True
        self.PropertiesChanged = FakeSignal()
        self.ProfileReleased = FakeSignal()
        self.holds = {}
        self.timeouts = []
        self._active = "balanced"
        self._next_cookie = 1

    @property
    def ActiveProfile(self):
        return self._active

    @ActiveProfile.setter
    def ActiveProfile(self, profile):
        if profile not in [p["Profile"] for p in self.Profiles]:
            raise remote_error(INVALID_ARGS, f"Invalid profile name '{profile}'")
        self._active = profile
        self.PropertiesChanged.emit(DBUS_INTERFACE_NAME, {"ActiveProfile": profile}, [])

    @property
    def Actions(self):
        return [action["Name"] for action in self.ActionsInfo]

    @property
    def ActiveProfileHolds(self):
        return [
            {"ApplicationId": app, "Profile": profile, "Reason": reason}
            for profile, reason, app in self.holds.values()
        ]

    def Get(self, interface, name, timeout=None):
        self.timeouts.append(timeout)
        if interface != DBUS_INTERFACE_NAME or not hasattr(self, name):
            raise remote_error(INVALID_ARGS, f"No such property '{name}'")
        return getattr(self, name)

    def Set(self, interface, name, value, timeout=None):
        self.timeouts.append(timeout)
        if interface != DBUS_INTERFACE_NAME or not hasattr(self, name):
            raise remote_error(INVALID_ARGS, f"No such property '{name}'")
        setattr(self, name, value.unpack())

    def HoldProfile(self, profile, reason, application_id, timeout=None):
        self.timeouts.append(timeout)
        if profile not in ("power-saver", "performance"):
            raise remote_error(INVALID_ARGS, "Only profiles 'performance' and 'power-saver' can be a hold")
        cookie = self._next_cookie
        self._next_cookie += 1
        self.holds[cookie] = (profile, reason, application_id)
        return cookie

    def ReleaseProfile(self, cookie, timeout=None):
        self.timeouts.append(timeout)
        if cookie not in self.holds:
            raise remote_error(INVALID_ARGS, f"No hold with cookie {cookie}")
        del self.holds[cookie]
        self.ProfileReleased.emit(cookie)

    def SetActionEnabled(self, action, enabled, timeout=None):
        self.timeouts.append(timeout)
        for info in self.ActionsInfo:
            if info["Name"] == action:
                info["Enabled"] = enabled
                return
        raise remote_error(INVALID_ARGS, f"No action '{action}' loaded")


class FakeBusProxy:
    """org.freedesktop.DBus as seen through dasbus."""

    def __init__(self, registered):
        self._registered = registered

    def NameHasOwner(self, name):
        return self._registered and name == DBUS_SERVICE_NAME

    def ListActivatableNames(self):
        return []


class FakeBus:
    def __init__(self, daemon, reachable=True, registered=True):
        self.daemon = daemon
        self.reachable = reachable
        self.proxy = FakeBusProxy(registered)
        self.disconnected = False

    @property
    def connection(self):
        if not self.reachable:
            raise GLib.Error("Could not connect: No such file or directory")
        return object()

    def get_proxy(self, service_name, object_path):
        return self.daemon

    def disconnect(self):
        self.disconnected = True


@pytest.fixture
def daemon():
    return FakeDaemon()


@pytest.fixture
def bus(daemon):
    return FakeBus(daemon)


@pytest.fixture
def proxy(bus):
    with PowerProfilesProxy(bus) as proxy:
        yield proxy


@pytest.fixture
def runner():
    """Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def cli_bus(bus):
    """Route every CLI connection to the fake bus."""
    with patch("ppd.bin.ppd.connect", lambda timeout: connect(bus, timeout)):
        yield bus


@pytest.fixture(autouse=True)
def reset_logging():
    """The CLI installs handlers bound to the runner's stderr; drop them after each test."""
    yield
    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(logging.WARNING)
