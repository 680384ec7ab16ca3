#!/usr/bin/env python3
"""
D-Bus constants for talking to power-profiles-daemon.

This module provides the D-Bus service name, object path and interface
of org.freedesktop.UPower.PowerProfiles, plus the bus-level error names
that mean the daemon could not be reached at all.
"""

# D-Bus service identification
DBUS_SERVICE_NAME = "org.freedesktop.UPower.PowerProfiles"
DBUS_OBJECT_PATH = "/org/freedesktop/UPower/PowerProfiles"
DBUS_INTERFACE_NAME = "org.freedesktop.UPower.PowerProfiles"

# Method call timeout in milliseconds (same as the GDBus default)
DEFAULT_TIMEOUT = 25000

# Remote error names raised by the bus itself rather than by the daemon
TRANSPORT_ERROR_NAMES = frozenset({
    "org.freedesktop.DBus.Error.ServiceUnknown",
    "org.freedesktop.DBus.Error.NameHasNoOwner",
    "org.freedesktop.DBus.Error.NoReply",
    "org.freedesktop.DBus.Error.Timeout",
    "org.freedesktop.DBus.Error.TimedOut",
    "org.freedesktop.DBus.Error.Disconnected",
    "org.freedesktop.DBus.Error.NoServer",
    "org.freedesktop.DBus.Error.NoNetwork",
})
