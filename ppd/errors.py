#!/usr/bin/env python3
"""
Error types for ppd.

Every failure of a call to power-profiles-daemon surfaces as one of two
exceptions: TransportError when the daemon could not be reached or its
reply could not be understood, RemoteError when the daemon answered and
rejected the request.
"""

import logging
from typing import Optional

from dasbus.error import DBusError
from gi.repository import GLib

from ppd.dbus.constants import TRANSPORT_ERROR_NAMES
from ppd.types import ExitCode

log = logging.getLogger(__name__)


class PpdError(Exception):
    """Base class for all errors raised by ppd."""

    exit_code = ExitCode.TRANSPORT_ERROR

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class TransportError(PpdError):
    """The bus or the daemon is unreachable, timed out or sent a malformed reply."""

    exit_code = ExitCode.TRANSPORT_ERROR


class RemoteError(PpdError):
    """The daemon rejected the request; message is the daemon's own text."""

    exit_code = ExitCode.REMOTE_ERROR

    def __init__(self, message: str, dbus_name: Optional[str] = None):
        super().__init__(message)
        self.dbus_name = dbus_name


def from_glib_error(error: GLib.Error) -> TransportError:
    """
    Translate a GLib.Error raised by a D-Bus call.

    dasbus maps every error reply through its ErrorMapper into a DBusError,
    so a GLib.Error that still gets through was raised on this end of the
    bus (no system bus, connection closed, broken message).

    Args:
        error: The error raised by dasbus/GDBus

    Returns:
        The matching TransportError (not raised)
    """
    log.debug(f"Transport error: {error.message}")
    return TransportError(error.message)


def from_dbus_error(error: DBusError) -> PpdError:
    """
    Translate a DBusError created by the dasbus error mapper.

    Error names sent by the bus daemon on behalf of a missing or silent
    service are transport errors. Anything else was sent by
    power-profiles-daemon and is returned as a RemoteError.
    """
    name = getattr(error, "dbus_name", None)
    if name in TRANSPORT_ERROR_NAMES:
        log.debug(f"Transport error {name}: {error}")
        return TransportError(str(error))

    log.debug(f"Remote error {name}: {error}")
    return RemoteError(str(error), dbus_name=name)
