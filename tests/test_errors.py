"""Tests for the translation of D-Bus failures into ppd errors."""

import pytest
from gi.repository import GLib

from ppd.errors import RemoteError, TransportError, from_dbus_error, from_glib_error
from ppd.types import ExitCode

from conftest import INVALID_ARGS, SERVICE_UNKNOWN, remote_error


def test_local_glib_error_is_transport_error():
    error = from_glib_error(GLib.Error("Could not connect: No such file or directory"))

    assert isinstance(error, TransportError)
    assert error.message == "Could not connect: No such file or directory"


class TestFromDbusError:

    @pytest.mark.parametrize("name", [
        SERVICE_UNKNOWN,
        "org.freedesktop.DBus.Error.NoReply",
        "org.freedesktop.DBus.Error.NameHasNoOwner",
        "org.freedesktop.DBus.Error.Disconnected",
    ])
    def test_bus_errors_are_transport_errors(self, name):
        error = from_dbus_error(remote_error(name, "The name is not activatable"))

        assert isinstance(error, TransportError)
        assert error.message == "The name is not activatable"

    def test_daemon_error_is_remote_error_with_verbatim_message(self):
        error = from_dbus_error(remote_error(INVALID_ARGS, "Invalid profile name 'turbo'"))

        assert isinstance(error, RemoteError)
        assert error.message == "Invalid profile name 'turbo'"
        assert error.dbus_name == INVALID_ARGS

    def test_access_denied_is_remote_error(self):
        name = "org.freedesktop.DBus.Error.AccessDenied"
        error = from_dbus_error(remote_error(name, "Not authorized"))

        assert isinstance(error, RemoteError)
        assert str(error) == "Not authorized"


def test_exit_codes_are_distinct():
    assert RemoteError("x").exit_code == ExitCode.REMOTE_ERROR
    assert TransportError("x").exit_code == ExitCode.TRANSPORT_ERROR
    assert len({ExitCode.SUCCESS, ExitCode.REMOTE_ERROR, ExitCode.USAGE_ERROR, ExitCode.TRANSPORT_ERROR}) == 4
