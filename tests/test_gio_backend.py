"""
Tests for usermount.gio_backend: GIO error translation and auth replies.
"""

import pytest

gi = pytest.importorskip("gi")
gi.require_version("Gio", "2.0")
from gi.repository import Gio, GLib  # noqa: E402

from usermount.auth import AuthGate  # noqa: E402
from usermount.errors import ALREADY_MOUNTED  # noqa: E402
from usermount.gio_backend import GioBackend, provider_error  # noqa: E402

IO_ERROR = GLib.quark_to_string(Gio.io_error_quark())


class FakeMountOperation:
    def __init__(self):
        self.replies = []

    def reply(self, result):
        self.replies.append(result)


class TestProviderError:
    def test_already_mounted(self):
        e = GLib.Error("Location is already mounted", IO_ERROR, int(Gio.IOErrorEnum.ALREADY_MOUNTED))
        err = provider_error(e)
        assert err.kind == ALREADY_MOUNTED
        assert err.message == "Location is already mounted"

    def test_io_error_nick(self):
        e = GLib.Error("Permission denied", IO_ERROR, int(Gio.IOErrorEnum.PERMISSION_DENIED))
        assert provider_error(e).kind == "permission-denied"

    def test_foreign_domain(self):
        e = GLib.Error("Something else", "some-other-quark", 3)
        assert provider_error(e).kind == "failed"


class TestAskPassword:
    def test_anonymous_once(self, no_kerberos):
        op, gate = FakeMountOperation(), AuthGate(is_anonymous=True)
        flags = Gio.AskPasswordFlags.ANONYMOUS_SUPPORTED | Gio.AskPasswordFlags.NEED_PASSWORD
        GioBackend._ask_password(op, "Authentication Required", "", "", flags, gate)
        GioBackend._ask_password(op, "Authentication Required", "", "", flags, gate)
        assert op.replies == [Gio.MountOperationResult.HANDLED, Gio.MountOperationResult.ABORTED]

    def test_credentials_with_ticket(self, kerberos):
        op = FakeMountOperation()
        GioBackend._ask_password(op, "Authentication Required", "jdoe", "WORKGROUP",
                                 Gio.AskPasswordFlags.NEED_PASSWORD, AuthGate())
        assert op.replies == [Gio.MountOperationResult.HANDLED]

    def test_credentials_without_ticket(self, no_kerberos):
        op = FakeMountOperation()
        GioBackend._ask_password(op, None, None, None, Gio.AskPasswordFlags.NEED_PASSWORD, AuthGate())
        assert op.replies == [Gio.MountOperationResult.ABORTED]


def test_backend_loop_stops_on_close():
    backend = GioBackend()
    backend.close()
    assert not backend.thread.is_alive()
