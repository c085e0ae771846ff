# gio_backend.py
import threading

import gi
gi.require_version('Gio', '2.0')
from gi.repository import Gio, GLib

from usermount.auth import AuthChallenge, AuthReply
from usermount.errors import ALREADY_MOUNTED, FAILED, ProviderError
from usermount.providers import MountProvider, MountStatus, PROVIDER_GIO
from usermount.utils import debug

_REPLIES = {
    AuthReply.HANDLED: Gio.MountOperationResult.HANDLED,
    AuthReply.ABORTED: Gio.MountOperationResult.ABORTED,
    AuthReply.UNHANDLED: Gio.MountOperationResult.UNHANDLED,
}


def provider_error(e: GLib.Error) -> ProviderError:
    """Translate a GIO error into a ProviderError, keeping the IOErrorEnum nick as kind."""
    if e.matches(Gio.io_error_quark(), Gio.IOErrorEnum.ALREADY_MOUNTED):
        return ProviderError(ALREADY_MOUNTED, e.message)

    kind = FAILED
    if e.domain == GLib.quark_to_string(Gio.io_error_quark()):
        try:
            kind = Gio.IOErrorEnum(e.code).value_nick
        except ValueError:
            pass
    return ProviderError(kind, e.message)


class GioBackend(MountProvider):
    """
    Mounts locations in-process through GIO.

    GIO delivers its callbacks on the default main context, which is run by a
    GLib main loop living in a background thread for the lifetime of the
    backend. Requests are handed to that thread with idle callbacks.
    """

    name = PROVIDER_GIO

    def __init__(self):
        self.loop = GLib.MainLoop.new(GLib.MainContext.default(), False)
        self.thread = threading.Thread(target=self.loop.run, name='usermount-glib', daemon=True)
        self.thread.start()

    def mount_async(self, uri, flags, auth_handler, completion_handler):
        GLib.idle_add(self._mount, uri, flags, auth_handler, completion_handler)

    def _mount(self, uri, flags, auth_handler, completion_handler):
        f = Gio.File.new_for_uri(uri)

        mount_op = Gio.MountOperation.new()
        if auth_handler.is_anonymous:
            debug(f"Anonymous mount requested for {uri}")
            mount_op.set_anonymous(True)

        mount_op.connect('ask-password', self._ask_password, auth_handler)

        f.mount_enclosing_volume(
            Gio.MountMountFlags(int(flags)),
            mount_op,
            None,
            self._mount_done,
            completion_handler,
        )
        # one-shot idle callback
        return False

    @staticmethod
    def _ask_password(mount_op, message, default_user, default_domain, flags, auth_handler):
        challenge = AuthChallenge(
            message=message or '',
            default_user=default_user or '',
            default_domain=default_domain or '',
            anonymous_supported=bool(flags & Gio.AskPasswordFlags.ANONYMOUS_SUPPORTED),
        )
        mount_op.reply(_REPLIES[auth_handler(challenge)])

    @staticmethod
    def _mount_done(f, result, completion_handler):
        try:
            f.mount_enclosing_volume_finish(result)
        except GLib.Error as e:
            completion_handler(provider_error(e))
            return
        completion_handler(MountStatus.DONE)

    def _quit(self):
        self.loop.quit()
        return False

    def close(self):
        # Queued behind pending idle callbacks, so the loop is running when it fires.
        GLib.idle_add(self._quit)
        self.thread.join()
