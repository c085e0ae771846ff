# gvfs_backend.py

import threading
from typing import List

import pexpect

from usermount.auth import AuthChallenge, AuthReply
from usermount.errors import ALREADY_MOUNTED, FAILED, ProviderError
from usermount.providers import MountProvider, MountResult, MountStatus, PROVIDER_CLI
from usermount.utils import debug, warning

FAILED_HANDLED = 'failed-handled'

# Prompts printed by `gio mount` while asking for credentials, e.g. "User [jdoe]: "
PROMPTS = [r'User(?: \[[^\]]*\])?: ', r'Domain(?: \[[^\]]*\])?: ', r'Password: ', pexpect.EOF]
USER, DOMAIN, PASSWORD, EOF = range(len(PROMPTS))


class GVFSBackend(MountProvider):
    """
    Mounts locations through the `gio mount` command.

    Every request runs its own gio process, driven with pexpect from a worker
    thread. Credential prompts are turned into challenges for the auth
    handler; anonymous challenges never show up here because `gio mount
    --anonymous` answers them itself, once.
    """

    name = PROVIDER_CLI

    def __init__(self, command: str = 'gio'):
        self.command = command
        self.workers: List[threading.Thread] = []

    def mount_async(self, uri, flags, auth_handler, completion_handler):
        worker = threading.Thread(
            target=self._run,
            args=(uri, auth_handler, completion_handler),
            name=f"usermount-{len(self.workers)}",
            daemon=True,
        )
        self.workers.append(worker)
        worker.start()

    def _run(self, uri, auth_handler, completion_handler):
        try:
            result = self.mount(uri, auth_handler)
        except (pexpect.ExceptionPexpect, OSError) as e:
            warning(f"Error during mount operation: {e}")
            result = ProviderError(FAILED, str(e))
        completion_handler(result)

    def mount(self, uri: str, auth_handler) -> MountResult:
        """
        Mount a location and wait for gio to finish.

        Args:
            uri: Location to mount
            auth_handler: Callable answering credential prompts

        Returns:
            MountStatus.DONE or a ProviderError
        """
        args = ['mount']
        if auth_handler.is_anonymous:
            debug(f"Anonymous mount requested for {uri}")
            args.append('--anonymous')
        args.append(uri)

        child = pexpect.spawn(self.command, args, encoding='utf-8', timeout=None)

        # One challenge spans the User/Domain/Password prompts up to the password
        reply = None
        while True:
            i = child.expect(PROMPTS)

            if i == EOF:
                break

            if reply is None:
                reply = auth_handler(AuthChallenge(message=(child.before or '').strip()))

            if reply is not AuthReply.HANDLED:
                child.terminate(force=True)
                child.close()
                return ProviderError(FAILED_HANDLED, f"Authentication aborted for {uri}")

            # Keep the defaults and leave the password empty so a Kerberos ticket gets used
            child.sendline('')
            if i == PASSWORD:
                reply = None

        output = child.before or ''
        child.close()

        if child.exitstatus == 0:
            return MountStatus.DONE

        return self.parse_error(output, child.exitstatus)

    @staticmethod
    def parse_error(output: str, exitstatus) -> ProviderError:
        """Build a ProviderError from the last line gio printed, e.g. 'gio: smb://h/s: Location is already mounted'."""
        lines = [line.strip() for line in output.splitlines() if line.strip()]
        message = lines[-1] if lines else f"gio exited with status {exitstatus}"

        if 'already mounted' in message.lower():
            return ProviderError(ALREADY_MOUNTED, message)
        return ProviderError(FAILED, message)

    def close(self):
        for worker in self.workers:
            worker.join()
