# errors.py
from typing import List, Tuple

# Kind reported by providers when the location is already attached
ALREADY_MOUNTED = 'already-mounted'
FAILED = 'failed'


class UserMountError(Exception):
    """Base class for errors returned by handle_user_mounts."""


class ParseError(UserMountError):
    """The mounts file could not be read or interpreted."""


class ProviderError(Exception):
    """
    A single mount attempt failed.

    Providers hand these to their completion handler; they never escape the
    orchestration on their own.
    """

    def __init__(self, kind: str, message: str):
        super().__init__(message)
        self.kind = kind
        self.message = message

    @property
    def already_mounted(self) -> bool:
        return self.kind == ALREADY_MOUNTED

    def __str__(self) -> str:
        return f"{self.message} ({self.kind})"


class MountError(UserMountError):
    """At least one entry failed for a reason other than being already mounted."""

    def __init__(self, failures: List[Tuple[str, ProviderError]]):
        self.failures = list(failures)
        paths = ', '.join(path for path, _ in self.failures)
        super().__init__(f"failed to mount: {paths}")
