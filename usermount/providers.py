# providers.py
import os
from enum import Enum, IntFlag
from typing import Callable, Literal, Union

from usermount.auth import AuthChallenge, AuthReply
from usermount.errors import ProviderError

# Provider type constants
PROVIDER_GIO = "gio"
PROVIDER_CLI = "cli"

PROVIDER_ENV = 'USERMOUNT_PROVIDER'
DEFAULT_PROVIDER = PROVIDER_GIO


class MountFlags(IntFlag):
    NONE = 0


class MountStatus(Enum):
    """
    Status of a mount request.

    Providers only ever complete with DONE. ASKED marks authentication in
    progress and is not a valid completion; the completion tracker logs it as
    unexpected if it ever shows up.
    """
    DONE = 'done'
    ASKED = 'asked'


# What a provider passes to its completion handler
MountResult = Union[Literal[MountStatus.DONE], ProviderError]
AuthHandler = Callable[[AuthChallenge], AuthReply]
CompletionHandler = Callable[[MountResult], None]


class MountProvider:
    """
    Attaches URIs to the filesystem asynchronously.

    mount_async must return without waiting for the mount. The completion
    handler is called exactly once per request, from whatever thread the
    provider services its work on, with MountStatus.DONE or a ProviderError.
    The auth handler may be called any number of times before that; its
    is_anonymous attribute tells the provider whether a HANDLED reply means
    anonymous credentials.
    """

    name = None

    def mount_async(self, uri: str, flags: MountFlags, auth_handler: AuthHandler,
                    completion_handler: CompletionHandler) -> None:
        raise NotImplementedError

    def close(self) -> None:
        pass

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def get_provider(name: str = None) -> MountProvider:
    """
    Build a mount provider by name.

    Args:
        name: 'gio' or 'cli'; defaults to $USERMOUNT_PROVIDER, then 'gio'

    Returns:
        A new provider instance
    """
    name = name or os.environ.get(PROVIDER_ENV) or DEFAULT_PROVIDER

    # Backends are imported on demand so that each only needs its own library
    if name == PROVIDER_GIO:
        from usermount.gio_backend import GioBackend
        return GioBackend()
    if name == PROVIDER_CLI:
        from usermount.gvfs_backend import GVFSBackend
        return GVFSBackend()

    raise ValueError(f"Unsupported provider: {name}")
