# mount_manager.py

import queue
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional, Tuple, Union

from usermount.auth import AuthGate
from usermount.entries import MountEntry, read_entries
from usermount.errors import MountError, ProviderError
from usermount.providers import MountFlags, MountProvider, MountResult, MountStatus, get_provider
from usermount.utils import debug, error, log, log_ok, notice, warning

Failure = Tuple[str, ProviderError]


@dataclass(frozen=True)
class CompletionEvent:
    """Outcome of one mount request, as published on the completion channel."""
    path: str
    status: MountResult


class MountDispatcher:
    """Starts one asynchronous mount per entry, each reporting to the shared channel."""

    def __init__(self, provider: MountProvider, channel: queue.Queue):
        self.provider = provider
        self.channel = channel

    def dispatch(self, entries: List[MountEntry]) -> None:
        for entry in entries:
            self.mount(entry)

    def mount(self, entry: MountEntry) -> None:
        debug(f"Mounting entry {entry.mount_path}")

        gate = AuthGate(entry.is_anonymous)

        def mount_handled(status: MountResult) -> None:
            self.channel.put(CompletionEvent(entry.mount_path, status))

        self.provider.mount_async(entry.mount_path, MountFlags.NONE, gate, mount_handled)


class CompletionTracker:
    """
    Consumes completion events until every dispatched entry has settled.

    Only the consuming thread touches the pending count and the error list.
    """

    def __init__(self, pending: int):
        self.pending = pending
        self.errors: List[Failure] = []

    def handle(self, event: CompletionEvent) -> bool:
        """
        Record one completion.

        Returns:
            bool: True while more completions are expected
        """
        if self.pending == 0:
            raise RuntimeError(f"Completion for {event.path} received after all mounts settled")

        if isinstance(event.status, ProviderError):
            warning(f"Failed when mounting {event.path}")
            self.errors.append((event.path, event.status))
        elif event.status is MountStatus.DONE:
            debug(f"Mounting of {event.path} was successful")
        else:
            error(f"Unexpected return status: {event.status!r}", exit_code=None)

        self.pending -= 1
        return self.pending != 0

    def run(self, channel: queue.Queue) -> List[Failure]:
        """Block on the channel until the last completion arrives."""
        while self.pending and self.handle(channel.get()):
            pass
        return self.errors


def evaluate_errors(errors: List[Failure]) -> None:
    """
    Decide the overall outcome from the collected failures.

    Locations that were already mounted count as success.

    Raises:
        MountError: if any failure is of another kind
    """
    if not errors:
        return

    for path, e in errors:
        warning(f"Mount process for {path} failed: {e}")

    if any(not e.already_mounted for _, e in errors):
        raise MountError(errors)

    notice("Every failed location was already mounted")


def mount_entries(entries: List[MountEntry], provider: MountProvider) -> None:
    """Mount every entry with the given provider and wait for all of them."""
    if not entries:
        return

    channel = queue.Queue()
    tracker = CompletionTracker(len(entries))

    MountDispatcher(provider, channel).dispatch(entries)

    evaluate_errors(tracker.run(channel))


def handle_user_mounts(mounts_file: Union[str, Path], provider: Optional[MountProvider] = None,
                       provider_name: Optional[str] = None) -> None:
    """
    Mount the entries listed in a mounts file.

    Args:
        mounts_file: Path to the mounts file
        provider: Provider to mount with; one is built and closed if omitted
        provider_name: Name passed to get_provider when no provider is given

    Raises:
        ParseError: if the mounts file can't be read
        MountError: if at least one entry failed to mount
        ValueError: if provider_name is not a known provider
    """
    entries = read_entries(mounts_file)
    if not entries:
        return

    log(f"Mounting {len(entries)} entries from {mounts_file}")

    if provider is not None:
        mount_entries(entries, provider)
    else:
        with get_provider(provider_name) as provider:
            mount_entries(entries, provider)

    log_ok(f"All entries from {mounts_file} are mounted")
