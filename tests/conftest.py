import threading

import pytest

from usermount.auth import KRB5_ENV
from usermount.providers import MountProvider, MountStatus


class FakeProvider(MountProvider):
    """
    In-memory provider completing every request from its own thread.

    results maps a URI to the status it completes with (DONE by default) and
    challenges maps a URI to the challenges replayed against its auth handler
    before completing.
    """

    name = 'fake'

    def __init__(self, results=None, challenges=None):
        self.results = results or {}
        self.challenges = challenges or {}
        self.requests = []
        self.replies = {}
        self.mounted = set()
        self.workers = []
        self.closed = False
        self.lock = threading.Lock()

    def mount_async(self, uri, flags, auth_handler, completion_handler):
        self.requests.append((uri, flags, auth_handler))
        worker = threading.Thread(target=self._complete, args=(uri, auth_handler, completion_handler))
        self.workers.append(worker)
        worker.start()

    def _complete(self, uri, auth_handler, completion_handler):
        replies = [auth_handler(c) for c in self.challenges.get(uri, [])]
        result = self.results.get(uri, MountStatus.DONE)
        with self.lock:
            self.replies[uri] = replies
            if result is MountStatus.DONE:
                self.mounted.add(uri)
        completion_handler(result)

    def close(self):
        for worker in self.workers:
            worker.join()
        self.closed = True


class ReversingProvider(MountProvider):
    """Holds completions until `expected` requests arrived, then delivers them newest first."""

    name = 'reversing'

    def __init__(self, expected):
        self.expected = expected
        self.held = []

    def mount_async(self, uri, flags, auth_handler, completion_handler):
        self.held.append((uri, completion_handler))
        if len(self.held) == self.expected:
            threading.Thread(target=self._release).start()

    def _release(self):
        for uri, completion_handler in reversed(self.held):
            completion_handler(MountStatus.DONE)


class ExplodingProvider(MountProvider):
    name = 'exploding'

    def mount_async(self, uri, flags, auth_handler, completion_handler):
        raise AssertionError(f"unexpected mount of {uri}")


@pytest.fixture
def fake_provider():
    with FakeProvider() as provider:
        yield provider


@pytest.fixture
def mounts_file(tmp_path):
    """Write a mounts file from a string and return its path."""
    def _write(content):
        path = tmp_path / "mounts"
        path.write_text(content)
        return path
    return _write


@pytest.fixture
def no_kerberos(monkeypatch):
    monkeypatch.delenv(KRB5_ENV, raising=False)


@pytest.fixture
def kerberos(monkeypatch):
    monkeypatch.setenv(KRB5_ENV, "FILE:/tmp/krb5cc_1000")
