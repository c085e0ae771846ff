# entries.py
from dataclasses import dataclass
from pathlib import Path
from typing import List, Union

from usermount.errors import ParseError
from usermount.utils import debug, error

ANONYMOUS_TAG = '[anonymous]'


@dataclass(frozen=True)
class MountEntry:
    """A location listed in the mounts file."""
    mount_path: str
    is_anonymous: bool = False


def parse_entries(content: str) -> List[MountEntry]:
    """
    Parse the mount entries from the content of a mounts file.

    Each non-blank line is a URI, optionally prefixed with the anonymous tag.

    Args:
        content: Text content of the mounts file

    Returns:
        Entries in the order they are listed
    """
    entries = []

    # Only "\n" ends a line; a "\r" is dropped when it comes right before it
    for line in content.split('\n'):
        if line.endswith('\r'):
            line = line[:-1]
        if not line:
            continue

        if line.startswith(ANONYMOUS_TAG):
            entries.append(MountEntry(line[len(ANONYMOUS_TAG):], is_anonymous=True))
        else:
            entries.append(MountEntry(line))

    return entries


def read_entries(mounts_file: Union[str, Path]) -> List[MountEntry]:
    """Read and parse a mounts file, raising ParseError if it can't be read."""
    debug(f"Parsing file {mounts_file} content")

    try:
        # newline='' keeps line endings untouched for parse_entries
        with open(mounts_file, 'r', encoding='utf-8', newline='') as f:
            content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        error(f"Error when parsing entries: {e}", exit_code=None)
        raise ParseError(f"could not read {mounts_file}: {e}") from e

    return parse_entries(content)
