# policy.py
import os
import tempfile
from pathlib import Path
from typing import Iterable, List, Union

from usermount.utils import debug


def parse_entry_values(value: str) -> List[str]:
    """
    Split a policy entry value into mount locations.

    Lines are trimmed, blank lines dropped and repeated values kept only once,
    in their first position. Anonymous tags are left as they are.

    Args:
        value: Raw value of the policy entry

    Returns:
        The distinct locations, in order
    """
    seen = set()
    values = []

    for line in value.split('\n'):
        line = line.strip()
        if not line or line in seen:
            continue
        seen.add(line)
        values.append(line)

    return values


def write_mounts_file(path: Union[str, Path], values: Iterable[str], uid: int, gid: int) -> None:
    """
    Write a mounts file owned by the given user and group.

    The content goes to a temporary file next to the target, which is then
    renamed over it.

    Raises:
        ValueError: if uid or gid is negative
        IsADirectoryError: if path is an existing directory
        OSError: if the file can't be written or chowned
    """
    if uid < 0 or gid < 0:
        raise ValueError(f"invalid owner {uid}:{gid}")

    path = Path(path)
    if path.is_dir():
        raise IsADirectoryError(f"{path} is a directory")

    debug(f"Writing mounts file {path} for {uid}:{gid}")

    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.")
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(''.join(f"{v}\n" for v in values))
        os.chown(tmp_name, uid, gid)
        os.replace(tmp_name, path)
    except BaseException:
        os.unlink(tmp_name)
        raise
