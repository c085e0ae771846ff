#!/usr/bin/env python3
# cli.py
import argparse
import os
import signal
import sys
from pathlib import Path
from typing import Tuple

from usermount.errors import MountError, ParseError
from usermount.mount_manager import handle_user_mounts
from usermount.policy import parse_entry_values, write_mounts_file
from usermount.providers import PROVIDER_CLI, PROVIDER_GIO
from usermount.utils import break_handler, error, log_ok, set_verbose

EXIT_OK = 0
EXIT_CONFIG_ERROR = 1
EXIT_PARSE_ERROR = 3
EXIT_MOUNT_ERROR = 4
EXIT_WRITE_ERROR = 5


def parse_owner(value: str) -> Tuple[int, int]:
    """Parse a UID:GID pair for argparse."""
    try:
        uid, gid = value.split(':', 1)
        return int(uid), int(gid)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected UID:GID, got {value!r}")


def write_from_policy(policy_file: str, mounts_file: str, owner: Tuple[int, int]) -> int:
    """
    Write the mounts file from a policy entry value stored in policy_file.

    Returns:
        int: Exit code
    """
    try:
        values = parse_entry_values(Path(policy_file).read_text(encoding='utf-8'))
        write_mounts_file(mounts_file, values, *owner)
    except (OSError, UnicodeDecodeError, ValueError) as e:
        error(f"Failed to write {mounts_file}: {e}", exit_code=None)
        return EXIT_WRITE_ERROR

    log_ok(f"Wrote {len(values)} entries to {mounts_file}")
    return EXIT_OK


def main(argv=None):
    """
    Main entry point for the script.

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    # Register signal handler for CTRL+C
    signal.signal(signal.SIGINT, break_handler)

    # Parse command line arguments
    parser = argparse.ArgumentParser(description='Mount the network locations listed in a mounts file')
    parser.add_argument('mounts_file',
                        help='File listing one location per line, optionally prefixed with [anonymous]')
    parser.add_argument('-p', '--provider', choices=[PROVIDER_GIO, PROVIDER_CLI],
                        help='How to mount: in-process GIO or the gio command (default: $USERMOUNT_PROVIDER or gio)')
    parser.add_argument('-w', '--write-from', metavar='POLICY_FILE',
                        help='Write mounts_file from the policy entry value in POLICY_FILE instead of mounting')
    parser.add_argument('-o', '--owner', type=parse_owner, default=(os.getuid(), os.getgid()),
                        help='UID:GID owning the written mounts file (default: current user)')
    parser.add_argument('-v', '--verbose', action='store_true',
                        help='Print debug messages')
    args = parser.parse_args(argv)

    if args.verbose:
        set_verbose(True)

    if args.write_from:
        return write_from_policy(args.write_from, args.mounts_file, args.owner)

    # The provider is only built once the mounts file lists something to mount
    try:
        handle_user_mounts(args.mounts_file, provider_name=args.provider)
    except (ValueError, ImportError) as e:
        error(f"Configuration error: {e}", exit_code=None)
        return EXIT_CONFIG_ERROR
    except ParseError as e:
        error(str(e), exit_code=None)
        return EXIT_PARSE_ERROR
    except MountError as e:
        error(str(e), exit_code=None)
        return EXIT_MOUNT_ERROR

    return EXIT_OK


if __name__ == '__main__':
    sys.exit(main())
