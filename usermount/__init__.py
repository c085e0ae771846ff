"""Mount the network locations assigned to a user session."""

from usermount.entries import MountEntry, parse_entries, read_entries
from usermount.errors import MountError, ParseError, ProviderError, UserMountError
from usermount.mount_manager import handle_user_mounts
from usermount.policy import parse_entry_values, write_mounts_file

__version__ = '1.0.0'
