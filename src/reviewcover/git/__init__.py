"""Git collaborators: changed files, per-file history and the user's identity."""

from reviewcover.git.changes import ChangedFile, get_changed_files, parse_name_status, resolve_changed_files
from reviewcover.git.history import GitHistoryProvider, my_identity

__all__ = [
    "ChangedFile",
    "GitHistoryProvider",
    "get_changed_files",
    "my_identity",
    "parse_name_status",
    "resolve_changed_files",
]
