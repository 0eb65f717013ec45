"""ConfigStore protocol for SSH config file access."""

from pathlib import Path
from typing import Protocol

CONFIG_FILE_MODE = 0o600

# Bytes that are not UTF-8 pass through unchanged
ENCODING = "utf-8"
ERRORS = "surrogateescape"


class ConfigPermissionError(PermissionError):
    """Raised for any I/O failure while reading or changing the config file."""

    def __init__(self, path: Path, action: str):
        self.path = path
        self.action = action
        super().__init__(f"Could not {action} {path}")


class ConfigStore(Protocol):
    """Protocol for reading and rewriting the SSH client config file."""

    path: Path

    def aliases(self) -> list[str]:
        """Alias names in file order, without duplicates."""
        ...

    def read_lines(self) -> list[str]:
        """Raw lines of the file, line endings kept."""
        ...

    def append_block(self, text: str) -> None:
        """Append text verbatim to the end of the file."""
        ...

    def rewrite_without(self, alias_name: str) -> bool:
        """Atomically drop every block of alias_name. Returns True if lines were removed."""
        ...

    def truncate(self) -> None:
        """Replace the file contents with nothing."""
        ...

    def set_restricted_permissions(self) -> None:
        """Make the file readable and writable by its owner only."""
        ...
