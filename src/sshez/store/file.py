"""File-backed ConfigStore with atomic rewrites."""

import logging
import os
import tempfile
from pathlib import Path

from sshez.store.base import CONFIG_FILE_MODE, ENCODING, ERRORS, ConfigPermissionError
from sshez.store.blocks import BlockFilter, iter_alias_names

logger = logging.getLogger(__name__)


class FileConfigStore:
    """Reads and rewrites an SSH config file on disk.

    There is no locking against other editors: a change made by another
    process between the read and the rename of a rewrite is lost.
    """

    def __init__(self, path: Path, strict_headers: bool = True):
        self.path = Path(path).expanduser()
        self.strict_headers = strict_headers

    def aliases(self) -> list[str]:
        """Alias names in file order. A missing file has no aliases."""
        names: list[str] = []
        for name in iter_alias_names(self.read_lines(), self.strict_headers):
            if name not in names:
                names.append(name)
        return names

    def read_lines(self) -> list[str]:
        """Raw lines, line endings kept. A missing file has no lines."""
        try:
            with open(self.path, encoding=ENCODING, errors=ERRORS, newline="") as f:
                return f.readlines()
        except FileNotFoundError:
            return []
        except OSError as e:
            raise ConfigPermissionError(self.path, "read") from e

    def append_block(self, text: str) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
            with open(self.path, "a", encoding=ENCODING, errors=ERRORS, newline="") as f:
                f.write(text)
        except OSError as e:
            raise ConfigPermissionError(self.path, "append to") from e
        self.set_restricted_permissions()
        logger.debug(f"Appended {len(text)} characters to {self.path}")

    def rewrite_without(self, alias_name: str) -> bool:
        block_filter = BlockFilter(alias_name, strict=self.strict_headers)
        tmp_path: Path | None = None

        try:
            with open(
                self.path, encoding=ENCODING, errors=ERRORS, newline=""
            ) as source, tempfile.NamedTemporaryFile(
                "w",
                encoding=ENCODING,
                errors=ERRORS,
                dir=self.path.parent,
                prefix=f".{self.path.name}.",
                suffix=".tmp",
                delete=False,
                newline="",
            ) as tmp:
                tmp_path = Path(tmp.name)
                for line in block_filter.filter(source):
                    tmp.write(line)
                tmp.flush()
                os.fsync(tmp.fileno())

            if not block_filter.removed:
                tmp_path.unlink()
                return False

            os.replace(tmp_path, self.path)
            tmp_path = None
        except OSError as e:
            raise ConfigPermissionError(self.path, "rewrite") from e
        finally:
            if tmp_path is not None and tmp_path.exists():
                tmp_path.unlink()

        logger.debug(f"Removed {len(block_filter.removed)} lines for `{alias_name}` from {self.path}")
        self.set_restricted_permissions()
        return True

    def truncate(self) -> None:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True, mode=0o700)
            with open(self.path, "w"):
                pass
        except OSError as e:
            raise ConfigPermissionError(self.path, "truncate") from e
        self.set_restricted_permissions()

    def set_restricted_permissions(self) -> None:
        try:
            os.chmod(self.path, CONFIG_FILE_MODE)
        except OSError as e:
            raise ConfigPermissionError(self.path, "change permissions of") from e
