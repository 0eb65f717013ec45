"""Host block recognition and removal for SSH config files."""

import logging
from enum import Enum
from typing import Iterable, Iterator

logger = logging.getLogger(__name__)

HOST_KEYWORD = "Host"


class ScanState(str, Enum):
    """State of the block filter while streaming lines."""

    COPYING = "copying"
    SKIPPING = "skipping"


def parse_host_header(line: str, strict: bool = True) -> str | None:
    """Return the alias named by a `Host` header line, or None for payload lines.

    Strict mode only accepts `Host` as the first token of the line. Loose mode
    treats any line containing `Host ` as a header.
    """
    if strict:
        parts = line.split(None, 1)
        if len(parts) < 2 or parts[0] != HOST_KEYWORD:
            return None
        return parts[1].strip() or None

    marker = f"{HOST_KEYWORD} "
    if marker not in line:
        return None
    return line.replace(marker, "", 1).strip() or None


def iter_alias_names(lines: Iterable[str], strict: bool = True) -> Iterator[str]:
    """Yield alias names in file order, including repeats."""
    for line in lines:
        name = parse_host_header(line, strict)
        if name is not None:
            yield name


def is_blank(line: str) -> bool:
    return not line.strip()


class BlockFilter:
    """Streams lines through, dropping every block that belongs to one alias.

    A block starts at its header and runs up to the next header with a
    different name. When the dropped block reaches end of file, one blank line
    right before its header goes with it, since that is the separator written
    when the block was appended.
    """

    def __init__(self, alias_name: str, strict: bool = True):
        self.alias_name = alias_name
        self.strict = strict
        self.state = ScanState.COPYING
        self.removed: list[str] = []

    def filter(self, lines: Iterable[str]) -> Iterator[str]:
        """Yield the lines to keep."""
        pending_blank: str | None = None
        separator: str | None = None

        for line in lines:
            name = parse_host_header(line, self.strict)

            if name == self.alias_name:
                if self.state == ScanState.COPYING:
                    separator = pending_blank
                    pending_blank = None
                self.state = ScanState.SKIPPING
                self._drop(line)
                continue

            if self.state == ScanState.SKIPPING:
                if name is None:
                    self._drop(line)
                    continue
                self.state = ScanState.COPYING
                if separator is not None:
                    yield separator
                    separator = None
                yield line
                continue

            if pending_blank is not None:
                yield pending_blank
                pending_blank = None
            if is_blank(line):
                pending_blank = line
            else:
                yield line

        if self.state == ScanState.SKIPPING:
            if separator is not None:
                self._drop(separator)
        elif pending_blank is not None:
            yield pending_blank

    def _drop(self, line: str) -> None:
        logger.debug(f"Removing: {line.rstrip()!r}")
        self.removed.append(line)
