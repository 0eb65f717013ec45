"""Storage module for SSH config file access."""

from sshez.store.base import CONFIG_FILE_MODE, ConfigPermissionError, ConfigStore
from sshez.store.blocks import BlockFilter, ScanState, parse_host_header
from sshez.store.file import FileConfigStore

__all__ = [
    "BlockFilter",
    "CONFIG_FILE_MODE",
    "ConfigPermissionError",
    "ConfigStore",
    "FileConfigStore",
    "ScanState",
    "parse_host_header",
]
