"""Connector that replaces the current process with the ssh client."""

import logging
import os
import shutil
from dataclasses import dataclass

logger = logging.getLogger(__name__)


@dataclass
class ExecConfig:
    """SSH client invocation settings."""

    binary: str = "ssh"
    config_file: str | None = None  # Passed as -F when not the default file


class ExecConnector:
    """Runs the system ssh client in place of this process."""

    def __init__(self, config: ExecConfig):
        self.config = config

    def command(self, alias_name: str) -> list[str]:
        argv = [self.config.binary]
        if self.config.config_file:
            argv += ["-F", os.path.expanduser(self.config.config_file)]
        argv.append(alias_name)
        return argv

    def connect(self, alias_name: str) -> None:
        argv = self.command(alias_name)
        executable = shutil.which(argv[0])
        if executable is None:
            raise RuntimeError(f"SSH client not found: {argv[0]}")

        logger.debug(f"Executing: {' '.join(argv)}")
        try:
            os.execv(executable, argv)
        except OSError as e:
            raise RuntimeError(f"Failed to start {argv[0]}: {e}") from e
