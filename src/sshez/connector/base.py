"""Connector protocol for handing off to an SSH client."""

from typing import Protocol


class Connector(Protocol):
    """Protocol for opening an interactive SSH session to an alias."""

    def connect(self, alias_name: str) -> None:
        """Start the SSH client for alias_name. Usually does not return."""
        ...
