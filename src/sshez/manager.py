"""Alias operations on top of a ConfigStore."""

import logging
from typing import Callable

from pydantic import ValidationError

from sshez.connector.base import Connector
from sshez.store.base import ConfigPermissionError, ConfigStore
from sshez.types import AddOptions, AliasRequest, Outcome, Result

logger = logging.getLogger(__name__)

COMMANDS = ("connect", "add", "remove", "list", "reset")
RESET_PROMPT = "Are you sure you want to remove all aliases?"


def permission_denied(error: ConfigPermissionError) -> Result:
    logger.debug(f"{error} ({error.__cause__})")
    return Result(
        outcome=Outcome.PERMISSION_DENIED,
        message=f"Permission denied! Please check your {error.path} permissions then try again.",
    )


def not_found(alias_name: str) -> Result:
    return Result(
        outcome=Outcome.NOT_FOUND,
        message=f"Could not find host `{alias_name}`",
        alias=alias_name,
    )


def invalid(message: str = "Invalid input. Use -h for help") -> Result:
    return Result(outcome=Outcome.INVALID, message=message)


class AliasManager:
    """Runs one alias operation per call against the config file.

    Nothing is cached between calls; every operation reads the file again.
    """

    def __init__(self, store: ConfigStore, connector: Connector):
        self.store = store
        self.connector = connector

    def execute(
        self,
        command: str,
        params: dict | None = None,
        confirm: Callable[[str], bool] | None = None,
    ) -> Result:
        """Validate params for command and run it."""
        if command not in COMMANDS:
            return invalid()

        if command == "list":
            return self.list()

        if command == "reset":
            if confirm is None or not confirm(RESET_PROMPT):
                return Result(outcome=Outcome.SUCCESS, message="Reset cancelled, nothing was changed.")
            return self.reset_confirmed()

        try:
            request = AliasRequest(**(params or {}))
        except ValidationError as e:
            return invalid(_first_error(e))

        if command == "connect":
            return self.connect(request.alias_name)
        if command == "remove":
            return self.remove(request.alias_name)

        if request.user is None or request.host is None:
            return invalid("add needs a user and a host")
        return self.add(request.alias_name, request.user, request.host, request.options)

    def connect(self, alias_name: str) -> Result:
        try:
            if alias_name not in self.store.aliases():
                return not_found(alias_name)
        except ConfigPermissionError as e:
            return permission_denied(e)

        logger.debug(f"Connecting to {alias_name}")
        self.connector.connect(alias_name)
        return Result(outcome=Outcome.SUCCESS, message=f"Connecting to {alias_name}", alias=alias_name)

    def form(self, alias_name: str, user: str, host: str, options: AddOptions) -> str:
        """Block text appended by add."""
        text = "\n"
        text += f"Host {alias_name}\n"
        text += f"  HostName {host}\n"
        text += f"  User {user}\n"
        for line in options.file_content.values():
            text += line
        return text

    def add(self, alias_name: str, user: str, host: str, options: AddOptions | None = None) -> Result:
        options = options or AddOptions()
        text = self.form(alias_name, user, host, options)
        logger.debug(f"Adding\n{text}")

        if options.test:
            return Result(
                outcome=Outcome.SUCCESS,
                message=f"Would add `{alias_name}` as an alias for `{user}@{host}`",
                alias=alias_name,
                text=text,
            )

        try:
            self.store.append_block(text)
        except ConfigPermissionError as e:
            return permission_denied(e)

        logger.debug(f"to {self.store.path}")
        return Result(
            outcome=Outcome.SUCCESS,
            message=(
                f"Successfully added `{alias_name}` as an alias for `{user}@{host}`\n"
                f"Try sshez connect {alias_name}"
            ),
            alias=alias_name,
            text=text,
        )

    def remove(self, alias_name: str) -> Result:
        try:
            if alias_name not in self.store.aliases():
                return not_found(alias_name)
            self.store.rewrite_without(alias_name)
        except ConfigPermissionError as e:
            return permission_denied(e)

        return Result(
            outcome=Outcome.SUCCESS,
            message=f"`{alias_name}` was successfully removed from your hosts",
            alias=alias_name,
        )

    def list(self) -> Result:
        try:
            names = self.store.aliases()
        except ConfigPermissionError as e:
            return permission_denied(e)

        if not names:
            return Result(outcome=Outcome.SUCCESS, message="No aliases added")
        return Result(outcome=Outcome.SUCCESS, message="Listing aliases:", aliases=names)

    def reset_confirmed(self) -> Result:
        """Empty the config file. Asking the user first is the caller's job."""
        try:
            self.store.truncate()
        except ConfigPermissionError as e:
            return permission_denied(e)
        return Result(outcome=Outcome.SUCCESS, message="You have successfully reset your ssh config file.")


def _first_error(error: ValidationError) -> str:
    first = error.errors()[0]
    return first["msg"].removeprefix("Value error, ")
