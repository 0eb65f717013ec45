"""Core type definitions for sshez."""

from enum import Enum

from pydantic import BaseModel, field_validator

WILDCARD_CHARS = "*?!"


class Outcome(str, Enum):
    """How an operation ended."""

    SUCCESS = "success"
    NOT_FOUND = "not_found"
    PERMISSION_DENIED = "permission_denied"
    INVALID = "invalid"

    @property
    def exit_code(self) -> int:
        return {
            Outcome.SUCCESS: 0,
            Outcome.NOT_FOUND: 1,
            Outcome.INVALID: 2,
            Outcome.PERMISSION_DENIED: 3,
        }[self]


class Result(BaseModel):
    """What an operation reports back to its caller."""

    outcome: Outcome
    message: str
    alias: str | None = None
    aliases: list[str] = []
    text: str | None = None  # Block text formed by add

    @property
    def ok(self) -> bool:
        return self.outcome == Outcome.SUCCESS


class AddOptions(BaseModel):
    """Options collected by the command parser."""

    test: bool = False  # Dry run: form the block but do not write it
    file_content: dict[str, str] = {}  # Extra config lines, appended in order


class AliasRequest(BaseModel):
    """Positional arguments of a command."""

    alias_name: str
    user: str | None = None
    host: str | None = None
    options: AddOptions = AddOptions()

    @field_validator("alias_name", "user", "host")
    @classmethod
    def validate_token(cls, v: str | None, info) -> str | None:
        if v is None:
            return v
        v = v.strip()
        if not v:
            raise ValueError(f"{info.field_name} must not be empty")
        if any(c.isspace() for c in v):
            raise ValueError(f"{info.field_name} must not contain whitespace")
        return v

    @field_validator("alias_name")
    @classmethod
    def validate_alias(cls, v: str) -> str:
        if any(c in WILDCARD_CHARS for c in v):
            raise ValueError(f"alias_name must not contain any of {WILDCARD_CHARS!r}")
        return v
