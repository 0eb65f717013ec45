"""Resolved settings for stored aliases."""

from dataclasses import dataclass
from pathlib import Path

from paramiko.config import SSHConfig

from sshez.store.base import ENCODING, ERRORS, ConfigPermissionError


@dataclass
class AliasDetails:
    """Settings ssh would use for one alias."""

    name: str
    hostname: str
    user: str | None = None
    port: int = 22
    identity_file: str | None = None


def describe_aliases(path: Path, names: list[str]) -> list[AliasDetails]:
    """Resolve HostName, User, Port and IdentityFile for each alias, in the given order."""
    path = Path(path).expanduser()
    if not names:
        return []

    try:
        with open(path, encoding=ENCODING, errors=ERRORS) as f:
            config = SSHConfig.from_file(f)
    except FileNotFoundError:
        return []
    except OSError as e:
        raise ConfigPermissionError(path, "read") from e

    details = []
    for name in names:
        host_config = config.lookup(name)

        port = 22
        if "port" in host_config:
            try:
                port = int(host_config["port"])
            except ValueError:
                pass

        identity_files = host_config.get("identityfile", [])
        identity_file = identity_files[0] if identity_files else None

        details.append(
            AliasDetails(
                name=name,
                hostname=host_config.get("hostname", name),
                user=host_config.get("user"),
                port=port,
                identity_file=identity_file,
            )
        )

    return details
