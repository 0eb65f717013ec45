"""Configuration model for sshez."""

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, field_validator

CONFIG_ENV_VAR = "SSHEZ_CONFIG"
DEFAULT_CONFIG_PATH = "~/.config/sshez/config.yaml"


class SshezConfig(BaseModel):
    """Main sshez configuration."""

    ssh_config_path: str = "~/.ssh/config"
    ssh_binary: str = "ssh"
    strict_headers: bool = True  # Only treat lines starting with `Host` as block headers
    verbose: bool = False

    @field_validator("ssh_config_path", "ssh_binary")
    @classmethod
    def validate_not_empty(cls, v: str, info) -> str:
        if not v.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return v

    @property
    def ssh_config_file(self) -> Path:
        return Path(self.ssh_config_path).expanduser()


def config_location() -> Path:
    """Path of the sshez config file, honouring SSHEZ_CONFIG."""
    return Path(os.environ.get(CONFIG_ENV_VAR, DEFAULT_CONFIG_PATH)).expanduser()


def load_config(path: Path | None = None) -> SshezConfig:
    """Load configuration from YAML file. Missing file means defaults."""
    path = path or config_location()
    if not path.exists():
        return SshezConfig()

    with open(path) as f:
        data = yaml.safe_load(f)
    if data is None:
        return SshezConfig()
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path}, got {type(data).__name__}")
    return SshezConfig(**data)


def get_config_template() -> str:
    """Get the default configuration template."""
    return """# sshez configuration

# SSH client config file holding the aliases
ssh_config_path: ~/.ssh/config

# Client started by `sshez connect`
ssh_binary: ssh

# true: only lines whose first word is `Host` start a block.
# false: any line containing `Host ` does (matches comments too).
strict_headers: true

# Log every line added or removed
verbose: false
"""
