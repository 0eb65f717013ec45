"""sshez CLI."""

import logging
from pathlib import Path

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from sshez.config import SshezConfig, config_location, get_config_template, load_config
from sshez.connector import ExecConfig, ExecConnector
from sshez.manager import AliasManager
from sshez.store import FileConfigStore
from sshez.store.base import ConfigPermissionError
from sshez.store.lookup import describe_aliases
from sshez.types import AddOptions, Outcome, Result

app = typer.Typer(help="sshez - SSH aliases in your ~/.ssh/config", no_args_is_help=True)
console = Console()

DEFAULT_SSH_CONFIG = Path("~/.ssh/config").expanduser()


def setup_logging(verbose: bool = False):
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True, show_path=False)],
        force=True,
    )
    logging.getLogger("paramiko").setLevel(logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    config_file: Path | None = typer.Option(
        None, "--config-file", "-f", help="SSH config file to manage (default: ~/.ssh/config)"
    ),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show every line added or removed"),
):
    """Manage SSH aliases stored as Host blocks."""
    try:
        config = load_config()
    except (OSError, ValueError, yaml.YAMLError) as e:
        if ctx.invoked_subcommand != "init":
            console.print(f"[red]Error:[/red] Could not load {config_location()}: {escape(str(e))}", soft_wrap=True)
            raise typer.Exit(Outcome.INVALID.exit_code)
        config = SshezConfig()
    if config_file is not None:
        config.ssh_config_path = str(config_file)
    setup_logging(verbose or config.verbose)
    ctx.obj = config


def get_manager(ctx: typer.Context) -> AliasManager:
    """Build the manager for the configured SSH config file."""
    config = ctx.obj
    store = FileConfigStore(config.ssh_config_file, strict_headers=config.strict_headers)
    config_file = None
    if config.ssh_config_file != DEFAULT_SSH_CONFIG:
        config_file = str(config.ssh_config_file)
    connector = ExecConnector(ExecConfig(binary=config.ssh_binary, config_file=config_file))
    return AliasManager(store, connector)


def report(result: Result) -> None:
    """Print the outcome of an operation and exit with its code."""
    message = escape(result.message)
    if result.outcome == Outcome.PERMISSION_DENIED:
        console.print(f"[red]{message}[/red]", soft_wrap=True)
    elif result.outcome == Outcome.INVALID:
        console.print(f"[red]Error:[/red] {message}", soft_wrap=True)
    elif result.outcome == Outcome.NOT_FOUND:
        console.print(f"[yellow]{message}[/yellow]", soft_wrap=True)
    else:
        console.print(message, soft_wrap=True)

    if result.outcome.exit_code != 0:
        raise typer.Exit(result.outcome.exit_code)


def parse_destination(value: str) -> tuple[str, str]:
    """Split USER@HOST."""
    user, sep, host = value.partition("@")
    if not sep or not user or not host or "@" in host:
        raise typer.BadParameter(f"Expected USER@HOST, got '{value}'")
    return user, host


def parse_option(value: str) -> tuple[str, str]:
    """Split KEY=VALUE."""
    key, sep, val = value.partition("=")
    key, val = key.strip(), val.strip()
    if not sep or not key or not val:
        raise typer.BadParameter(f"Expected KEY=VALUE, got '{value}'")
    return key, val


@app.command()
def connect(
    ctx: typer.Context,
    alias: str = typer.Argument(..., help="Alias to connect to"),
):
    """Connect to a stored alias with ssh."""
    manager = get_manager(ctx)
    try:
        result = manager.execute("connect", {"alias_name": alias})
    except RuntimeError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    report(result)


@app.command()
def add(
    ctx: typer.Context,
    alias: str = typer.Argument(..., help="Name of the new alias"),
    destination: str = typer.Argument(..., help="USER@HOST the alias points to"),
    port: int | None = typer.Option(None, "--port", "-p", help="Port to connect to"),
    identity_file: str | None = typer.Option(None, "--identity-file", "-i", help="Private key to use"),
    batch_mode: bool = typer.Option(False, "--batch-mode", "-b", help="Never ask for passwords"),
    option: list[str] = typer.Option([], "--option", "-o", help="Extra KEY=VALUE line. Repeatable."),
    test: bool = typer.Option(False, "--test", "-t", help="Show the block without writing it"),
):
    """Add an alias for USER@HOST."""
    user, host = parse_destination(destination)

    file_content: dict[str, str] = {}
    if port is not None:
        file_content["port"] = f"  Port {port}\n"
    if identity_file:
        file_content["identity_file"] = f"  IdentityFile {identity_file}\n"
    if batch_mode:
        file_content["batch_mode"] = "  BatchMode yes\n"
    for entry in option:
        key, val = parse_option(entry)
        file_content[f"option:{key}"] = f"  {key} {val}\n"

    manager = get_manager(ctx)
    result = manager.execute(
        "add",
        {
            "alias_name": alias,
            "user": user,
            "host": host,
            "options": AddOptions(test=test, file_content=file_content),
        },
    )
    if test and result.text is not None:
        console.print(escape(result.text), highlight=False)
    report(result)


@app.command()
def remove(
    ctx: typer.Context,
    alias: str = typer.Argument(..., help="Alias to remove"),
):
    """Remove an alias and all of its lines."""
    report(get_manager(ctx).execute("remove", {"alias_name": alias}))


@app.command("list")
def list_aliases(
    ctx: typer.Context,
    long: bool = typer.Option(False, "--long", "-l", help="Show resolved host, user, port and key"),
):
    """List stored aliases in file order."""
    manager = get_manager(ctx)
    result = manager.execute("list")
    if not result.aliases:
        report(result)
        return

    if not long:
        console.print(escape(result.message))
        for name in result.aliases:
            console.print(f"\t- {escape(name)}", highlight=False)
        return

    try:
        details = describe_aliases(manager.store.path, result.aliases)
    except ConfigPermissionError as e:
        report(Result(outcome=Outcome.PERMISSION_DENIED, message=f"Permission denied! {e}"))
        return

    table = Table()
    table.add_column("Alias")
    table.add_column("HostName")
    table.add_column("User")
    table.add_column("Port")
    table.add_column("IdentityFile")
    for entry in details:
        table.add_row(
            escape(entry.name),
            escape(entry.hostname),
            escape(entry.user or ""),
            str(entry.port),
            escape(entry.identity_file or ""),
        )
    console.print(table)


@app.command()
def reset(
    ctx: typer.Context,
    yes: bool = typer.Option(False, "--yes", "-y", help="Do not ask for confirmation"),
):
    """Remove every alias by emptying the config file."""
    manager = get_manager(ctx)
    if yes:
        report(manager.reset_confirmed())
    else:
        report(manager.execute("reset", confirm=lambda prompt: typer.confirm(prompt, default=False)))


@app.command()
def init():
    """Write a default sshez configuration file."""
    config_file = config_location()

    if config_file.exists():
        console.print(f"[yellow]Warning:[/yellow] {config_file} already exists.")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit(0)

    config_file.parent.mkdir(parents=True, exist_ok=True)
    config_file.write_text(get_config_template())
    console.print(f"[green]Wrote {config_file}[/green]")


if __name__ == "__main__":
    app()
