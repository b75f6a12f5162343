"""Command-line interface for fleet."""
import logging
import os
import sys
from contextlib import contextmanager

import click

from .commands import CommandDefinition, options, register_command, registered_commands, validate_id
from .config import ConfigStore
from .display import console, configure_console, render_aliases, render_commands, render_status
from .errors import CliError, MissingTarget

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool):
    """Log to stderr, at debug level when verbose."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        stream=sys.stderr
    )


@contextmanager
def cli_errors():
    """Report client errors as click errors."""
    try:
        yield
    except CliError as e:
        logger.debug("Command failed: %r", e)
        error = click.ClickException(str(e))
        error.exit_code = e.exit_code
        raise error from e


@click.group()
@click.option('--config', '-c', 'config_path', type=click.Path(dir_okay=False), envvar='FLEET_CONFIG',
              help='Config file (default: ~/.fleet_config)')
@click.option('--verbose', '-v', is_flag=True, help='Enable debug logging')
@click.option('--no-color', is_flag=True, help='Disable colored output')
@click.option('--non-interactive', '-n', is_flag=True, help='Never prompt for input')
@click.pass_context
def cli(ctx: click.Context, config_path: str, verbose: bool, no_color: bool, non_interactive: bool):
    """Fleet - deployment target client."""
    setup_logging(verbose)
    options.colorize = not no_color
    options.interactive = not non_interactive
    configure_console(options.colorize)

    with cli_errors():
        ctx.obj = ConfigStore(config_path)


def fleet_command(usage: str):
    """Register a subcommand in the command table and on the click group.

    The first docstring line becomes the command description.
    """
    def decorator(f):
        description = (f.__doc__ or "").strip().split("\n")[0].rstrip(".")
        command = cli.command(usage)(f)
        register_command(CommandDefinition(usage=usage, description=description))
        return command
    return decorator


def save(store: ConfigStore) -> None:
    """Save the store, reporting failures as click errors."""
    with cli_errors():
        store.save()


def require_target(store: ConfigStore) -> str:
    """Return the current target or fail."""
    if store.target is None:
        with cli_errors():
            raise MissingTarget("Target not set, run 'fleet target URL' first")
    return store.target


# === Status ===

@fleet_command("status")
@click.pass_obj
def status(store: ConfigStore):
    """Show current target, deployment and login."""
    with cli_errors():
        render_status(store)


# === Target ===

@fleet_command("target")
@click.argument("url", required=False)
@click.argument("name", required=False)
@click.pass_obj
def target(store: ConfigStore, url: str, name: str):
    """Show or set the current target."""
    if url is None:
        if store.target is None:
            console.print("[yellow]Target not set[/yellow]")
        elif store.target_name:
            console.print(f"Current target is {store.target} ({store.target_name})")
        else:
            console.print(f"Current target is {store.target}")
        return

    with cli_errors():
        if name is not None:
            validate_id(name)

    resolved = store.resolve_alias("target", url) or url
    store.target = resolved
    store.target_name = name
    if name is not None:
        store.set_alias("target", name, resolved)
    save(store)
    console.print(f"[green]Target set to {resolved}[/green]")


# === Deployment ===

@fleet_command("deployment")
@click.argument("path", required=False)
@click.pass_obj
def deployment(store: ConfigStore, path: str):
    """Show or set the deployment for the current target."""
    if path is None:
        with cli_errors():
            current = store.deployment()
        if current is None:
            console.print("[yellow]Deployment not set[/yellow]")
        else:
            console.print(f"Current deployment is {current}")
        return

    path = os.path.abspath(os.path.expanduser(path))
    with cli_errors():
        store.set_deployment(path)
    save(store)
    console.print(f"[green]Deployment set to {path}[/green]")


@fleet_command("deployment-remove")
@click.argument("name")
@click.pass_obj
def deployment_remove(store: ConfigStore, name: str):
    """Remove a deployment entry."""
    store.remove_deployment(name)
    save(store)
    console.print(f"[green]Removed deployment {name}[/green]")


# === Credentials ===

@fleet_command("login")
@click.argument("username", required=False)
@click.argument("password", required=False)
@click.pass_obj
def login(store: ConfigStore, username: str, password: str):
    """Store credentials for the current target."""
    current = require_target(store)

    if username is None or password is None:
        if not options.interactive:
            raise click.UsageError("Please provide username and password")
        if username is None:
            username = click.prompt("Username")
        if password is None:
            password = click.prompt("Password", hide_input=True)

    store.set_credentials(current, username, password)
    save(store)
    console.print(f"[green]Logged in as {username}[/green]")


@fleet_command("logout")
@click.pass_obj
def logout(store: ConfigStore):
    """Forget credentials for the current target."""
    current = require_target(store)
    store.set_credentials(current, None, None)
    save(store)
    console.print(f"[green]Logged out from {current}[/green]")


# === Aliases ===

@fleet_command("alias")
@click.argument("name")
@click.argument("value")
@click.pass_obj
def alias(store: ConfigStore, name: str, value: str):
    """Create a target alias."""
    with cli_errors():
        validate_id(name)
    store.set_alias("target", name, value)
    save(store)
    console.print(f"[green]Alias {name} -> {value}[/green]")


@fleet_command("aliases")
@click.pass_obj
def aliases(store: ConfigStore):
    """List target aliases."""
    render_aliases("target", store.aliases("target"))


# === Settings ===

@fleet_command("set-timeout")
@click.argument("seconds", type=click.IntRange(min=1))
@click.pass_obj
def set_timeout(store: ConfigStore, seconds: int):
    """Set the status request timeout."""
    store.status_timeout = seconds
    save(store)
    console.print(f"[green]Status timeout set to {seconds}s[/green]")


@fleet_command("commands")
def commands():
    """List available commands."""
    console.print("[bold]Available commands:[/bold]")
    render_commands(registered_commands())


if __name__ == "__main__":
    cli()
