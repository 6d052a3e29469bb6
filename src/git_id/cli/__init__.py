"""CLI entry point for git-id."""

import os
import shutil
import sys
from pathlib import Path
from typing import List, NoReturn, Optional

import typer
from rich.console import Console
from rich.markup import escape
from typer.core import TyperGroup

from ..config.loader import fallback_config, load_config
from ..config.schema import GitIdConfig
from ..exceptions import GitIdError

# Data goes to stdout, messages to stderr: stdout of `use` and `reset`
# is a script the calling shell evaluates.
console = Console(soft_wrap=True, emoji=False)
err_console = Console(stderr=True, soft_wrap=True, emoji=False)

# Commands that never touch the repository config
STORE_FREE_COMMANDS = {"help", "current", "reset", "init", "config", "version", "hook"}

# Usage error class of the click that typer runs on. Recent typer releases
# ship their own copy of click, so it is taken from typer's public API.
UsageError = typer.BadParameter.__mro__[1]


class IdentityGroup(TyperGroup):
    """Command group whose usage errors exit with status 1."""

    def parse_args(self, ctx: typer.Context, args: List[str]) -> List[str]:
        try:
            return super().parse_args(ctx, args)
        except UsageError as e:
            e.exit_code = 1
            raise

    def invoke(self, ctx: typer.Context):
        try:
            return super().invoke(ctx)
        except UsageError as e:
            e.exit_code = 1
            raise


def fail(error: GitIdError) -> NoReturn:
    """Report an error and stop the command with status 1."""
    err_console.print(f"[red]error:[/red] {escape(error.message)}")
    raise typer.Exit(1)


def succeed(message: str) -> None:
    """Report a completed change."""
    err_console.print(f"[green]success:[/green] {message}")


def resolve_helper_path(config: GitIdConfig) -> str:
    """Path git should run for the ssh and askpass hooks.

    Uses the configured helper, else the executable this process was
    started as. A Python script started through the interpreter (such as
    the repository's main.py) cannot be run by git directly; the installed
    git-id script is used instead when one is on PATH.
    """
    if config.helper_path:
        return str(Path(config.helper_path).expanduser())

    argv0 = sys.argv[0]
    if argv0.endswith(".py"):
        installed = shutil.which("git-id")
        if installed:
            return installed
    elif os.sep not in argv0:
        argv0 = shutil.which(argv0) or argv0
    return os.path.abspath(argv0)


# Create main app. A bare `git-id` fails with "Missing command." and the
# usage text, like any other usage error.
app = typer.Typer(
    name="git-id",
    cls=IdentityGroup,
    help="Switch between git identities for the current shell session",
    add_completion=False,
)


@app.callback()
def main_callback(
    ctx: typer.Context,
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Path to config file"
    ),
) -> None:
    """Switch between git identities for the current shell session."""
    from ..identities import get_identity_manager

    try:
        cfg = load_config(config_file)
    except (GitIdError, FileNotFoundError) as e:
        if ctx.invoked_subcommand != "hook":
            err_console.print(f"[red]error:[/red] loading config: {escape(str(e))}")
            raise typer.Exit(1)
        # Hooks answer git whatever happens
        err_console.print(f"[yellow]git-id:[/yellow] ignoring config: {escape(str(e))}")
        cfg = fallback_config()

    manager = get_identity_manager(cfg)
    ctx.obj = manager

    if ctx.invoked_subcommand in STORE_FREE_COMMANDS:
        return

    try:
        manager.ensure_reachable()
    except GitIdError as e:
        fail(e)


# Import and register command modules
from . import hooks, identity, main

app.add_typer(hooks.hook_app, name="hook", hidden=True)

# Register identity commands
app.command("add")(identity.add)
app.command("delete")(identity.delete)
app.command("list")(identity.list_identities)
app.command("show")(identity.show)
app.command("current")(identity.current)
app.command("use")(identity.use)
app.command("reset")(identity.reset)
app.command("help")(identity.help_command)

# Register main commands
app.command()(main.init)
app.command()(main.config)
app.command()(main.version)

COMMAND_NAMES = {
    "add", "delete", "list", "show", "current", "use", "reset", "help",
    "init", "config", "version", "hook",
}


def route_hook_arguments(argv: List[str]) -> List[str]:
    """Map git's hook invocations onto the explicit hook commands.

    git runs ``$GIT_ASKPASS "Username for 'https://host': "`` and
    ``$GIT_SSH user@host "git-upload-pack 'repo'"``; neither names a
    subcommand, so they are recognised by the shape of the first argument.
    """
    if not argv:
        return argv

    first = argv[0]
    if first in COMMAND_NAMES or first.startswith("-"):
        return argv
    if first.startswith(("Username", "Password")):
        return ["hook", "askpass", *argv]
    if "@" in first or "." in first:
        return ["hook", "ssh", "--", *argv]
    return argv


def cli_main(argv: Optional[List[str]] = None) -> None:
    """Main entry point."""
    args = sys.argv[1:] if argv is None else argv
    app(args=route_hook_arguments(args), prog_name="git-id")


if __name__ == "__main__":
    cli_main()
