"""Core CLI commands: init, config, version."""

from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.markup import escape

from . import console, err_console
from .. import __version__
from ..config.loader import default_config_paths, save_config
from ..config.schema import GitIdConfig

SHELL_FUNCTION = """\
git-id() {
    case "$1" in
        use|reset)
            __git_id_script="$(command git-id "$@")"
            __git_id_status=$?
            eval "$__git_id_script"
            unset __git_id_script
            return $__git_id_status
            ;;
        *)
            command git-id "$@"
            ;;
    esac
}"""


def init() -> None:
    """Print the shell function that lets `use` and `reset` change the session.

    Add `eval "$(git-id init)"` to your shell startup file.
    """
    typer.echo(SHELL_FUNCTION)


def config(
    ctx: typer.Context,
    init: bool = typer.Option(False, "--init", help="Initialize a new config file"),
    path: Optional[Path] = typer.Option(
        None, "--path", "-p", help="Where --init writes the config file"
    ),
) -> None:
    """Show the effective configuration, or create a config file."""

    if init:
        config_file = path or default_config_paths()[0]

        if config_file.exists():
            overwrite = typer.confirm(
                f"Config file already exists at {config_file}. Overwrite?"
            )
            if not overwrite:
                raise typer.Exit(0)

        save_config(GitIdConfig(), config_file)
        err_console.print(f"[green]success:[/green] created config file at {escape(str(config_file))}")
        return

    cfg = ctx.obj.config
    console.print(
        escape(yaml.dump(cfg.model_dump(mode="json"), default_flow_style=False, sort_keys=False)),
        end="",
    )


def version() -> None:
    """Show version information."""
    console.print(f"[cyan]git-id[/cyan] version [green]{__version__}[/green]")
