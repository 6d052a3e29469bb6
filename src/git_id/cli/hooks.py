"""Hook commands run by git itself through GIT_SSH and GIT_ASKPASS.

Both always exit with status 0: git treats a failing helper as a
broken pipe rather than an authentication problem.
"""

import subprocess
from typing import List, Optional

import typer

from . import err_console
from ..exceptions import GitIdError

hook_app = typer.Typer(help="Helpers invoked by git, not by users")


def _active_identity(manager):
    try:
        return manager.active_identity()
    except GitIdError as e:
        err_console.print(f"[yellow]git-id:[/yellow] {e.message}")
        return None


@hook_app.command(
    "ssh",
    context_settings={"ignore_unknown_options": True, "allow_extra_args": True},
)
def hook_ssh(
    ctx: typer.Context,
    args: Optional[List[str]] = typer.Argument(
        None, help="Arguments git passes to its ssh transport"
    ),
) -> None:
    """Run ssh with the active identity's key."""
    manager = ctx.obj
    ssh_args = list(args or [])

    cmd = [manager.config.ssh_program]
    identity = _active_identity(manager)
    if identity is not None and identity.sshkey:
        cmd.extend(["-i", identity.sshkey])
    cmd.extend(ssh_args)

    manager.audit.log_event(
        "hook_ssh",
        {"identity_id": identity.id if identity else None, "args": ssh_args},
    )

    try:
        subprocess.run(cmd, check=False)
    except OSError as e:
        err_console.print(f"[yellow]git-id:[/yellow] cannot run {cmd[0]}: {e.strerror}")


@hook_app.command("askpass")
def hook_askpass(
    ctx: typer.Context,
    prompt: str = typer.Argument("", help="Prompt text git passes to the helper"),
) -> None:
    """Answer git's username or password prompt for the active identity."""
    manager = ctx.obj

    identity = _active_identity(manager)
    answer = ""
    if identity is not None:
        if prompt.startswith("Username"):
            answer = identity.name
        elif prompt.startswith("Password"):
            answer = identity.token or ""

    manager.audit.log_event(
        "hook_askpass",
        {"identity_id": identity.id if identity else None, "prompt": prompt.split(" ")[0]},
    )
    typer.echo(answer)
