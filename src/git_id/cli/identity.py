"""Identity commands: add, delete, list, show, current, use, reset, help."""

import typer
from rich.markup import escape
from rich.table import Table

from . import console, err_console, fail, resolve_helper_path, succeed
from ..exceptions import GitIdError


def add(
    ctx: typer.Context,
    identity_id: str = typer.Argument(..., metavar="ID", help="Identity id"),
    full_name: str = typer.Argument(..., help="Author and committer name"),
    email: str = typer.Argument(..., help="Author and committer email"),
    credential: str = typer.Argument(
        ..., metavar="CREDENTIAL", help="s:<path to ssh key> or t:<token>"
    ),
) -> None:
    """Create or update an identity."""
    manager = ctx.obj

    try:
        created = manager.add(identity_id, full_name, email, credential)
    except GitIdError as e:
        fail(e)

    action = "created" if created else "updated"
    succeed(f"identity {escape(identity_id)} {action}.")


def delete(
    ctx: typer.Context,
    identity_id: str = typer.Argument(..., metavar="ID", help="Identity id to delete"),
) -> None:
    """Delete an identity."""
    manager = ctx.obj

    try:
        manager.delete(identity_id)
    except GitIdError as e:
        fail(e)

    succeed(f"identity {escape(identity_id)} deleted.")


def list_identities(
    ctx: typer.Context,
    long: bool = typer.Option(
        False, "--long", "-l", help="Show name, email and credential type"
    ),
) -> None:
    """List all identities."""
    manager = ctx.obj

    try:
        identities = manager.list_identities()
    except GitIdError as e:
        fail(e)

    if not long:
        for identity_id in identities:
            console.print(escape(identity_id))
        return

    if not identities:
        err_console.print("[yellow]No identities defined[/yellow]")
        return

    active = manager.active_identity()

    table = Table(show_header=True, header_style="bold")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Email")
    table.add_column("Credential")
    table.add_column("Status")

    for identity_id in identities:
        try:
            identity = manager.get(identity_id)
        except GitIdError:
            # Section without a name: listed, but not usable
            table.add_row(escape(identity_id), "", "", "", "[dim]not defined[/dim]")
            continue

        credentials = []
        if identity.sshkey:
            credentials.append("ssh key")
        if identity.token:
            credentials.append("token")
        status = "[green]● active[/green]" if active and active.id == identity_id else ""

        table.add_row(
            escape(identity_id),
            escape(identity.name),
            escape(identity.email),
            ", ".join(credentials),
            status,
        )

    console.print(table)


def show(
    ctx: typer.Context,
    identity_id: str = typer.Argument(..., metavar="ID", help="Identity id to display"),
) -> None:
    """Display an identity."""
    manager = ctx.obj

    try:
        identity = manager.get(identity_id)
    except GitIdError as e:
        fail(e)

    console.print(escape(f"[{identity.id}]"))
    console.print(escape(f"name: {identity.name}"))
    console.print(escape(f"email: {identity.email}"))
    if identity.sshkey:
        console.print(escape(f"ssh key: {identity.sshkey}"))
    if identity.token:
        console.print(escape(f"token: {identity.token}"))


def current(ctx: typer.Context) -> None:
    """Show the identity active in this session."""
    manager = ctx.obj

    try:
        active = manager.current()
    except GitIdError as e:
        fail(e)

    console.print(escape(active))


def use(
    ctx: typer.Context,
    identity_id: str = typer.Argument(..., metavar="ID", help="Identity id to activate"),
) -> None:
    """Activate an identity for this session.

    Prints shell commands on stdout; run through the function from
    `git-id init` so the calling shell picks them up.
    """
    manager = ctx.obj

    try:
        previous, state = manager.use(identity_id, resolve_helper_path(manager.config))
    except GitIdError as e:
        fail(e)

    typer.echo(state.to_script())

    if previous and previous != identity_id:
        succeed(f"switched identity from {escape(previous)} to {escape(identity_id)}.")
    else:
        succeed(f"now using identity {escape(identity_id)}.")


def reset(ctx: typer.Context) -> None:
    """Deactivate the session's identity.

    Exits with status 1 after clearing, so calling shells can tell the
    default git identity is back in effect.
    """
    manager = ctx.obj

    state = manager.reset()
    typer.echo(state.to_script())
    succeed("identity reset.")
    raise typer.Exit(1)


def help_command(ctx: typer.Context) -> None:
    """Show usage."""
    typer.echo(ctx.parent.get_help())
