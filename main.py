"""Entry point for git-id CLI."""

from git_id.cli import cli_main


def main():
    """Launch the git-id CLI."""
    cli_main()


if __name__ == "__main__":
    main()
