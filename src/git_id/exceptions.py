"""
Custom exceptions for git-id.

Commands catch GitIdError at their boundary and report the message
to the user; nothing below the CLI layer prints.
"""


class GitIdError(Exception):
    """Base exception for all git-id errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class StoreUnreachable(GitIdError):
    """Raised when no repository-local config store is accessible."""

    def __init__(self, reason: str | None = None):
        message = "not inside a git repository"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, {"reason": reason} if reason else {})


class StoreError(GitIdError):
    """Raised when git config fails for an unexpected reason."""

    def __init__(self, command: list[str], returncode: int, stderr: str = ""):
        stderr = stderr.strip()
        message = f"git config failed with status {returncode}"
        if stderr:
            message = f"{message}: {stderr}"
        super().__init__(message, {"command": command, "returncode": returncode})
        self.returncode = returncode


class NotFound(GitIdError):
    """Raised when an identity (or one of its fields) does not exist."""

    def __init__(self, identity_id: str, key: str | None = None):
        if key is None:
            message = f"{identity_id} is not defined"
        else:
            message = f"{identity_id} has no {key}"
        super().__init__(message, {"identity_id": identity_id, "key": key})
        self.identity_id = identity_id
        self.key = key


class NotSet(GitIdError):
    """Raised when no identity is active in the current session."""

    def __init__(self):
        super().__init__("no identity is currently in use")


class InvalidCredential(GitIdError):
    """Raised when a credential spec has neither an s: nor a t: prefix."""

    def __init__(self, spec: str):
        super().__init__(
            "invalid credential type (should be s: or t:)", {"spec_prefix": spec[:2]}
        )


class InvalidSshKey(GitIdError):
    """Raised when a file does not look like an ssh private key."""

    def __init__(self, path: str, reason: str | None = None):
        message = f"{path} is not a valid ssh private key"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message, {"path": path})
        self.path = path


class ConfigError(GitIdError):
    """Raised when a config file or GITID_ variable cannot be used."""

    def __init__(self, source: str, problems: list[str]):
        super().__init__(f"invalid config in {source}: {'; '.join(problems)}", {"source": source})
        self.source = source
        self.problems = problems
