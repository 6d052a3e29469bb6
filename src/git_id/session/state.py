"""Session state: which identity is active in the current shell.

The state lives only in environment variables. A child process cannot
modify its parent's environment, so commands that change the state
render it as a shell script for the calling shell to ``eval``.
"""

import os
import shlex
from typing import TYPE_CHECKING, Dict, MutableMapping, Optional

from pydantic import BaseModel

if TYPE_CHECKING:
    from ..identities.models import Identity

GIT_ID = "GIT_ID"
GIT_AUTHOR_NAME = "GIT_AUTHOR_NAME"
GIT_AUTHOR_EMAIL = "GIT_AUTHOR_EMAIL"
GIT_COMMITTER_NAME = "GIT_COMMITTER_NAME"
GIT_COMMITTER_EMAIL = "GIT_COMMITTER_EMAIL"
GIT_SSH = "GIT_SSH"
GIT_ASKPASS = "GIT_ASKPASS"

SESSION_VARIABLES = (
    GIT_ID,
    GIT_AUTHOR_NAME,
    GIT_AUTHOR_EMAIL,
    GIT_COMMITTER_NAME,
    GIT_COMMITTER_EMAIL,
    GIT_SSH,
    GIT_ASKPASS,
)


class SessionState(BaseModel):
    """Active identity of a session and the hooks it enables."""

    active_id: Optional[str] = None
    author_name: Optional[str] = None
    author_email: Optional[str] = None
    ssh_helper: Optional[str] = None
    askpass_helper: Optional[str] = None

    @classmethod
    def from_environ(
        cls, environ: MutableMapping[str, str] | None = None
    ) -> "SessionState":
        """Read the session state from an environment (default: os.environ)."""
        env = os.environ if environ is None else environ
        return cls(
            active_id=env.get(GIT_ID) or None,
            author_name=env.get(GIT_AUTHOR_NAME) or None,
            author_email=env.get(GIT_AUTHOR_EMAIL) or None,
            ssh_helper=env.get(GIT_SSH) or None,
            askpass_helper=env.get(GIT_ASKPASS) or None,
        )

    @classmethod
    def cleared(cls) -> "SessionState":
        """State with no active identity."""
        return cls()

    @classmethod
    def activate(cls, identity: "Identity", helper_path: str) -> "SessionState":
        """State with ``identity`` active.

        The ssh hook is enabled when the identity has a key, the askpass
        hook when it has a token. Both point at ``helper_path``.
        """
        return cls(
            active_id=identity.id,
            author_name=identity.name,
            author_email=identity.email,
            ssh_helper=helper_path if identity.sshkey else None,
            askpass_helper=helper_path if identity.token else None,
        )

    def to_environ(self) -> Dict[str, Optional[str]]:
        """Map every session variable to its value, or None to unset it."""
        return {
            GIT_ID: self.active_id,
            GIT_AUTHOR_NAME: self.author_name,
            GIT_AUTHOR_EMAIL: self.author_email,
            GIT_COMMITTER_NAME: self.author_name,
            GIT_COMMITTER_EMAIL: self.author_email,
            GIT_SSH: self.ssh_helper,
            GIT_ASKPASS: self.askpass_helper,
        }

    def apply(self, environ: MutableMapping[str, str] | None = None) -> None:
        """Write the state into an environment (default: os.environ).

        Unsetting a variable that is not set is not an error.
        """
        env = os.environ if environ is None else environ
        for name, value in self.to_environ().items():
            if value is None:
                env.pop(name, None)
            else:
                env[name] = value

    def to_script(self) -> str:
        """Render the state as POSIX shell ``export``/``unset`` lines."""
        lines = []
        for name, value in self.to_environ().items():
            if value is None:
                lines.append(f"unset {name}")
            else:
                lines.append(f"export {name}={shlex.quote(value)}")
        return "\n".join(lines)
