"""Identity records kept in a repository's local git config.

Each identity is a subsection of the configured namespace:

    [identity "john"]
        name = John Doe
        email = john@example.com
        sshkey = /home/john/.ssh/id_ed25519

All reads and writes go through ``git config --local`` so the store
inherits git's own escaping and per-key atomicity. No multi-key
transaction exists: a failure part way through ``upsert`` leaves the
fields written so far in place.
"""

import os
import re
import subprocess
from pathlib import Path
from typing import List, Optional

from ..exceptions import NotFound, StoreError, StoreUnreachable

IDENTITY_KEYS = ("name", "email", "sshkey", "token")

# git config exits with 1 when the requested key is missing
_MISSING_KEY = 1


class GitConfigStore:
    """Reads and writes identity sections with the git command line."""

    def __init__(
        self,
        namespace: str = "identity",
        cwd: Path | None = None,
        git_program: str = "git",
    ):
        """Initialize the store.

        Args:
            namespace: Config section holding the identities
            cwd: Directory inside the repository (default: process cwd)
            git_program: git executable to run
        """
        self.namespace = namespace
        self.cwd = cwd
        self.git_program = git_program

    def _run(self, *args: str) -> subprocess.CompletedProcess:
        # Untranslated messages: remove() matches on git's stderr
        cmd = [self.git_program, *args]
        try:
            return subprocess.run(
                cmd,
                cwd=self.cwd,
                env={**os.environ, "LC_ALL": "C"},
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError as e:
            raise StoreUnreachable(f"{self.git_program} not found") from e

    def _config(self, *args: str) -> subprocess.CompletedProcess:
        return self._run("config", "--local", *args)

    def _key(self, identity_id: str, key: str) -> str:
        return f"{self.namespace}.{identity_id}.{key}"

    def _section(self, identity_id: str) -> str:
        return f"{self.namespace}.{identity_id}"

    def ensure_reachable(self) -> None:
        """Check that a repository with a readable local config is available.

        Raises:
            StoreUnreachable: If the working directory is not inside a repository
        """
        result = self._run("rev-parse", "--git-dir")
        if result.returncode != 0:
            reason = result.stderr.strip().splitlines()
            raise StoreUnreachable(reason[0] if reason else None)

        result = self._config("--list")
        if result.returncode != 0:
            raise StoreUnreachable(result.stderr.strip() or "local config unreadable")

    def lookup(self, identity_id: str, key: str) -> str:
        """Read one field of an identity.

        Raises:
            NotFound: If the section or key does not exist
            StoreError: If git fails for another reason
        """
        cmd = ["--get", self._key(identity_id, key)]
        result = self._config(*cmd)
        if result.returncode == _MISSING_KEY:
            raise NotFound(identity_id, key)
        if result.returncode != 0:
            raise StoreError(cmd, result.returncode, result.stderr)
        return result.stdout.rstrip("\n")

    def get(self, identity_id: str, key: str) -> Optional[str]:
        """Read one field, returning None when it is absent."""
        try:
            return self.lookup(identity_id, key)
        except NotFound:
            return None

    def exists(self, identity_id: str) -> bool:
        """An identity exists when it has a non-empty name."""
        return bool(self.get(identity_id, "name"))

    def _set(self, identity_id: str, key: str, value: str) -> None:
        cmd = [self._key(identity_id, key), value]
        result = self._config(*cmd)
        if result.returncode != 0:
            raise StoreError(cmd, result.returncode, result.stderr)

    def upsert(
        self,
        identity_id: str,
        name: str,
        email: str,
        sshkey: str | None = None,
        token: str | None = None,
    ) -> None:
        """Create or update an identity.

        ``name`` and ``email`` are always written; ``sshkey`` and ``token``
        only when given. A field that is not given keeps its old value.
        """
        self._set(identity_id, "name", name)
        self._set(identity_id, "email", email)
        if sshkey is not None:
            self._set(identity_id, "sshkey", sshkey)
        if token is not None:
            self._set(identity_id, "token", token)

    def remove(self, identity_id: str) -> None:
        """Delete an identity's whole section.

        Raises:
            NotFound: If the section does not exist
        """
        cmd = ["--remove-section", self._section(identity_id)]
        result = self._config(*cmd)
        if result.returncode != 0:
            if "no such section" in result.stderr.lower():
                raise NotFound(identity_id)
            raise StoreError(cmd, result.returncode, result.stderr)

    def list_ids(self) -> List[str]:
        """List identity ids in the store, sorted and de-duplicated."""
        pattern = f"^{re.escape(self.namespace.lower())}\\."
        cmd = ["--name-only", "--get-regexp", pattern]
        result = self._config(*cmd)
        if result.returncode == _MISSING_KEY:
            return []
        if result.returncode != 0:
            raise StoreError(cmd, result.returncode, result.stderr)

        prefix = f"{self.namespace.lower()}."
        ids = set()
        for line in result.stdout.splitlines():
            if not line.lower().startswith(prefix):
                continue
            subsection, _, _key = line[len(prefix):].rpartition(".")
            if subsection:
                ids.add(subsection)
        return sorted(ids)
