"""Identity records and credential specs."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, Field

from ..exceptions import InvalidCredential, InvalidSshKey


class CredentialKind(str, Enum):
    """The two kinds of credential an identity can carry."""

    SSH_KEY = "s"
    TOKEN = "t"


class Credential(BaseModel):
    """A credential parsed from an ``s:<path>`` or ``t:<value>`` spec."""

    kind: CredentialKind
    value: str

    @classmethod
    def parse(cls, spec: str) -> "Credential":
        """Classify a tagged credential spec by its prefix.

        Raises:
            InvalidCredential: If the prefix is neither ``s:`` nor ``t:``,
                or nothing follows it
        """
        prefix, sep, value = spec.partition(":")
        if not sep or prefix not in {kind.value for kind in CredentialKind}:
            raise InvalidCredential(spec)
        if not value:
            raise InvalidCredential(spec)
        return cls(kind=CredentialKind(prefix), value=value)

    def validated(self, key_marker: str = "PRIVATE KEY") -> "Credential":
        """Return the credential ready to store.

        Ssh key paths are checked and made absolute; tokens pass through.

        Raises:
            InvalidSshKey: If the key file is missing, unreadable, or its
                first line does not contain ``key_marker``
        """
        if self.kind is CredentialKind.TOKEN:
            return self

        path = Path(self.value).expanduser()
        try:
            with open(path, errors="replace") as f:
                first_line = f.readline()
        except OSError as e:
            raise InvalidSshKey(self.value, e.strerror) from e

        if key_marker not in first_line:
            raise InvalidSshKey(self.value)

        return Credential(kind=self.kind, value=str(path.absolute()))


class Identity(BaseModel):
    """A named author identity stored in the repository config."""

    id: str = Field(..., description="Key of the identity in the store")
    name: str = Field(..., description="Author and committer name")
    email: str = Field(default="", description="Author and committer email")
    sshkey: str | None = Field(default=None, description="Path to an ssh private key")
    token: str | None = Field(default=None, description="Access token for https remotes")
