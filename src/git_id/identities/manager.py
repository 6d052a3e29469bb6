"""Identity manager: the commands of git-id over the config store."""

import uuid
from typing import List, MutableMapping, Optional, Tuple

from ..audit import AuditLogger
from ..config.schema import GitIdConfig
from ..exceptions import NotFound, NotSet
from ..session.state import SessionState
from ..store import IDENTITY_KEYS, GitConfigStore
from .models import Credential, CredentialKind, Identity


class IdentityManager:
    """Manages stored identities and the session's active identity."""

    def __init__(
        self,
        config: GitIdConfig | None = None,
        store: GitConfigStore | None = None,
        audit_logger: AuditLogger | None = None,
    ):
        """Initialize identity manager.

        Args:
            config: git-id configuration (default: built-in defaults)
            store: Config store (default: local config of the cwd repository)
            audit_logger: Audit logger (default: one per manager, per config)
        """
        self.config = config or GitIdConfig()
        self.store = store or GitConfigStore(namespace=self.config.namespace)
        self.audit = audit_logger or AuditLogger(self.config.audit, uuid.uuid4().hex[:8])

    def ensure_reachable(self) -> None:
        """Fail with StoreUnreachable unless the store can be used."""
        self.store.ensure_reachable()

    def list_identities(self) -> List[str]:
        """List all identity ids, sorted."""
        return self.store.list_ids()

    def exists(self, identity_id: str) -> bool:
        """Check if an identity is defined."""
        return self.store.exists(identity_id)

    def get(self, identity_id: str) -> Identity:
        """Load an identity.

        Raises:
            NotFound: If the identity is not defined
        """
        if not self.exists(identity_id):
            raise NotFound(identity_id)

        fields = {key: self.store.get(identity_id, key) for key in IDENTITY_KEYS}
        if not fields["name"]:
            raise NotFound(identity_id)

        return Identity(
            id=identity_id,
            name=fields["name"],
            email=fields["email"] or "",
            sshkey=fields["sshkey"] or None,
            token=fields["token"] or None,
        )

    def add(self, identity_id: str, name: str, email: str, credential_spec: str) -> bool:
        """Create or update an identity.

        The credential is fully validated before anything is written.

        Args:
            identity_id: Identity id
            name: Author name
            email: Author email
            credential_spec: ``s:<path>`` or ``t:<token>``

        Returns:
            True if the identity was created, False if it was updated

        Raises:
            InvalidCredential: If the spec has an unknown prefix
            InvalidSshKey: If the key file does not look like a private key
        """
        credential = Credential.parse(credential_spec).validated(self.config.key_marker)
        created = not self.exists(identity_id)

        if credential.kind is CredentialKind.SSH_KEY:
            self.store.upsert(identity_id, name, email, sshkey=credential.value)
        else:
            self.store.upsert(identity_id, name, email, token=credential.value)

        self.audit.log_event(
            "identity_added",
            {
                "identity_id": identity_id,
                "created": created,
                "credential": credential.kind.name.lower(),
            },
        )
        return created

    def delete(self, identity_id: str) -> None:
        """Delete an identity.

        A session that has it active keeps its variables until reset.

        Raises:
            NotFound: If the identity doesn't exist
        """
        if not self.exists(identity_id):
            raise NotFound(identity_id)

        self.store.remove(identity_id)
        self.audit.log_event("identity_deleted", {"identity_id": identity_id})

    def current(self, environ: MutableMapping[str, str] | None = None) -> str:
        """Get the id of the session's active identity.

        Raises:
            NotSet: If no identity is active
        """
        active = SessionState.from_environ(environ).active_id
        if not active:
            raise NotSet()
        return active

    def use(
        self,
        identity_id: str,
        helper_path: str,
        environ: MutableMapping[str, str] | None = None,
    ) -> Tuple[Optional[str], SessionState]:
        """Build the session state that activates an identity.

        Args:
            identity_id: Identity to activate
            helper_path: Executable to export as the ssh/askpass hook
            environ: Current environment (default: os.environ)

        Returns:
            Previously active id (None if none), and the new session state

        Raises:
            NotFound: If the identity doesn't exist
        """
        identity = self.get(identity_id)
        previous = SessionState.from_environ(environ).active_id

        state = SessionState.activate(identity, helper_path)
        self.audit.log_event(
            "identity_used", {"identity_id": identity_id, "previous": previous}
        )
        return previous, state

    def reset(self) -> SessionState:
        """Build the session state with no active identity."""
        self.audit.log_event("session_reset", {})
        return SessionState.cleared()

    def active_identity(
        self, environ: MutableMapping[str, str] | None = None
    ) -> Optional[Identity]:
        """The active identity, or None when unset or no longer stored."""
        active = SessionState.from_environ(environ).active_id
        if not active:
            return None
        try:
            return self.get(active)
        except NotFound:
            return None


def get_identity_manager(config: GitIdConfig | None = None) -> IdentityManager:
    """Create an identity manager for the repository in the current directory.

    Returns:
        IdentityManager instance
    """
    return IdentityManager(config=config)
