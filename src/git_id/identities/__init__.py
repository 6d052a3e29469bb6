"""Identity management on top of the repository config store."""

from .manager import IdentityManager, get_identity_manager
from .models import Credential, CredentialKind, Identity

__all__ = [
    "Credential",
    "CredentialKind",
    "Identity",
    "IdentityManager",
    "get_identity_manager",
]
