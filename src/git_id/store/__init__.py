"""Repository-local key-value store for identities."""

from .gitconfig import IDENTITY_KEYS, GitConfigStore

__all__ = ["GitConfigStore", "IDENTITY_KEYS"]
