"""Configuration loading for git-id."""

from .loader import fallback_config, load_config, save_config
from .schema import AuditConfig, GitIdConfig

__all__ = ["AuditConfig", "GitIdConfig", "fallback_config", "load_config", "save_config"]
