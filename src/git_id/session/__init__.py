"""Per-session identity selection carried in environment variables."""

from .state import SESSION_VARIABLES, SessionState

__all__ = ["SESSION_VARIABLES", "SessionState"]
