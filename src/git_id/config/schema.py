"""Configuration schema for git-id."""

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings


class AuditConfig(BaseModel):
    """Audit logging configuration."""

    enabled: bool = Field(
        default=False,
        description="Write an audit trail of identity changes and hook calls",
    )
    log_dir: str = Field(
        default="~/.local/git-id/logs", description="Directory for audit logs"
    )
    redact_patterns: list[str] = Field(
        default_factory=lambda: [
            r"gh[pousr]_[A-Za-z0-9]{20,}",
            r"glpat-[A-Za-z0-9_\-]{20,}",
            r"-----BEGIN.*PRIVATE KEY-----",
        ],
        description="Patterns to redact from logs",
    )


class GitIdConfig(BaseSettings):
    """Main git-id configuration."""

    namespace: str = Field(
        default="identity", description="Config section holding the identities"
    )
    ssh_program: str = Field(
        default="ssh", description="ssh client invoked by the transport hook"
    )
    key_marker: str = Field(
        default="PRIVATE KEY",
        description="Text the first line of an ssh key file must contain",
    )
    helper_path: str | None = Field(
        default=None,
        description="Executable exported as GIT_SSH/GIT_ASKPASS (defaults to git-id itself)",
    )
    audit: AuditConfig = Field(default_factory=AuditConfig)

    class Config:
        env_prefix = "GITID_"
        env_nested_delimiter = "__"
