"""Audit logger for identity changes and hook invocations."""

import json
import re
from datetime import datetime
from pathlib import Path
from typing import Any, Dict

from ..config.schema import AuditConfig

# Payload keys whose values are never written, whatever they contain
SECRET_KEYS = {"token", "password"}


class AuditLogger:
    """Logger for auditing identity operations."""

    def __init__(self, config: AuditConfig, session_id: str):
        """Initialize audit logger.

        The log directory is only created once something is written, so a
        disabled logger never touches the filesystem.

        Args:
            config: Audit configuration
            session_id: Identifier of this invocation
        """
        self.config = config
        self.session_id = session_id
        self.log_dir = Path(config.log_dir).expanduser()

        timestamp = datetime.now().strftime("%Y%m%d")
        self.log_file = self.log_dir / f"audit_{timestamp}.jsonl"

    def _redact_sensitive(self, data: Any) -> Any:
        """Redact sensitive information from data.

        Args:
            data: Data to redact

        Returns:
            Redacted data
        """
        if isinstance(data, dict):
            return {
                k: "***REDACTED***" if k in SECRET_KEYS else self._redact_sensitive(v)
                for k, v in data.items()
            }
        elif isinstance(data, list):
            return [self._redact_sensitive(item) for item in data]
        elif isinstance(data, str):
            redacted = data
            for pattern in self.config.redact_patterns:
                redacted = re.sub(pattern, "***REDACTED***", redacted, flags=re.IGNORECASE)
            return redacted
        else:
            return data

    def log_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """Log a generic event.

        Args:
            event_type: Type of event
            data: Event data
        """
        if not self.config.enabled:
            return

        log_entry = {
            "timestamp": datetime.now().isoformat(),
            "session_id": self.session_id,
            "event_type": event_type,
            **self._redact_sensitive(data),
        }

        self._write_log(log_entry)

    def _write_log(self, log_entry: Dict[str, Any]) -> None:
        """Write log entry to file.

        Args:
            log_entry: Log entry to write
        """
        self.log_dir.mkdir(parents=True, exist_ok=True)
        with open(self.log_file, "a") as f:
            f.write(json.dumps(log_entry) + "\n")
