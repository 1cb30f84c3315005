"""Agent records displayed by the dashboard."""

from dataclasses import dataclass
from typing import Any, Mapping, Optional

PLACEHOLDER = "-"

REQUIRED_FIELDS = ("id", "hostname", "ip", "status")
OPTIONAL_FIELDS = ("os", "last_seen", "location", "note")

# Column order of the agents table
COLUMNS = ("id", "hostname", "ip", "os", "status", "last_seen", "location", "note")


@dataclass(frozen=True)
class AgentRecord:
    """Immutable snapshot of one remote agent.

    ``id``, ``hostname``, ``ip`` and ``status`` are always present. The other
    fields may be ``None`` and are shown as a placeholder.
    """
    id: str
    hostname: str
    ip: str
    status: str
    os: Optional[str] = None
    last_seen: Optional[str] = None
    location: Optional[str] = None
    note: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> Optional["AgentRecord"]:
        """Build a record from a mapping, or return None if a required value is missing."""
        values = {}
        for name in REQUIRED_FIELDS:
            value = row[name]
            if value is None:
                return None
            values[name] = str(value)
        for name in OPTIONAL_FIELDS:
            value = row[name]
            values[name] = None if value is None else str(value)
        return cls(**values)

    def display(self, name: str) -> str:
        """Return a field as text, substituting the placeholder when absent."""
        value = getattr(self, name)
        if value is None:
            return PLACEHOLDER
        return value
