"""Coworker records and name normalization."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any

from coworkers.utils.helpers import parse_timestamp


def normalize_name(display_name: str) -> str:
    """Fold a display name to its registry key.

    Only letter case is folded; whitespace and every other character are kept,
    so any string is a valid key.
    """
    return display_name.lower()


@dataclass(frozen=True)
class Coworker:
    """A named handle to a session owned by the session service."""

    name: str
    session_id: str
    agent_type: str
    created_at: datetime
    parent_id: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted shape (keyed externally by name)."""
        data: dict[str, Any] = {
            "session_id": self.session_id,
            "agent_type": self.agent_type,
            "created_at": self.created_at.isoformat(),
        }
        if self.parent_id:
            data["parent_id"] = self.parent_id
        return data

    @classmethod
    def from_dict(cls, name: str, data: dict[str, Any]) -> Coworker:
        """Create a record from its persisted shape, re-normalizing the key.

        Raises:
            KeyError: a required field is missing.
            TypeError: a field has the wrong type.
            ValueError: ``created_at`` is not an ISO-8601 timestamp.
        """
        for field_name in ("session_id", "agent_type", "created_at"):
            if not isinstance(data[field_name], str):
                raise TypeError(f"{field_name} must be a string, got {type(data[field_name]).__name__}")
        parent_id = data.get("parent_id")
        if parent_id is not None and not isinstance(parent_id, str):
            raise TypeError(f"parent_id must be a string, got {type(parent_id).__name__}")

        return cls(
            name=normalize_name(name),
            session_id=data["session_id"],
            agent_type=data["agent_type"],
            created_at=parse_timestamp(data["created_at"]),
            parent_id=parent_id or None,
        )


@dataclass(frozen=True)
class CoworkerStatus:
    """A coworker paired with its in-process liveness."""

    name: str
    coworker: Coworker
    active: bool = False

    @property
    def status(self) -> str:
        return "active" if self.active else "idle"

    def format_line(self) -> str:
        return f"{self.name} ({self.coworker.agent_type}) → {self.coworker.session_id} [{self.status}]"
