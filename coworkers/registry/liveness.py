"""In-process record of which coworker sessions were started by this process."""

from __future__ import annotations


class LivenessTracker:
    """Best-effort liveness and provenance for coworker sessions.

    Entries are added when a coworker is created and dropped when it is
    removed. Nothing is persisted: after a restart every coworker reads as
    idle until it is created again, whatever the session server thinks.
    """

    def __init__(self) -> None:
        self._names: dict[str, str] = {}  # session_id -> name
        self._parents: dict[str, str | None] = {}  # session_id -> parent session_id

    def register(self, session_id: str, name: str, parent_id: str | None = None) -> None:
        self._names[session_id] = name
        self._parents[session_id] = parent_id

    def forget(self, session_id: str) -> None:
        self._names.pop(session_id, None)
        self._parents.pop(session_id, None)

    def is_active(self, session_id: str) -> bool:
        return session_id in self._names

    def name_of(self, session_id: str) -> str | None:
        return self._names.get(session_id)

    def parent_of(self, session_id: str) -> str | None:
        return self._parents.get(session_id)

    def __len__(self) -> int:
        return len(self._names)
