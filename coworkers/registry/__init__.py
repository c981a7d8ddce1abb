"""Coworker registry: records, storage, liveness and orchestration."""

from coworkers.registry.liveness import LivenessTracker
from coworkers.registry.models import Coworker, CoworkerStatus, normalize_name
from coworkers.registry.registry import CoworkerRegistry
from coworkers.registry.store import (
    CoworkerStore,
    JsonCoworkerStore,
    SqliteCoworkerStore,
    create_store,
)

__all__ = [
    "Coworker",
    "CoworkerRegistry",
    "CoworkerStatus",
    "CoworkerStore",
    "JsonCoworkerStore",
    "LivenessTracker",
    "SqliteCoworkerStore",
    "create_store",
    "normalize_name",
]
