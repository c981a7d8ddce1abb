"""Shared fixtures: an in-memory store and a scripted session service."""

import itertools

import pytest

from coworkers.registry.models import Coworker, normalize_name
from coworkers.registry.registry import CoworkerRegistry
from coworkers.registry.store import CoworkerStore
from coworkers.session.dispatcher import Dispatcher, SessionService


class FakeSessionService(SessionService):
    """Session service that hands out sequential ids and records prompts."""

    def __init__(self):
        self.titles: list[str] = []
        self.prompts: list[tuple[str, str, str | None]] = []
        self.fail_create = False
        self.no_session_id = False
        self.fail_prompt = False
        self._ids = itertools.count(1)

    async def create_session(self, title: str) -> str | None:
        if self.fail_create:
            raise RuntimeError("server unavailable")
        self.titles.append(title)
        if self.no_session_id:
            return None
        return f"ses_{next(self._ids):04d}"

    async def prompt(self, session_id: str, text: str, agent: str | None = None) -> None:
        if self.fail_prompt:
            raise RuntimeError("prompt rejected")
        self.prompts.append((session_id, text, agent))


class MemoryCoworkerStore(CoworkerStore):
    """Store kept in a dict, for testing registry logic without disk."""

    def __init__(self):
        self.rows: dict[str, Coworker] = {}

    def initialize(self) -> "MemoryCoworkerStore":
        return self

    def load_all(self) -> dict[str, Coworker]:
        return {normalize_name(k): v for k, v in self.rows.items()}

    def upsert(self, name: str, coworker: Coworker) -> None:
        self.rows[normalize_name(name)] = coworker

    def delete(self, name: str) -> None:
        self.rows.pop(normalize_name(name), None)


@pytest.fixture
def service():
    """Create a scripted session service."""
    return FakeSessionService()


@pytest.fixture
def memory_store():
    """Create an empty in-memory store."""
    return MemoryCoworkerStore()


@pytest.fixture
def registry(memory_store, service):
    """Create a registry over the in-memory store and fake service."""
    return CoworkerRegistry(store=memory_store, dispatcher=Dispatcher(service))
