"""Coworker registry: named, persistent handles to sessions."""

from __future__ import annotations

from loguru import logger

from coworkers.errors import CoworkerExistsError, CoworkerNotFoundError
from coworkers.registry.liveness import LivenessTracker
from coworkers.registry.models import Coworker, CoworkerStatus, normalize_name
from coworkers.registry.store import CoworkerStore
from coworkers.session.dispatcher import Dispatcher
from coworkers.utils.helpers import utcnow

DEFAULT_AGENT_TYPE = "general"


def identity_prompt(display_name: str, prompt: str) -> str:
    """Prefix a first prompt so the session knows the name it was given."""
    return f"IMPORTANT: your name is '{display_name}'. {prompt}"


class CoworkerRegistry:
    """
    Create, list, message and remove coworkers by name.

    Names are case-insensitive: every operation normalizes first. Records live
    in the store; which sessions were started by this process is tracked in
    memory only.

    ``create`` loads, checks and saves without a lock. Two concurrent creates
    of one name can both succeed and the later save replaces the earlier
    record (see ``CoworkerStore.atomic_insert``).
    """

    def __init__(
        self,
        store: CoworkerStore,
        dispatcher: Dispatcher,
        liveness: LivenessTracker | None = None,
        default_agent_type: str = DEFAULT_AGENT_TYPE,
    ):
        self.store = store
        self.dispatcher = dispatcher
        self.liveness = liveness or LivenessTracker()
        self.default_agent_type = default_agent_type

    async def create(
        self,
        name: str,
        prompt: str,
        agent_type: str | None = None,
        caller_session_id: str | None = None,
    ) -> str:
        """Start a session for a new coworker and return its session id.

        Raises:
            CoworkerExistsError: the normalized name is already registered.
            UpstreamError: the session server failed or gave no id.
        """
        key = normalize_name(name)
        agent_type = agent_type or self.default_agent_type

        existing = self.store.load_all().get(key)
        if existing:
            raise CoworkerExistsError(key, existing.session_id)

        session_id = await self.dispatcher.create_session(f"{name} ({agent_type})")
        await self.dispatcher.send_prompt(session_id, identity_prompt(name, prompt), agent=agent_type)

        coworker = Coworker(
            name=key,
            session_id=session_id,
            agent_type=agent_type,
            created_at=utcnow(),
            parent_id=caller_session_id,
        )
        self.store.upsert(key, coworker)
        self.liveness.register(session_id, key, caller_session_id)

        logger.info(f"Created coworker '{key}' ({agent_type}) with session {session_id}")
        return session_id

    def get(self, name: str) -> Coworker | None:
        return self.store.load_all().get(normalize_name(name))

    def list(self) -> list[CoworkerStatus]:
        """All coworkers with their in-process liveness, in store order."""
        return [
            CoworkerStatus(
                name=key,
                coworker=coworker,
                active=self.liveness.is_active(coworker.session_id),
            )
            for key, coworker in self.store.load_all().items()
        ]

    def remove(self, name: str) -> Coworker:
        """Forget a coworker. The session itself is left running on the server."""
        key = normalize_name(name)
        coworker = self.get(key)
        if coworker is None:
            raise CoworkerNotFoundError(key)

        self.store.delete(key)
        self.liveness.forget(coworker.session_id)

        logger.info(f"Removed coworker '{key}' (session {coworker.session_id})")
        return coworker

    async def tell(self, name: str, message: str) -> Coworker:
        """Queue ``message`` verbatim on the coworker's session."""
        key = normalize_name(name)
        coworker = self.get(key)
        if coworker is None:
            raise CoworkerNotFoundError(key)

        await self.dispatcher.send_prompt(coworker.session_id, message)
        return coworker
