"""Dispatch prompts to the session server that owns coworker sessions."""

from __future__ import annotations

import asyncio
from abc import ABC, abstractmethod
from typing import Any

import httpx
from loguru import logger

from coworkers.config.schema import SessionServiceConfig
from coworkers.errors import UpstreamError


class SessionService(ABC):
    """Boundary to the external service that creates and runs sessions."""

    @abstractmethod
    async def create_session(self, title: str) -> str | None:
        """Create a session and return its identifier, if the service gave one."""
        raise NotImplementedError

    @abstractmethod
    async def prompt(self, session_id: str, text: str, agent: str | None = None) -> None:
        """Queue a text prompt on a session without waiting for the reply."""
        raise NotImplementedError


class HttpSessionService(SessionService):
    """
    Session service reached over the session server's HTTP API.

    Endpoints used:
    - POST /session                    create a session, returns {"id": ...}
    - POST /session/{id}/prompt_async  queue a prompt, returns once accepted
    - GET  /path                       host paths, including the config dir
    """

    def __init__(
        self,
        config: SessionServiceConfig | None = None,
        client: httpx.AsyncClient | None = None,
    ):
        self.config = config or SessionServiceConfig()
        self._client = client or httpx.AsyncClient(
            base_url=self.config.base_url,
            timeout=self.config.timeout,
        )

    def _params(self) -> dict[str, str] | None:
        if self.config.directory:
            return {"directory": self.config.directory}
        return None

    async def create_session(self, title: str) -> str | None:
        response = await self._client.post("/session", json={"title": title}, params=self._params())
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            return None
        return data.get("id") or None

    async def prompt(self, session_id: str, text: str, agent: str | None = None) -> None:
        body: dict[str, Any] = {"parts": [{"type": "text", "text": text}]}
        if agent:
            body["agent"] = agent
        response = await self._client.post(
            f"/session/{session_id}/prompt_async",
            json=body,
            params=self._params(),
        )
        response.raise_for_status()

    async def get_config_dir(self) -> str | None:
        """Ask the server where the host keeps its configuration."""
        response = await self._client.get("/path", params=self._params())
        response.raise_for_status()
        data = response.json()
        if not isinstance(data, dict):
            return None
        return data.get("config") or None

    async def aclose(self) -> None:
        await self._client.aclose()


class Dispatcher:
    """Forward session requests and map failures to UpstreamError.

    Nothing is retried and no timeout is added here; a slow server is bounded
    only by the service's own client settings.
    """

    def __init__(self, service: SessionService):
        self.service = service

    async def create_session(self, title: str) -> str:
        try:
            session_id = await self.service.create_session(title)
        except Exception as e:
            logger.error(f"Session server rejected create for '{title}': {e}")
            raise UpstreamError(f"Failed to create session: {e}") from e
        if not session_id:
            logger.error(f"Session server returned no id for '{title}'")
            raise UpstreamError("Failed to create session")
        return session_id

    async def send_prompt(self, session_id: str, text: str, agent: str | None = None) -> None:
        try:
            await self.service.prompt(session_id, text, agent=agent)
        except Exception as e:
            logger.error(f"Failed to prompt session {session_id}: {e}")
            raise UpstreamError(f"Failed to send prompt to session {session_id}: {e}") from e
        logger.debug(f"Queued prompt on session {session_id} ({len(text)} chars)")

    def dispatch(self, session_id: str, text: str, agent: str | None = None) -> asyncio.Future[None]:
        """Send without blocking the caller.

        The returned future resolves when the server has accepted the prompt
        or fails with UpstreamError. Awaiting it is optional. Once sent the
        request cannot be cancelled: cancelling the future leaves the send
        running.
        """
        task = asyncio.ensure_future(self.send_prompt(session_id, text, agent=agent))
        outer = asyncio.shield(task)
        task.add_done_callback(_consume_failure)
        outer.add_done_callback(_consume_failure)
        return outer


def _consume_failure(task: asyncio.Future) -> None:
    # Already logged in send_prompt; keeps unawaited failures quiet.
    if not task.cancelled():
        task.exception()
