"""Coworker tools: create, list, message and remove named sessions."""

from __future__ import annotations

from typing import Any

from coworkers.agent.tools.base import Tool
from coworkers.errors import CoworkerError
from coworkers.registry.registry import CoworkerRegistry


class CreateCoworkerTool(Tool):
    """Tool to start a named coworker session.

    The calling session is recorded as the coworker's parent.
    """

    def __init__(self, registry: CoworkerRegistry):
        self._registry = registry
        self._session_id: str | None = None

    def set_context(self, session_id: str | None) -> None:
        self._session_id = session_id

    @property
    def name(self) -> str:
        return "create_coworker"

    @property
    def description(self) -> str:
        return "Create a new coworker session with a specific agent type and name"

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "User-friendly name for this coworker",
                },
                "agent_type": {
                    "type": "string",
                    "description": (
                        "Agent type to use (e.g., code, researcher). "
                        f"Defaults to '{self._registry.default_agent_type}'"
                    ),
                },
                "prompt": {
                    "type": "string",
                    "description": "Initial prompt/task for the coworker",
                },
            },
            "required": ["name", "prompt"],
        }

    async def execute(self, name: str, prompt: str, agent_type: str | None = None, **kwargs: Any) -> str:
        agent_type = agent_type or self._registry.default_agent_type
        try:
            session_id = await self._registry.create(
                name,
                prompt,
                agent_type=agent_type,
                caller_session_id=self._session_id,
            )
        except CoworkerError as e:
            return f"Error: {e}"
        return f'Created coworker "{name}" ({agent_type}) with session {session_id}'


class ListCoworkersTool(Tool):
    """Tool to list coworkers with their sessions and liveness."""

    def __init__(self, registry: CoworkerRegistry):
        self._registry = registry

    @property
    def name(self) -> str:
        return "list_coworkers"

    @property
    def description(self) -> str:
        return "List all coworkers and their session IDs"

    @property
    def parameters(self) -> dict[str, Any]:
        return {"type": "object", "properties": {}}

    async def execute(self, **kwargs: Any) -> str:
        entries = self._registry.list()
        if not entries:
            return "No coworkers found"
        return "\n".join(entry.format_line() for entry in entries)


class TellCoworkerTool(Tool):
    """Tool to queue a message on an existing coworker's session."""

    def __init__(self, registry: CoworkerRegistry):
        self._registry = registry

    @property
    def name(self) -> str:
        return "tell_coworker"

    @property
    def description(self) -> str:
        return "Queue a message to a coworker session to wake them up or give them work"

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Name of the coworker to message",
                },
                "message": {
                    "type": "string",
                    "description": "Message or task to send to the coworker",
                },
            },
            "required": ["name", "message"],
        }

    async def execute(self, name: str, message: str, **kwargs: Any) -> str:
        try:
            coworker = await self._registry.tell(name, message)
        except CoworkerError as e:
            return f"Error: {e}"
        return f'Queued message to "{coworker.name}" ({coworker.agent_type})'


class RemoveCoworkerTool(Tool):
    """Tool to delete a coworker from the registry."""

    def __init__(self, registry: CoworkerRegistry):
        self._registry = registry

    @property
    def name(self) -> str:
        return "remove_coworker"

    @property
    def description(self) -> str:
        return (
            "Remove a coworker permanently. "
            "IMPORTANT: Please verify with the user that they want to do this before proceeding."
        )

    @property
    def parameters(self) -> dict[str, Any]:
        return {
            "type": "object",
            "properties": {
                "name": {
                    "type": "string",
                    "description": "Name of the coworker to remove",
                },
            },
            "required": ["name"],
        }

    async def execute(self, name: str, **kwargs: Any) -> str:
        try:
            coworker = self._registry.remove(name)
        except CoworkerError as e:
            return f"Error: {e}"
        return f'Removed coworker "{coworker.name}" ({coworker.agent_type})'
