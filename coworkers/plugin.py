"""Host plugin: registers coworker tools, the /coworkers command and config hook."""

from __future__ import annotations

from pathlib import Path
from typing import Any

from loguru import logger

from coworkers.agent.tools.coworkers import (
    CreateCoworkerTool,
    ListCoworkersTool,
    RemoveCoworkerTool,
    TellCoworkerTool,
)
from coworkers.agent.tools.registry import ToolRegistry
from coworkers.config.loader import get_data_dir, load_config
from coworkers.config.schema import CoworkersConfig
from coworkers.registry.registry import CoworkerRegistry
from coworkers.registry.store import create_store
from coworkers.session.dispatcher import Dispatcher, HttpSessionService, SessionService


class CoworkersPlugin:
    """Everything the host runtime needs from this package.

    ``tools`` holds the four coworker tools, ``commands`` maps command names to
    handlers, and ``configure`` is the host's config hook.
    """

    TOOL_NAMES = ("create_coworker", "list_coworkers", "tell_coworker", "remove_coworker")

    def __init__(self, registry: CoworkerRegistry, service: SessionService | None = None):
        self.registry = registry
        self._service = service
        self._create_tool = CreateCoworkerTool(registry)

        self.tools = ToolRegistry()
        self.tools.register(self._create_tool)
        self.tools.register(ListCoworkersTool(registry))
        self.tools.register(TellCoworkerTool(registry))
        self.tools.register(RemoveCoworkerTool(registry))

    @property
    def commands(self) -> dict[str, dict[str, Any]]:
        return {
            "coworkers": {
                "description": "List all coworkers",
                "execute": self.coworkers_command,
            },
        }

    def set_context(self, session_id: str | None) -> None:
        """Set the session the next tool call comes from (None for no caller)."""
        self._create_tool.set_context(session_id)

    async def execute_tool(
        self, name: str, params: dict[str, Any], session_id: str | None = None
    ) -> str:
        self.set_context(session_id)
        return await self.tools.execute(name, params)

    async def coworkers_command(self) -> str:
        """Render the /coworkers listing."""
        entries = self.registry.list()
        if not entries:
            return "No coworkers found"
        lines = [f"• {entry.format_line()}" for entry in entries]
        return "**Coworkers:**\n" + "\n".join(lines)

    def configure(self, host_config: dict[str, Any]) -> None:
        """Add the coworker tools to the host's primary tool list."""
        experimental = host_config.get("experimental")
        if experimental is None:
            experimental = host_config["experimental"] = {}
        primary_tools = experimental.get("primary_tools")
        if primary_tools is None:
            primary_tools = experimental["primary_tools"] = []
        for tool_name in self.TOOL_NAMES:
            if tool_name not in primary_tools:
                primary_tools.append(tool_name)

    async def aclose(self) -> None:
        if isinstance(self._service, HttpSessionService):
            await self._service.aclose()


async def resolve_config_dir(config: CoworkersConfig, service: SessionService) -> Path:
    """Pick the directory that holds coworker storage.

    Order: configured ``data_dir``, the host config dir reported by the session
    server, then the local data dir.
    """
    if config.data_dir:
        return Path(config.data_dir).expanduser()

    if isinstance(service, HttpSessionService):
        try:
            host_dir = await service.get_config_dir()
        except Exception as e:
            logger.warning(f"Could not ask session server for its config dir: {e}")
        else:
            if host_dir:
                return Path(host_dir)

    return get_data_dir()


async def create_plugin(
    config: CoworkersConfig | None = None,
    service: SessionService | None = None,
) -> CoworkersPlugin:
    """Build the plugin with its store, dispatcher and registry."""
    config = config or load_config()
    service = service or HttpSessionService(config.session)

    config_dir = await resolve_config_dir(config, service)
    store = create_store(config.storage, config_dir)
    logger.info(f"Coworkers stored in {config_dir} ({config.storage})")

    registry = CoworkerRegistry(
        store=store,
        dispatcher=Dispatcher(service),
        default_agent_type=config.default_agent_type,
    )
    return CoworkersPlugin(registry, service=service)
