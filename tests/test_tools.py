"""Tests for the coworker tools and the tool registry."""

import pytest

from coworkers.agent.tools.coworkers import (
    CreateCoworkerTool,
    ListCoworkersTool,
    RemoveCoworkerTool,
    TellCoworkerTool,
)
from coworkers.agent.tools.registry import ToolRegistry


@pytest.fixture
def tools(registry):
    """Register all four coworker tools."""
    tool_registry = ToolRegistry()
    for tool_cls in (CreateCoworkerTool, ListCoworkersTool, TellCoworkerTool, RemoveCoworkerTool):
        tool_registry.register(tool_cls(registry))
    return tool_registry


class TestCoworkerTools:
    """End-to-end tool results."""

    @pytest.mark.asyncio
    async def test_researcher_scenario(self, tools):
        result = await tools.execute(
            "create_coworker",
            {"name": "Researcher", "agent_type": "researcher", "prompt": "Investigate X"},
        )
        assert "Researcher" in result
        assert "ses_0001" in result

        listing = await tools.execute("list_coworkers", {})
        assert "researcher (researcher) → ses_0001 [active]" in listing

    @pytest.mark.asyncio
    async def test_create_default_agent_type(self, tools):
        result = await tools.execute("create_coworker", {"name": "alice", "prompt": "hi"})
        assert result == 'Created coworker "alice" (general) with session ses_0001'

    @pytest.mark.asyncio
    async def test_create_duplicate(self, tools):
        await tools.execute("create_coworker", {"name": "Bob", "prompt": "hi"})
        result = await tools.execute("create_coworker", {"name": "BOB", "prompt": "hi"})
        assert result == 'Error: Coworker "bob" already exists with session ses_0001'

    @pytest.mark.asyncio
    async def test_create_upstream_failure(self, tools, service):
        service.no_session_id = True
        result = await tools.execute("create_coworker", {"name": "alice", "prompt": "hi"})
        assert result == "Error: Failed to create session"

    @pytest.mark.asyncio
    async def test_create_records_calling_session(self, registry):
        tool = CreateCoworkerTool(registry)
        tool.set_context("ses_root")
        await tool.execute(name="alice", prompt="hi")
        assert registry.get("alice").parent_id == "ses_root"

    @pytest.mark.asyncio
    async def test_list_empty(self, tools):
        assert await tools.execute("list_coworkers", {}) == "No coworkers found"

    @pytest.mark.asyncio
    async def test_tell(self, tools, service):
        await tools.execute("create_coworker", {"name": "alice", "agent_type": "code", "prompt": "hi"})
        result = await tools.execute("tell_coworker", {"name": "Alice", "message": "status?"})

        assert result == 'Queued message to "alice" (code)'
        assert service.prompts[-1] == ("ses_0001", "status?", None)

    @pytest.mark.asyncio
    async def test_tell_unknown(self, tools, service):
        result = await tools.execute("tell_coworker", {"name": "Ghost", "message": "hi"})
        assert result == (
            'Error: Coworker "ghost" not found. Use list_coworkers to see available coworkers.'
        )
        assert service.prompts == []

    @pytest.mark.asyncio
    async def test_remove(self, tools):
        await tools.execute("create_coworker", {"name": "alice", "agent_type": "code", "prompt": "hi"})
        result = await tools.execute("remove_coworker", {"name": "alice"})

        assert result == 'Removed coworker "alice" (code)'
        assert await tools.execute("list_coworkers", {}) == "No coworkers found"

    @pytest.mark.asyncio
    async def test_remove_unknown(self, tools):
        result = await tools.execute("remove_coworker", {"name": "alice"})
        assert result.startswith('Error: Coworker "alice" not found')


class TestToolRegistry:
    """Tests for ToolRegistry dispatch and validation."""

    @pytest.mark.asyncio
    async def test_unknown_tool(self, tools):
        assert await tools.execute("spawn", {}) == "Error: Tool 'spawn' not found"

    @pytest.mark.asyncio
    async def test_missing_required_param(self, tools):
        result = await tools.execute("create_coworker", {"name": "alice"})
        assert result == "Error: Invalid parameters for tool 'create_coworker': missing required prompt"

    @pytest.mark.asyncio
    async def test_wrong_param_type(self, tools):
        result = await tools.execute("tell_coworker", {"name": "alice", "message": 42})
        assert "message should be string" in result

    def test_definitions(self, tools):
        names = [d["function"]["name"] for d in tools.get_definitions()]
        assert names == ["create_coworker", "list_coworkers", "tell_coworker", "remove_coworker"]
        assert tools.tool_names == names
        assert len(tools) == 4
        assert "tell_coworker" in tools

    def test_unregister(self, tools):
        tools.unregister("remove_coworker")
        assert not tools.has("remove_coworker")
        assert tools.get("remove_coworker") is None
