"""Tests for the host plugin: wiring, /coworkers command and config hook."""

import httpx
import pytest

from coworkers.config.schema import CoworkersConfig, SessionServiceConfig
from coworkers.plugin import CoworkersPlugin, create_plugin, resolve_config_dir
from coworkers.session.dispatcher import HttpSessionService
from tests.conftest import FakeSessionService


class TestConfigHook:
    """Tests for CoworkersPlugin.configure."""

    def test_creates_missing_sections(self, registry):
        host_config = {}
        CoworkersPlugin(registry).configure(host_config)
        assert host_config == {
            "experimental": {
                "primary_tools": ["create_coworker", "list_coworkers", "tell_coworker", "remove_coworker"],
            },
        }

    def test_appends_to_existing_tools(self, registry):
        host_config = {"experimental": {"primary_tools": ["read_file", "list_coworkers"], "other": 1}}
        CoworkersPlugin(registry).configure(host_config)

        assert host_config["experimental"]["primary_tools"] == [
            "read_file",
            "list_coworkers",
            "create_coworker",
            "tell_coworker",
            "remove_coworker",
        ]
        assert host_config["experimental"]["other"] == 1


class TestCoworkersCommand:
    """Tests for the /coworkers command."""

    @pytest.mark.asyncio
    async def test_empty(self, registry):
        plugin = CoworkersPlugin(registry)
        assert await plugin.commands["coworkers"]["execute"]() == "No coworkers found"

    @pytest.mark.asyncio
    async def test_listing(self, registry):
        plugin = CoworkersPlugin(registry)
        await plugin.execute_tool(
            "create_coworker", {"name": "alice", "agent_type": "code", "prompt": "hi"}, session_id="ses_root"
        )

        assert await plugin.coworkers_command() == "**Coworkers:**\n• alice (code) → ses_0001 [active]"
        assert registry.get("alice").parent_id == "ses_root"

    @pytest.mark.asyncio
    async def test_caller_session_is_not_reused(self, registry):
        plugin = CoworkersPlugin(registry)
        await plugin.execute_tool("create_coworker", {"name": "a", "prompt": "hi"}, session_id="ses_A")
        await plugin.execute_tool("create_coworker", {"name": "b", "prompt": "hi"})

        assert registry.get("a").parent_id == "ses_A"
        assert registry.get("b").parent_id is None


class TestCreatePlugin:
    """Tests for create_plugin wiring."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("storage", ["json", "sqlite"])
    async def test_persists_across_restarts(self, tmp_path, storage):
        config = CoworkersConfig(storage=storage, data_dir=str(tmp_path), default_agent_type="code")

        plugin = await create_plugin(config, service=FakeSessionService())
        result = await plugin.execute_tool("create_coworker", {"name": "Alice", "prompt": "hi"})
        assert result == 'Created coworker "Alice" (code) with session ses_0001'

        restarted = await create_plugin(config, service=FakeSessionService())
        listing = await restarted.execute_tool("list_coworkers", {})
        assert listing == "alice (code) → ses_0001 [idle]"

    @pytest.mark.asyncio
    async def test_tools_registered(self, tmp_path):
        config = CoworkersConfig(data_dir=str(tmp_path))
        plugin = await create_plugin(config, service=FakeSessionService())
        assert plugin.tools.tool_names == list(CoworkersPlugin.TOOL_NAMES)


class TestResolveConfigDir:
    """Tests for choosing the storage directory."""

    @pytest.mark.asyncio
    async def test_configured_dir_wins(self, tmp_path):
        config = CoworkersConfig(data_dir=str(tmp_path))
        assert await resolve_config_dir(config, FakeSessionService()) == tmp_path

    @pytest.mark.asyncio
    async def test_asks_session_server(self, tmp_path):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/path"
            return httpx.Response(200, json={"config": str(tmp_path / "host")})

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://session.test")
        service = HttpSessionService(SessionServiceConfig(), client=client)

        assert await resolve_config_dir(CoworkersConfig(), service) == tmp_path / "host"

    @pytest.mark.asyncio
    async def test_falls_back_to_data_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr("coworkers.plugin.get_data_dir", lambda: tmp_path / "data")

        def handler(request: httpx.Request) -> httpx.Response:
            return httpx.Response(503)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler), base_url="http://session.test")
        service = HttpSessionService(SessionServiceConfig(), client=client)

        assert await resolve_config_dir(CoworkersConfig(), service) == tmp_path / "data"
