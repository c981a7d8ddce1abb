"""Coworker tools for the host runtime."""

from coworkers.agent.tools.base import Tool
from coworkers.agent.tools.coworkers import (
    CreateCoworkerTool,
    ListCoworkersTool,
    RemoveCoworkerTool,
    TellCoworkerTool,
)
from coworkers.agent.tools.registry import ToolRegistry

__all__ = [
    "CreateCoworkerTool",
    "ListCoworkersTool",
    "RemoveCoworkerTool",
    "TellCoworkerTool",
    "Tool",
    "ToolRegistry",
]
