"""
Tool registry - ordered registry of augmentation tools
Registration order is the classification priority
"""

import logging
from typing import List, Dict, Any, Optional
from domain.agentic.tools.base import BaseTool
from domain.agentic.tools.external_tools.mcp_tools import (
    WebSearchTool,
    CurrentTimeTool,
    CalculatorTool,
    TextAnalysisTool,
)
from domain.agentic.mcp.client import MCPClient
from core.exceptions import ToolExecutionError

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Central tool registry. Tools are matched in registration order."""

    def __init__(self):
        self._tools: Dict[str, BaseTool] = {}
        self.logger = logger

    def register_tool(self, tool: BaseTool):
        """Register a tool (appended at the lowest priority)"""
        if tool.name in self._tools:
            self.logger.warning(f"Overwriting registered tool {tool.name}.")
        self._tools[tool.name] = tool
        self.logger.info(f"Registered tool: {tool.name}")

    def register_external_tools(
        self,
        mcp_client: MCPClient,
        web_search_max_results: int = 5,
        timezone: str = "UTC",
    ):
        """Register the tool server tools in fixed priority order: search, time, arithmetic, analysis."""
        for tool in (
            WebSearchTool(mcp_client, max_results=web_search_max_results),
            CurrentTimeTool(mcp_client, timezone=timezone),
            CalculatorTool(mcp_client),
            TextAnalysisTool(mcp_client),
        ):
            self.register_tool(tool)

    def get_all_tools(self) -> List[BaseTool]:
        """Get all registered tools in priority order"""
        return list(self._tools.values())

    def match_tool(self, text: str) -> Optional[BaseTool]:
        """First tool (in priority order) whose keywords occur in text, or None."""
        for tool in self._tools.values():
            if tool.matches(text):
                return tool
        return None

    async def execute_tool(self, tool_name: str, tool_args: Dict[str, Any]) -> str:
        """Execute a tool by name."""
        tool = self._tools.get(tool_name)
        if not tool:
            raise ToolExecutionError(f"Tool {tool_name} not found")

        return await tool.execute(**tool_args)
