"""
MCP tool wrappers (external) - tools executed on the tool server
"""

import logging
import re
from typing import Dict, Any
from domain.agentic.tools.base import BaseTool
from domain.agentic.mcp.client import MCPClient
from core.exceptions import ToolExecutionError

logger = logging.getLogger(__name__)

# Runs of characters allowed in a calculator expression
EXPRESSION_PATTERN = re.compile(r"[0-9+\-*/().\s]+")


class MCPToolAdapter(BaseTool):
    """Executes a tool on the tool server through an MCPClient"""

    tool_name: str = ""
    tool_label: str = ""

    def __init__(self, mcp_client: MCPClient):
        self.mcp_client = mcp_client

    @property
    def name(self) -> str:
        return self.tool_name

    @property
    def label(self) -> str:
        return self.tool_label

    async def execute(self, **kwargs) -> str:
        """
        Execute MCP tool via MCP client.

        Args:
            **kwargs: Tool arguments

        Returns:
            Tool result text

        Raises:
            ToolExecutionError: If tool execution fails or no tool server is configured
        """
        if not self.mcp_client.is_configured():
            error_msg = f"Tool server is not configured. Cannot execute tool {self.name}."
            logger.error(error_msg)
            raise ToolExecutionError(error_msg)

        try:
            result = await self.mcp_client.call_tool(self.name, kwargs)
            return self.mcp_client.convert_result_to_text(result)
        except ToolExecutionError:
            raise
        except Exception as e:
            logger.error(f"Error calling MCP tool {self.name}: {e}")
            raise ToolExecutionError(f"Failed to execute MCP tool {self.name}: {e}")


class WebSearchTool(MCPToolAdapter):
    tool_name = "Web Search"
    tool_label = "Web Search Results"
    keywords = ("search", "look up", "find", "latest", "news", "google")

    def __init__(self, mcp_client: MCPClient, max_results: int = 5):
        super().__init__(mcp_client)
        self.max_results = max_results

    def build_arguments(self, text: str) -> Dict[str, Any]:
        return {"query": text, "max_results": self.max_results}


class CurrentTimeTool(MCPToolAdapter):
    tool_name = "current_time"
    tool_label = "Current Time"
    keywords = ("what time", "current time", "time is it", "time now", "what date", "today's date", "what day")

    def __init__(self, mcp_client: MCPClient, timezone: str = "UTC"):
        super().__init__(mcp_client)
        self.timezone = timezone

    def build_arguments(self, text: str) -> Dict[str, Any]:
        return {"timezone": self.timezone}


class CalculatorTool(MCPToolAdapter):
    tool_name = "calculate"
    tool_label = "Calculation Result"
    keywords = ("calculate", "compute", "solve", "evaluate", "math")

    def build_arguments(self, text: str) -> Dict[str, Any]:
        return {"expression": extract_expression(text)}


class TextAnalysisTool(MCPToolAdapter):
    tool_name = "analyze_text"
    tool_label = "Text Analysis"
    keywords = ("analyze", "analyse", "analysis", "word count", "count words", "statistics")

    def build_arguments(self, text: str) -> Dict[str, Any]:
        return {"text": text}


def extract_expression(text: str) -> str:
    """
    Longest run of arithmetic characters that contains a digit.
    Falls back to the whole text when there is none.
    """
    candidates = [
        match.strip()
        for match in EXPRESSION_PATTERN.findall(text)
        if any(ch.isdigit() for ch in match)
    ]
    if not candidates:
        return text.strip()
    return max(candidates, key=len)
