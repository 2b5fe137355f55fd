"""
Tool system for chat augmentation
"""

from domain.agentic.tools.base import BaseTool
from domain.agentic.tools.registry import ToolRegistry
from domain.agentic.tools.external_tools.mcp_tools import (
    MCPToolAdapter,
    WebSearchTool,
    CurrentTimeTool,
    CalculatorTool,
    TextAnalysisTool,
)

__all__ = [
    "BaseTool",
    "ToolRegistry",
    "MCPToolAdapter",
    "WebSearchTool",
    "CurrentTimeTool",
    "CalculatorTool",
    "TextAnalysisTool",
]
