"""
Tool augmenter - appends at most one tool result to the conversation
"""

import logging
from typing import List, Dict, Any, Optional

from domain.agentic.tools.registry import ToolRegistry
from domain.agentic.tools.base import BaseTool
from core.exceptions import ToolExecutionError

logger = logging.getLogger(__name__)


class ToolAugmenter:
    """
    Keyword-triggered augmentation of the final user message.

    The last message is inspected only when its role is "user". The first
    registered tool whose keywords occur in it is called, and its result is
    appended as a system message. At most one tool runs per request.
    """

    def __init__(self, tool_registry: ToolRegistry):
        self.tool_registry = tool_registry
        self.logger = logger

    def select_tool(self, messages: List[Dict[str, Any]]) -> Optional[BaseTool]:
        """Tool chosen for this conversation, or None."""
        if not messages:
            return None
        last = messages[-1]
        content = last.get("content")
        if last.get("role") != "user" or not isinstance(content, str):
            return None
        return self.tool_registry.match_tool(content)

    async def augment(self, messages: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        """
        Return a new message list, augmented with one tool result when a tool matches.

        The input list is not modified.

        Raises:
            ToolExecutionError: If the selected tool fails
        """
        tool = self.select_tool(messages)
        if tool is None:
            return list(messages)

        content = messages[-1]["content"]
        tool_args = tool.build_arguments(content)
        self.logger.info(f"Calling tool {tool.name} with args {tool_args}")

        try:
            result_text = await self.tool_registry.execute_tool(tool.name, tool_args)
        except ToolExecutionError:
            raise
        except Exception as e:
            self.logger.error(f"Error calling tool {tool.name}: {e}")
            raise ToolExecutionError(f"Failed to execute tool {tool.name}: {e}")

        self.logger.info(f"Tool {tool.name} result: {result_text[:200]}...")
        return [
            *messages,
            {"role": "system", "content": f"{tool.label}: {result_text}"},
        ]
