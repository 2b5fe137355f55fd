"""
Abstract tool interface
"""

from abc import ABC, abstractmethod
from typing import Dict, Any, Tuple


class BaseTool(ABC):
    """Abstract base class for all augmentation tools"""

    # Substrings (lower-case) that select this tool
    keywords: Tuple[str, ...] = ()

    @property
    @abstractmethod
    def name(self) -> str:
        """Tool name on the tool server"""
        pass

    @property
    @abstractmethod
    def label(self) -> str:
        """Prefix of the system message carrying the result"""
        pass

    def matches(self, text: str) -> bool:
        """True if any keyword occurs in the lower-cased text"""
        lowered = text.lower()
        return any(keyword in lowered for keyword in self.keywords)

    @abstractmethod
    def build_arguments(self, text: str) -> Dict[str, Any]:
        """
        Build tool arguments from the user's message.

        Args:
            text: Content of the final user message

        Returns:
            Arguments dict for tools/call
        """
        pass

    @abstractmethod
    async def execute(self, **kwargs) -> str:
        """
        Execute the tool.

        Args:
            **kwargs: Tool arguments

        Returns:
            Tool result text
        """
        pass
