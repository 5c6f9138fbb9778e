"""Base class for enrichment plugins."""

from abc import ABC, abstractmethod
from typing import Mapping, Optional

import httpx

from models.graph import Cost, ExecutionResult, Node

Credentials = Mapping[str, str]


class OSINTPlugin(ABC):
    """
    Base interface for all plugins.

    Each plugin:
    - Declares the node types it accepts (pure set membership, checked by callers)
    - Reads the one identifying value it needs from node.data
    - Returns new satellite nodes + links, never patching the input node
    - Handles its own errors, reporting them in the result logs
    """

    name: str = "Base Plugin"
    description: str = "Base OSINT plugin"
    version: str = "1.0"
    author: str = "Nexus Team"
    accepted_types: frozenset[str] = frozenset()
    cost: Cost = Cost.FREE

    def __init__(self, client: Optional[httpx.AsyncClient] = None):
        self.client = client

    def accepts(self, node_type: str) -> bool:
        return node_type in self.accepted_types

    @staticmethod
    def credential(config: Optional[Credentials], provider: str) -> str | None:
        """Key for `provider`, treating blank strings as absent."""
        if not config:
            return None
        key = config.get(provider)
        if key is None:
            return None
        key = str(key).strip()
        return key or None

    @abstractmethod
    async def execute(
        self,
        node: Node,
        config: Optional[Credentials] = None,
    ) -> ExecutionResult:
        """
        Run the plugin against `node`.

        Args:
            node: Input graph node
            config: Provider name -> API key

        Returns:
            ExecutionResult with at least one log line
        """
        pass
