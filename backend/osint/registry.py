"""Plugin registry and dispatcher."""

import logging
from typing import Iterable, Optional

import httpx

from models.graph import ExecutionResult, Node
from .errors import DuplicatePluginError, PluginNotFoundError
from .plugins import BUILTIN_PLUGINS
from .plugins.base import Credentials, OSINTPlugin

logger = logging.getLogger(__name__)


class PluginRegistry:
    """
    Ordered lookup table of plugins, keyed by unique name.

    Built once at startup and then treated as read-only. Registration order
    is the listing order callers see.
    """

    def __init__(self, plugins: Iterable[OSINTPlugin] = ()):
        self._plugins: dict[str, OSINTPlugin] = {}
        for plugin in plugins:
            self.register(plugin)

    def register(self, plugin: OSINTPlugin) -> None:
        if plugin.name in self._plugins:
            raise DuplicatePluginError(plugin.name)
        self._plugins[plugin.name] = plugin
        logger.info("Registered plugin: %s", plugin.name)

    def plugins_for_type(self, node_type: str) -> list[OSINTPlugin]:
        return [p for p in self._plugins.values() if p.accepts(node_type)]

    def get(self, name: str) -> OSINTPlugin:
        if name not in self:
            raise PluginNotFoundError(name)
        return self._plugins[name]

    def all(self) -> list[OSINTPlugin]:
        return list(self._plugins.values())

    def names(self) -> list[str]:
        return list(self._plugins)

    def __len__(self) -> int:
        return len(self._plugins)

    def __contains__(self, name: object) -> bool:
        return name in self._plugins

    async def execute(
        self,
        name: str,
        node: Node,
        config: Optional[Credentials] = None,
    ) -> ExecutionResult:
        """
        Run plugin `name` on `node` and return its result unchanged.

        Type eligibility is not checked here; callers pick plugins from
        plugins_for_type().
        """
        plugin = self.get(name)
        logger.info("Executing %s on node %s", plugin.name, node.id)
        return await plugin.execute(node, config)


def build_registry(client: Optional[httpx.AsyncClient] = None) -> PluginRegistry:
    """Registry holding one instance of every built-in plugin, in order."""
    return PluginRegistry(plugin_cls(client) for plugin_cls in BUILTIN_PLUGINS)
