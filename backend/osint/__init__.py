"""Enrichment core: plugins, registry, pipelines and the process worker."""

from .errors import (
    OSINTError,
    PluginNotFoundError,
    DuplicatePluginError,
    ProviderError,
    ToolExecutionError,
)
from .plugins import OSINTPlugin, BUILTIN_PLUGINS
from .registry import PluginRegistry, build_registry
from .pipelines import enrich, ip_lookup, dns_lookup, email_lookup, phone_lookup
from .worker import ProcessWorker, WorkerResult

__all__ = [
    "OSINTError",
    "PluginNotFoundError",
    "DuplicatePluginError",
    "ProviderError",
    "ToolExecutionError",
    "OSINTPlugin",
    "BUILTIN_PLUGINS",
    "PluginRegistry",
    "build_registry",
    "enrich",
    "ip_lookup",
    "dns_lookup",
    "email_lookup",
    "phone_lookup",
    "ProcessWorker",
    "WorkerResult",
]
