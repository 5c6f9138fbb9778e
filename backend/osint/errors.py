"""Exceptions raised by the enrichment core."""


class OSINTError(Exception):
    """Base class for enrichment errors."""


class PluginNotFoundError(OSINTError, LookupError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Plugin not found: {name}")


class DuplicatePluginError(OSINTError, ValueError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Plugin already registered: {name}")


class ProviderError(OSINTError):
    """A single provider call failed; callers log it and move on."""

    def __init__(self, provider: str, message: str, code: str | None = None):
        self.provider = provider
        self.message = message
        # Error type reported by the provider itself, if any
        self.code = code
        super().__init__(f"{provider}: {message}")


class ToolExecutionError(OSINTError):
    """External tool produced nothing usable."""


def error_message(error: Exception) -> str:
    """Log line text for a failure caught at a step boundary."""
    if isinstance(error, ProviderError):
        return error.message
    return f"{type(error).__name__}: {error}"
