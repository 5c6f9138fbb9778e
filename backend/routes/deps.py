from fastapi import Request

from osint import PluginRegistry


def get_registry(request: Request) -> PluginRegistry:
    return request.app.state.registry
