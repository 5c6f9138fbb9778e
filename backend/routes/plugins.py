"""Plugin listing and execution."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from models import ErrorResponse, ExecutionResult, ExpandRequest, PluginInfo
from models.graph import GraphContractError
from osint import PluginNotFoundError, PluginRegistry, ToolExecutionError
from .deps import get_registry

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Plugins"])


def _info(plugin) -> PluginInfo:
    return PluginInfo(
        name=plugin.name,
        description=plugin.description,
        version=plugin.version,
        author=plugin.author,
        accepted_types=sorted(plugin.accepted_types),
        cost=plugin.cost,
    )


@router.get("/plugins", response_model=list[PluginInfo])
async def list_plugins(
    type: Optional[str] = Query(default=None, min_length=1),
    registry: PluginRegistry = Depends(get_registry),
):
    """Plugins that accept `type`, in registration order (all when omitted)."""
    plugins = registry.plugins_for_type(type) if type else registry.all()
    return [_info(p) for p in plugins]


@router.post("/expand", response_model=ExecutionResult)
async def expand(body: ExpandRequest, registry: PluginRegistry = Depends(get_registry)):
    """
    Run a plugin on a node and return the new nodes/links.

    Nothing is persisted here; the caller merges the delta into its graph.
    """
    try:
        result = await registry.execute(body.plugin_name, body.node, body.api_keys)
    except PluginNotFoundError as e:
        raise HTTPException(status_code=404, detail=ErrorResponse(error=str(e)).model_dump())
    except ToolExecutionError as e:
        raise HTTPException(status_code=502, detail=ErrorResponse(error=str(e)).model_dump())

    try:
        result.check(body.node)
    except GraphContractError as e:
        logger.error("%s returned an unmergeable result: %s", body.plugin_name, e)
        raise HTTPException(status_code=500, detail=ErrorResponse(error=f"Invalid plugin result: {e}").model_dump())
    return result
