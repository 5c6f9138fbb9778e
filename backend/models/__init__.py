from .requests import EnrichRequest, ExpandRequest
from .responses import EnrichResponse, PluginInfo, ErrorResponse, HealthResponse
from .graph import Node, Link, NodeType, Cost, ExecutionResult, EnrichmentResult

__all__ = [
    "EnrichRequest", "ExpandRequest",
    "EnrichResponse", "PluginInfo", "ErrorResponse", "HealthResponse",
    "Node", "Link", "NodeType", "Cost", "ExecutionResult", "EnrichmentResult",
]
