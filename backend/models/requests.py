from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .graph import Node, NodeType


class EnrichRequest(BaseModel):
    node_id: Optional[str] = None
    type: NodeType
    search_value: str = Field(..., min_length=1)
    api_keys: dict[str, str] = {}

    @field_validator('type', 'search_value', mode='before')
    @classmethod
    def strip(cls, v):
        # Before min_length, so whitespace-only input is rejected
        return v.strip() if isinstance(v, str) else v

    class Config:
        use_enum_values = True


class ExpandRequest(BaseModel):
    plugin_name: str = Field(..., min_length=1)
    node: Node
    api_keys: dict[str, str] = {}
