"""Graph records exchanged between the enrichment core and the graph store."""

import json
import random
import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Iterable, Optional

from pydantic import BaseModel, Field, field_validator


class NodeType(str, Enum):
    """Entity types a user can put on the graph."""
    IP = "ip"
    DOMAIN = "domain"
    EMAIL = "email"
    PHONE = "phone"
    IDENTITY = "identity"
    CRYPTO = "crypto"
    COMPANY = "company"
    BANK = "bank"
    SERVER = "server"
    GENERIC_DATA = "generic-data"


class Cost(str, Enum):
    FREE = "free"
    PAID = "paid"


class GraphContractError(ValueError):
    """An ExecutionResult cannot be merged into the graph as-is."""


def new_id(prefix: str) -> str:
    return f"{prefix}_{uuid.uuid4().hex[:12]}"


class Node(BaseModel):
    """A graph vertex. `data` is opaque apart from the key a plugin needs."""
    id: str
    type: str
    data: dict[str, Any] = {}
    x: float = 0
    y: float = 0
    notes: str = ""
    date: Optional[datetime] = None

    @field_validator("data", mode="before")
    @classmethod
    def parse_data(cls, v: Any) -> Any:
        # Persisted nodes store data as a JSON object string
        if v is None or v == "":
            return {}
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except json.JSONDecodeError as e:
                raise ValueError(f"data is not valid JSON: {e}") from e
            if not isinstance(v, dict):
                raise ValueError("data must be a JSON object")
        return v

    def value(self, *keys: str) -> str | None:
        """First non-empty string among `keys` in data."""
        for key in keys:
            v = self.data.get(key)
            if v is None:
                continue
            v = str(v).strip()
            if v:
                return v
        return None


class Link(BaseModel):
    id: str = Field(default_factory=lambda: new_id("L"))
    source: str
    target: str


class ExecutionResult(BaseModel):
    """New satellite nodes and edges produced by a plugin run."""
    new_nodes: list[Node] = []
    new_links: list[Link] = []
    logs: list[str] = []

    def log(self, message: str) -> None:
        self.logs.append(message)

    def add_node(
        self,
        input_node: Node,
        type: str,
        data: dict[str, Any],
        prefix: str = "auto",
        dx: float | None = None,
        dy: float = 100,
    ) -> Node:
        """Add a node near `input_node` together with the link to it."""
        if dx is None:
            dx = random.uniform(-100, 100)
        node = Node(
            id=new_id(prefix),
            type=type,
            data=data,
            x=input_node.x + dx,
            y=input_node.y + dy + random.uniform(0, 20),
        )
        self.new_nodes.append(node)
        self.new_links.append(Link(source=input_node.id, target=node.id))
        return node

    def check(self, input_node: Node, existing_ids: Iterable[str] = ()) -> None:
        """Raise GraphContractError if this result cannot be merged safely."""
        if not self.logs:
            raise GraphContractError("result carries no log lines")

        taken = set(existing_ids) | {input_node.id}
        seen: set[str] = set()
        for node in self.new_nodes:
            if node.id in seen:
                raise GraphContractError(f"duplicate node id in result: {node.id}")
            if node.id in taken:
                raise GraphContractError(f"node id collides with graph: {node.id}")
            seen.add(node.id)

        known = seen | {input_node.id}
        link_ids: set[str] = set()
        for link in self.new_links:
            if link.source not in known or link.target not in known:
                raise GraphContractError(
                    f"link {link.id} references unknown node ({link.source} -> {link.target})"
                )
            if link.id in link_ids:
                raise GraphContractError(f"duplicate link id in result: {link.id}")
            link_ids.add(link.id)

        if len(self.new_links) != len(self.new_nodes):
            raise GraphContractError(
                f"{len(self.new_nodes)} new nodes but {len(self.new_links)} new links"
            )


class EnrichmentResult(BaseModel):
    """In-place patch for the enriched node's own data."""
    type: str
    enriched_data: dict[str, Any] = {}
    logs: list[str] = []

    def apply(self, node: Node) -> Node:
        """
        Shallow-merge enriched_data over node.data.

        For the graph store side, which owns persistence; the API only
        returns the patch.
        """
        return node.model_copy(update={"data": {**node.data, **self.enriched_data}})
