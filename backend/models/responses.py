from pydantic import BaseModel
from typing import Optional
from datetime import datetime

from .graph import Cost, EnrichmentResult


class EnrichResponse(BaseModel):
    success: bool
    result: Optional[EnrichmentResult] = None


class PluginInfo(BaseModel):
    name: str
    description: str
    version: str
    author: str
    accepted_types: list[str]
    cost: Cost

    class Config:
        use_enum_values = True


class ErrorResponse(BaseModel):
    success: bool = False
    error: str


class HealthResponse(BaseModel):
    status: str
    version: str
    plugins: int
    timestamp: datetime
