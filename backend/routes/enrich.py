"""In-place enrichment of a node's own data."""

from fastapi import APIRouter

from models import EnrichRequest, EnrichResponse
from osint import enrich as run_pipeline

router = APIRouter(tags=["Enrich"])


@router.post("/enrich", response_model=EnrichResponse)
async def enrich(body: EnrichRequest):
    """
    Run the aggregation pipeline for the node type.

    The caller merges `result.enriched_data` into the node and persists it.
    Unsupported types return `success: false` without a result.
    """
    return await run_pipeline(body.type, body.search_value, body.api_keys)
