"""VirusTotal v3 reputation for addresses and domains."""

from datetime import datetime, timezone

import httpx

from ..errors import ProviderError
from ..http import get_json

NAME = "VirusTotal"
BASE_URL = "https://www.virustotal.com/api/v3"

ENDPOINTS = {
    "ip": "ip_addresses",
    "domain": "domains",
}


def epoch_to_iso(value) -> str | None:
    if value in (None, ""):
        return None
    try:
        return datetime.fromtimestamp(int(value), tz=timezone.utc).isoformat().replace("+00:00", "Z")
    except (TypeError, ValueError, OverflowError, OSError):
        return None


async def lookup(client: httpx.AsyncClient, value: str, kind: str, key: str) -> dict:
    """`kind` is "ip" or "domain"."""
    endpoint = ENDPOINTS.get(kind)
    if endpoint is None:
        raise ProviderError(NAME, f"unsupported lookup type: {kind}")

    body = await get_json(client, NAME, f"{BASE_URL}/{endpoint}/{value}", headers={"x-apikey": key})
    data = body.get("data") if isinstance(body, dict) else None
    attr = data.get("attributes") if isinstance(data, dict) else None
    if not isinstance(attr, dict):
        raise ProviderError(NAME, "response has no attributes")

    stats = attr.get("last_analysis_stats")
    if not isinstance(stats, dict):
        stats = {}
    return {
        "reputation": attr.get("reputation"),
        "malicious": stats.get("malicious"),
        "suspicious": stats.get("suspicious"),
        "harmless": stats.get("harmless"),
        "last_analysis": epoch_to_iso(attr.get("last_analysis_date")),
        "whois": "Yes (Cached)" if attr.get("whois") else "No",
    }
