"""AbuseIPDB reputation check."""

import httpx

from ..errors import ProviderError
from ..http import get_json

NAME = "AbuseIPDB"
URL = "https://api.abuseipdb.com/api/v2/check"
MAX_AGE_DAYS = 90


async def check_ip(client: httpx.AsyncClient, ip: str, key: str) -> dict:
    body = await get_json(
        client,
        NAME,
        URL,
        params={"ipAddress": ip, "maxAgeInDays": MAX_AGE_DAYS},
        headers={"Key": key, "Accept": "application/json"},
    )
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, dict):
        raise ProviderError(NAME, "response has no data section")

    return {
        "abuse_confidence": data.get("abuseConfidenceScore"),
        "total_reports": data.get("totalReports"),
        "last_report": data.get("lastReportedAt"),
        "usage_type": data.get("usageType"),
        "domain_assoc": data.get("domain"),
    }
