"""Subdomain discovery from certificate transparency logs (crt.sh)."""

import httpx

from ..errors import ProviderError
from ..http import get_json

NAME = "crt.sh"
URL = "https://crt.sh/"

# Hard cap on returned names to bound graph growth
MAX_SUBDOMAINS = 50


def extract_subdomains(entries: list, domain: str) -> list[str]:
    """
    Unique certificate names from crt.sh entries, in first-seen order.

    `name_value` may hold several newline-separated SANs. The queried
    domain itself and wildcard names are dropped.
    """
    seen: dict[str, None] = {}
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        for name in str(entry.get("name_value") or "").split("\n"):
            name = name.strip()
            if not name or name == domain or "*" in name:
                continue
            seen.setdefault(name, None)
    return list(seen)


async def find_subdomains(client: httpx.AsyncClient, domain: str) -> tuple[list[str], int]:
    """Return (subdomains capped at MAX_SUBDOMAINS, total unique found)."""
    data = await get_json(client, NAME, URL, params={"q": f"%.{domain}", "output": "json"})
    if not isinstance(data, list):
        raise ProviderError(NAME, "unexpected response format")

    names = extract_subdomains(data, domain)
    return names[:MAX_SUBDOMAINS], len(names)
