"""Shodan host lookup."""

import httpx

from ..errors import ProviderError
from ..http import get_json

NAME = "Shodan"
URL = "https://api.shodan.io/shodan/host/{ip}"

LIST_FIELDS = ("ports", "hostnames", "vulns")


def _items(value) -> list:
    # vulns comes back as a list or a CVE-keyed dict depending on plan
    if not value:
        return []
    if isinstance(value, (list, tuple, dict)):
        return list(value)
    return [value]


def flatten(host: dict) -> dict:
    """Comma-join the list fields so every value is a scalar."""
    return {
        k: ", ".join(str(v) for v in value) if k in LIST_FIELDS else value
        for k, value in host.items()
    }


async def lookup_host(client: httpx.AsyncClient, ip: str, key: str) -> dict:
    data = await get_json(client, NAME, URL.format(ip=ip), params={"key": key})
    if not isinstance(data, dict):
        raise ProviderError(NAME, "unexpected response format")

    return {
        "asn": data.get("asn"),
        "isp": data.get("isp"),
        "organization": data.get("org") or data.get("isp"),
        "country": data.get("country_name"),
        "city": data.get("city"),
        "lat": data.get("latitude"),
        "lon": data.get("longitude"),
        "os": data.get("os"),
        "ports": _items(data.get("ports")),
        "hostnames": _items(data.get("hostnames")),
        "vulns": _items(data.get("vulns")),
    }
