"""ip-api.com free geolocation."""

import httpx

from ..errors import ProviderError
from ..http import get_json

NAME = "IP-API"
URL = "http://ip-api.com/json/{ip}"


async def geolocate(client: httpx.AsyncClient, ip: str) -> dict:
    data = await get_json(client, NAME, URL.format(ip=ip))
    if not isinstance(data, dict):
        raise ProviderError(NAME, "unexpected response format")
    if data.get("status") == "fail":
        raise ProviderError(NAME, data.get("message") or "lookup failed")

    return {
        "isp": data.get("isp"),
        "organization": data.get("org") or data.get("isp"),
        "country": data.get("country"),
        "city": data.get("city"),
        "lat": data.get("lat"),
        "lon": data.get("lon"),
        "timezone": data.get("timezone"),
        "asn": data.get("as"),
    }
