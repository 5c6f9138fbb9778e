"""RDAP registration data via rdap.org."""

import httpx

from ..errors import ProviderError
from ..http import get_json

NAME = "RDAP"
URL = "https://rdap.org/domain/{domain}"


def registrar_name(data: dict) -> str:
    """`fn` property of the first entity's vCard, or "Unknown"."""
    try:
        vcard = data["entities"][0]["vcardArray"][1]
    except (KeyError, IndexError, TypeError):
        return "Unknown"

    for prop in vcard:
        if isinstance(prop, list) and len(prop) > 3 and prop[0] == "fn":
            return str(prop[3])
    return "Unknown"


def _event(events: list, action: str) -> str | None:
    for event in events:
        if isinstance(event, dict) and event.get("eventAction") == action:
            return event.get("eventDate")
    return None


async def lookup_domain(client: httpx.AsyncClient, domain: str) -> dict:
    data = await get_json(client, NAME, URL.format(domain=domain), follow_redirects=True)
    if not isinstance(data, dict):
        raise ProviderError(NAME, "unexpected response format")

    result = {"registrar": registrar_name(data)}

    events = data.get("events")
    if not isinstance(events, list):
        events = []
    creation = _event(events, "registration")
    expiry = _event(events, "expiration")
    if creation:
        result["creation_date"] = creation
    if expiry:
        result["expiry_date"] = expiry

    status = data.get("status")
    if isinstance(status, str):
        status = [status]
    if status and isinstance(status, list):
        result["status"] = ", ".join(str(s) for s in status)
    return result
