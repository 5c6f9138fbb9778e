"""Hunter.io email verifier."""

import httpx

from ..errors import ProviderError
from ..http import get_json

NAME = "Hunter.io"
URL = "https://api.hunter.io/v2/email-verifier"


async def verify_email(client: httpx.AsyncClient, email: str, key: str) -> dict:
    """Raw verifier fields; callers decide how to render them."""
    body = await get_json(client, NAME, URL, params={"email": email, "api_key": key})
    data = body.get("data") if isinstance(body, dict) else None
    if not isinstance(data, dict):
        raise ProviderError(NAME, "response has no data section")

    return {
        "result": data.get("result") or data.get("status"),
        "score": data.get("score"),
        "gibberish": bool(data.get("gibberish")),
        "disposable": bool(data.get("disposable")),
        "webmail": bool(data.get("webmail")),
        "mx_records": bool(data.get("mx_records")),
    }
