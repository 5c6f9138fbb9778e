"""Numverify (apilayer) phone validation."""

import httpx

from ..errors import ProviderError
from ..http import get_json

NAME = "Numverify"
URL = "http://apilayer.net/api/validate"


async def validate_number(client: httpx.AsyncClient, phone: str, key: str) -> dict:
    """
    Return the provider payload.

    Numverify answers HTTP 200 even for bad keys; `success: false` is
    raised as ProviderError carrying the error type. An invalid number is
    a normal answer with `valid: false`.
    """
    data = await get_json(client, NAME, URL, params={"access_key": key, "number": phone, "format": 1})
    if not isinstance(data, dict):
        raise ProviderError(NAME, "unexpected response format")
    if data.get("success") is False:
        error = data.get("error") or {}
        if not isinstance(error, dict):
            error = {"info": str(error)}
        code = str(error.get("type") or "unknown_error")
        raise ProviderError(NAME, error.get("info") or code, code=code)
    return data
