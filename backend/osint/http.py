"""Shared HTTP plumbing for provider calls."""

from contextlib import asynccontextmanager
from typing import Any, AsyncIterator

import httpx

from config import settings
from .errors import ProviderError


@asynccontextmanager
async def http_client(client: httpx.AsyncClient | None = None) -> AsyncIterator[httpx.AsyncClient]:
    """
    Yield `client` untouched when the caller owns one, otherwise a
    short-lived client with the configured timeout that is closed on exit.
    """
    if client is not None:
        yield client
        return

    async with httpx.AsyncClient(
        timeout=httpx.Timeout(settings.HTTP_TIMEOUT_SECONDS),
        headers={"User-Agent": settings.USER_AGENT},
    ) as owned:
        yield owned


def _error_detail(resp: httpx.Response) -> str:
    """Best-effort error message from a provider error body."""
    try:
        body = resp.json()
    except ValueError:
        return f"HTTP {resp.status_code}"

    if isinstance(body, dict):
        err = body.get("error") or body.get("errors") or body.get("message")
        if isinstance(err, dict):
            err = err.get("message") or err.get("info") or err.get("type")
        elif isinstance(err, list) and err:
            first = err[0]
            err = first.get("detail") if isinstance(first, dict) else first
        if err:
            return f"HTTP {resp.status_code}: {err}"
    return f"HTTP {resp.status_code}"


async def get_json(client: httpx.AsyncClient, provider: str, url: str, **kwargs: Any) -> Any:
    """GET `url` and decode JSON, raising ProviderError on any failure."""
    try:
        resp = await client.get(url, **kwargs)
    except httpx.TimeoutException:
        raise ProviderError(provider, "request timed out")
    # InvalidURL is not an HTTPError; node values end up in the URL
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise ProviderError(provider, f"{type(e).__name__}: {e}")

    if resp.status_code >= 400:
        raise ProviderError(provider, _error_detail(resp))

    try:
        return resp.json()
    except ValueError:
        raise ProviderError(provider, "malformed JSON response")
