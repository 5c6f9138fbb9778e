"""Direct DNS resolution with dnspython."""

import dns.asyncresolver
import dns.exception
import dns.resolver

from ..errors import ProviderError

NAME = "DNS"

# "No such record" outcomes are answers, not failures
_NO_RECORDS = (dns.resolver.NXDOMAIN, dns.resolver.NoAnswer, dns.resolver.NoNameservers)


async def _resolve(domain: str, rdtype: str) -> list:
    try:
        answer = await dns.asyncresolver.resolve(domain, rdtype)
    except _NO_RECORDS:
        return []
    except dns.exception.DNSException as e:
        raise ProviderError(NAME, f"{rdtype} lookup failed: {type(e).__name__}")
    return list(answer)


async def resolve_a(domain: str) -> list[str]:
    return [r.address for r in await _resolve(domain, "A")]


async def resolve_mx(domain: str) -> list[tuple[str, int]]:
    """(exchange, priority) pairs."""
    return [
        (r.exchange.to_text(omit_final_dot=True), r.preference)
        for r in await _resolve(domain, "MX")
    ]


async def resolve_ns(domain: str) -> list[str]:
    return [r.target.to_text(omit_final_dot=True) for r in await _resolve(domain, "NS")]


async def resolve_txt(domain: str) -> list[str]:
    """Every character-string of every TXT record, flattened."""
    return [
        chunk.decode("utf-8", errors="replace")
        for r in await _resolve(domain, "TXT")
        for chunk in r.strings
    ]
