"""
Multi-source enrichment pipelines.

Each pipeline patches the enriched node's own data: it seeds a record with
a timestamp, runs its provider steps in a fixed order and merges every
successful answer into the record (later steps win on shared fields). A
failed or unconfigured provider never stops the steps after it.
"""

import logging
from datetime import datetime, timezone
from typing import Awaitable, Callable, Mapping, Optional

import httpx

from models.graph import EnrichmentResult
from models.responses import EnrichResponse
from .errors import error_message
from .http import http_client
from .plugins.base import OSINTPlugin
from .providers import abuseipdb, crtsh, dns_records, hunter, ipapi, numverify, rdap, shodan, virustotal

logger = logging.getLogger(__name__)

Credentials = Mapping[str, str]

_credential = OSINTPlugin.credential


def _now() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


class _Steps:
    """Log sink shared by the steps of one pipeline run."""

    def __init__(self, name: str):
        self.name = name
        self.logs: list[str] = []

    def log(self, message: str, level: int = logging.INFO) -> None:
        logger.log(level, "[%s] %s", self.name, message)
        self.logs.append(message)

    def failed(self, provider: str, error: Exception) -> None:
        self.log(f"{provider} request failed: {error_message(error)}", logging.WARNING)

    def skipped(self, provider: str) -> None:
        self.log(f"Skipping {provider}: No API Key provided.", logging.DEBUG)


async def ip_lookup(
    ip: str,
    credentials: Optional[Credentials] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> EnrichmentResult | None:
    """Shodan, AbuseIPDB, IP-API (only if still no country), VirusTotal."""
    steps = _Steps("ip")
    try:
        enriched: dict = {"last_update": _now()}

        async with http_client(client) as c:
            # 1. Shodan
            key = _credential(credentials, "shodan")
            if key:
                steps.log(f"Querying Shodan for {ip}...")
                try:
                    enriched.update(shodan.flatten(await shodan.lookup_host(c, ip, key)))
                except Exception as e:
                    steps.failed("Shodan", e)
            else:
                steps.skipped("Shodan")

            # 2. AbuseIPDB
            key = _credential(credentials, "abuseipdb")
            if key:
                steps.log(f"Querying AbuseIPDB for {ip}...")
                try:
                    report = await abuseipdb.check_ip(c, ip, key)
                    enriched.update({
                        "risk_score": f"{report['abuse_confidence']}%",
                        "total_reports": report["total_reports"],
                        "last_report": report["last_report"],
                        "usage_type": report["usage_type"],
                        "domain_assoc": report["domain_assoc"],
                    })
                except Exception as e:
                    steps.failed("AbuseIPDB", e)
            else:
                steps.skipped("AbuseIPDB")

            # 3. Free geolocation, only to fill a missing country
            if not enriched.get("country"):
                steps.log(f"Using public API fallback for {ip}...")
                try:
                    enriched.update(await ipapi.geolocate(c, ip))
                except Exception as e:
                    steps.failed("IP-API", e)

            # 4. VirusTotal
            key = _credential(credentials, "virustotal")
            if key:
                steps.log(f"Querying VirusTotal for {ip}...")
                try:
                    vt = await virustotal.lookup(c, ip, "ip", key)
                    enriched.update({
                        "vt_reputation": vt["reputation"],
                        "vt_malicious": vt["malicious"],
                        "vt_suspicious": vt["suspicious"],
                        "vt_harmless": vt["harmless"],
                        "vt_last_analysis": vt["last_analysis"],
                    })
                except Exception as e:
                    steps.failed("VirusTotal", e)
            else:
                steps.skipped("VirusTotal")

        return EnrichmentResult(type="ip_info", enriched_data=enriched, logs=steps.logs)
    except Exception:
        logger.exception("IP lookup error for %s", ip)
        return None


async def _records(steps: _Steps, rdtype: str, resolve: Callable[[str], Awaitable[list]], domain: str) -> list:
    try:
        return await resolve(domain)
    except Exception as e:
        steps.failed(f"DNS {rdtype}", e)
        return []


async def dns_lookup(
    domain: str,
    credentials: Optional[Credentials] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> EnrichmentResult | None:
    """DNS records, RDAP registration data and crt.sh subdomains."""
    steps = _Steps("domain")
    try:
        steps.log(f"Querying DNS for {domain}...")
        enriched: dict = {"domain": domain, "last_update": _now()}

        # Empty answers leave their field unset
        ips = await _records(steps, "A", dns_records.resolve_a, domain)
        if ips:
            enriched["ips"] = ", ".join(ips)

        mx = await _records(steps, "MX", dns_records.resolve_mx, domain)
        if mx:
            enriched["mx_records"] = ", ".join(f"{host} ({prio})" for host, prio in mx)

        ns = await _records(steps, "NS", dns_records.resolve_ns, domain)
        if ns:
            enriched["nameservers"] = ", ".join(ns)

        txt = await _records(steps, "TXT", dns_records.resolve_txt, domain)
        if txt:
            enriched["txt_records"] = " | ".join(txt)

        async with http_client(client) as c:
            steps.log(f"Querying RDAP for {domain}...")
            try:
                enriched.update(await rdap.lookup_domain(c, domain))
            except Exception as e:
                steps.failed("RDAP", e)

            steps.log(f"Querying crt.sh for {domain}...")
            try:
                subdomains, total = await crtsh.find_subdomains(c, domain)
                if subdomains:
                    enriched["subdomains"] = ", ".join(subdomains)
                    enriched["subdomain_count"] = len(subdomains)
                steps.log(f"crt.sh returned {total} unique subdomains.")
            except Exception as e:
                steps.failed("crt.sh", e)

        return EnrichmentResult(type="dns_info", enriched_data=enriched, logs=steps.logs)
    except Exception:
        logger.exception("DNS lookup error for %s", domain)
        return None


async def email_lookup(
    email: str,
    credentials: Optional[Credentials] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> EnrichmentResult | None:
    """Address split plus Hunter.io verification."""
    steps = _Steps("email")
    try:
        steps.log(f"Enriching email: {email}...")
        user, _, domain = email.partition("@")

        enriched: dict = {
            "email": email,
            "user": user,
            "domain": domain,
            "status": "Pending Analysis",
            "last_update": _now(),
        }

        key = _credential(credentials, "hunter")
        if key:
            steps.log(f"Querying Hunter.io for {email}...")
            try:
                async with http_client(client) as c:
                    check = await hunter.verify_email(c, email, key)
                enriched.update({
                    "status": "Valid" if check["result"] == "deliverable" else check["result"],
                    "score": f"{check['score']}%",
                    "provider": "Unknown/Gibberish" if check["gibberish"] else "Standard",
                    "disposable": "Yes" if check["disposable"] else "No",
                    "webmail": "Yes" if check["webmail"] else "No",
                    "mx_records": "Found" if check["mx_records"] else "Missing",
                })
            except Exception as e:
                steps.failed("Hunter.io", e)
                enriched["status"] = "API Error"
        else:
            steps.skipped("Hunter.io")
            enriched["status"] = "No API Key Provided"

        return EnrichmentResult(type="email_info", enriched_data=enriched, logs=steps.logs)
    except Exception:
        logger.exception("Email lookup error for %s", email)
        return None


async def phone_lookup(
    phone: str,
    credentials: Optional[Credentials] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> EnrichmentResult | None:
    """
    Local best-effort fields, then Numverify.

    `valid` is always one of "Unknown" (not checked or check failed),
    "Yes" or "No/Invalid".
    """
    steps = _Steps("phone")
    try:
        steps.log(f"Enriching phone: {phone}...")
        enriched: dict = {
            "phone": phone,
            "last_update": _now(),
            # Rough guess, refined by the provider when available
            "country_code": phone[:4] if phone.startswith("+") else "?",
            "carrier": "Unknown (API Limit/Error)",
            "line_type": "Unknown",
            "valid": "Unknown",
        }

        key = _credential(credentials, "numverify")
        if key:
            steps.log(f"Querying Numverify for {phone}...")
            try:
                async with http_client(client) as c:
                    data = await numverify.validate_number(c, phone, key)
            except Exception as e:
                steps.failed("Numverify", e)
                code = getattr(e, "code", None)
                enriched["carrier"] = f"API Error: {code}" if code else "Request Failed"
            else:
                if data.get("valid"):
                    enriched.update({
                        "country_code": data.get("country_prefix"),
                        "country": data.get("country_name"),
                        "location": data.get("location"),
                        "carrier": data.get("carrier"),
                        "line_type": data.get("line_type"),
                        "valid": "Yes",
                    })
                else:
                    steps.log("Numverify returned invalid number.")
                    enriched["valid"] = "No/Invalid"
        else:
            steps.skipped("Numverify")
            enriched["carrier"] = "No API Key"

        return EnrichmentResult(type="phone_info", enriched_data=enriched, logs=steps.logs)
    except Exception:
        logger.exception("Phone lookup error for %s", phone)
        return None


PIPELINES = {
    "ip": ip_lookup,
    "domain": dns_lookup,
    "email": email_lookup,
    "phone": phone_lookup,
}


async def enrich(
    type: str,
    value: str,
    credentials: Optional[Credentials] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> EnrichResponse:
    """Run the pipeline for `type`; unsupported types yield success=False."""
    pipeline = PIPELINES.get(type)
    if pipeline is None:
        logger.info("No enrichment pipeline for type %s", type)
        return EnrichResponse(success=False)

    logger.info("Enrichment request for type: %s, value: %s", type, value)
    result = await pipeline(value, credentials, client)
    return EnrichResponse(success=result is not None, result=result)
