import httpx
import pytest

from osint import pipelines
from osint.providers import abuseipdb, dns_records

ABUSE_REPORT = {
    "data": {
        "abuseConfidenceScore": 37,
        "totalReports": 5,
        "lastReportedAt": "2024-01-01",
        "usageType": "Data Center",
        "domain": "example.net",
    }
}

SHODAN_HOST = {
    "asn": "AS15169",
    "isp": "Google LLC",
    "org": "Google",
    "country_name": "United States",
    "city": "Mountain View",
    "latitude": 37.4,
    "longitude": -122.1,
    "os": None,
    "ports": [53, 443],
    "hostnames": ["dns.google"],
    "vulns": ["CVE-2021-0001"],
}

VT_REPORT = {
    "data": {
        "attributes": {
            "reputation": -3,
            "last_analysis_stats": {"malicious": 2, "suspicious": 1, "harmless": 60},
            "last_analysis_date": 1704067200,
        }
    }
}

IP_API = {
    "status": "success",
    "country": "Canada",
    "city": "Toronto",
    "isp": "Example ISP",
    "org": "",
    "lat": 43.7,
    "lon": -79.4,
    "timezone": "America/Toronto",
    "as": "AS0 Example",
}


@pytest.fixture(autouse=True)
def _no_real_dns(offline_dns):
    pass


# ---------------------------------------------------------------- zero keys

@pytest.mark.parametrize("lookup, value", [
    (pipelines.ip_lookup, "8.8.8.8"),
    (pipelines.dns_lookup, "example.com"),
    (pipelines.email_lookup, "bob@example.com"),
    (pipelines.phone_lookup, "+34600111222"),
])
async def test_no_keys_still_returns_seeded_record(providers, lookup, value):
    result = await lookup(value, {}, providers.client())

    assert result is not None
    assert "last_update" in result.enriched_data
    assert result.logs


async def test_phone_without_key_has_default_sentinels(providers):
    result = await pipelines.phone_lookup("+34600111222", None, providers.client())

    assert result.enriched_data["country_code"] == "+346"
    assert result.enriched_data["carrier"] == "No API Key"
    assert result.enriched_data["line_type"] == "Unknown"
    assert result.enriched_data["valid"] == "Unknown"
    assert providers.requests == []


async def test_phone_without_plus_gets_unknown_country_code(providers):
    result = await pipelines.phone_lookup("600111222", None, providers.client())
    assert result.enriched_data["country_code"] == "?"


async def test_blank_key_counts_as_missing(providers):
    result = await pipelines.email_lookup("bob@example.com", {"hunter": "  "}, providers.client())
    assert result.enriched_data["status"] == "No API Key Provided"
    assert providers.requests == []


# ---------------------------------------------------------------- ip

async def test_ip_with_only_abuseipdb_key(providers):
    providers.route("api.abuseipdb.com", ABUSE_REPORT)

    result = await pipelines.ip_lookup("8.8.8.8", {"abuseipdb": "k"}, providers.client())

    data = result.enriched_data
    assert result.type == "ip_info"
    assert data["risk_score"] == "37%"
    assert data["total_reports"] == 5
    assert data["last_report"] == "2024-01-01"
    assert data["usage_type"] == "Data Center"
    assert data["domain_assoc"] == "example.net"
    assert "asn" not in data
    assert "isp" not in data
    # free fallback was tried and failed (503) without affecting the result
    assert "ip-api.com" in providers.hosts
    assert any("IP-API" in line for line in result.logs)


async def test_ip_abuseipdb_sends_key_header(providers):
    providers.route("api.abuseipdb.com", ABUSE_REPORT)
    await pipelines.ip_lookup("8.8.8.8", {"abuseipdb": "secret"}, providers.client())

    request = next(r for r in providers.requests if r.url.host == "api.abuseipdb.com")
    assert request.headers["Key"] == "secret"
    assert request.url.params["ipAddress"] == "8.8.8.8"
    assert request.url.params["maxAgeInDays"] == "90"


async def test_ip_shodan_fields_are_flattened_and_skip_fallback(providers):
    providers.route("api.shodan.io", SHODAN_HOST)

    result = await pipelines.ip_lookup("8.8.8.8", {"shodan": "k"}, providers.client())

    data = result.enriched_data
    assert data["ports"] == "53, 443"
    assert data["hostnames"] == "dns.google"
    assert data["vulns"] == "CVE-2021-0001"
    assert data["organization"] == "Google"
    assert data["country"] == "United States"
    assert "ip-api.com" not in providers.hosts


async def test_ip_fallback_fills_geo_when_shodan_fails(providers):
    providers.route("api.shodan.io", httpx.Response(401, json={"error": "Invalid API key"}))
    providers.route("ip-api.com", IP_API)

    result = await pipelines.ip_lookup("8.8.8.8", {"shodan": "bad"}, providers.client())

    data = result.enriched_data
    assert data["country"] == "Canada"
    assert data["organization"] == "Example ISP"
    assert data["timezone"] == "America/Toronto"
    assert any("Shodan" in line and "Invalid API key" in line for line in result.logs)


async def test_ip_fallback_reporting_fail_status_adds_nothing(providers):
    providers.route("ip-api.com", {"status": "fail", "message": "private range"})

    result = await pipelines.ip_lookup("10.0.0.1", {}, providers.client())

    assert set(result.enriched_data) == {"last_update"}
    assert any("private range" in line for line in result.logs)


async def test_ip_virustotal_converts_epoch(providers):
    providers.route("www.virustotal.com", VT_REPORT)

    result = await pipelines.ip_lookup("8.8.8.8", {"virustotal": "k"}, providers.client())

    data = result.enriched_data
    assert data["vt_reputation"] == -3
    assert data["vt_malicious"] == 2
    assert data["vt_suspicious"] == 1
    assert data["vt_harmless"] == 60
    assert data["vt_last_analysis"] == "2024-01-01T00:00:00Z"


async def test_ip_provider_failures_are_independent(providers):
    providers.route("api.shodan.io", httpx.ConnectError("connection refused"))
    providers.route("api.abuseipdb.com", ABUSE_REPORT)
    providers.route("ip-api.com", httpx.ReadTimeout("slow"))
    providers.route("www.virustotal.com", VT_REPORT)

    keys = {"shodan": "k", "abuseipdb": "k", "virustotal": "k"}
    result = await pipelines.ip_lookup("8.8.8.8", keys, providers.client())

    assert result.enriched_data["risk_score"] == "37%"
    assert result.enriched_data["vt_malicious"] == 2
    assert providers.hosts == ["api.shodan.io", "api.abuseipdb.com", "ip-api.com", "www.virustotal.com"]


async def test_ip_unexpected_step_error_is_isolated(providers, monkeypatch):
    async def boom(*args, **kwargs):
        raise RuntimeError("bad payload")

    monkeypatch.setattr(abuseipdb, "check_ip", boom)
    providers.route("www.virustotal.com", VT_REPORT)

    result = await pipelines.ip_lookup("8.8.8.8", {"abuseipdb": "k", "virustotal": "k"}, providers.client())

    assert "risk_score" not in result.enriched_data
    assert result.enriched_data["vt_harmless"] == 60
    assert any("RuntimeError" in line for line in result.logs)


async def test_error_outside_step_guards_returns_none(providers, monkeypatch):
    def broken_clock():
        raise RuntimeError("clock")

    monkeypatch.setattr(pipelines, "_now", broken_clock)
    assert await pipelines.ip_lookup("8.8.8.8", {}, providers.client()) is None


# ---------------------------------------------------------------- domain

async def test_domain_mx_without_a_records(providers, monkeypatch):
    async def mx(domain):
        return [("mail.x.com", 10)]

    monkeypatch.setattr(dns_records, "resolve_mx", mx)

    result = await pipelines.dns_lookup("x.com", None, providers.client())

    assert result.type == "dns_info"
    assert result.enriched_data["mx_records"] == "mail.x.com (10)"
    assert "ips" not in result.enriched_data


async def test_domain_records_are_joined(providers, monkeypatch):
    async def a(domain):
        return ["1.1.1.1", "2.2.2.2"]

    async def ns(domain):
        return ["ns1.x.com", "ns2.x.com"]

    async def txt(domain):
        return ["v=spf1 -all", "google-site-verification=abc"]

    monkeypatch.setattr(dns_records, "resolve_a", a)
    monkeypatch.setattr(dns_records, "resolve_ns", ns)
    monkeypatch.setattr(dns_records, "resolve_txt", txt)

    data = (await pipelines.dns_lookup("x.com", None, providers.client())).enriched_data

    assert data["ips"] == "1.1.1.1, 2.2.2.2"
    assert data["nameservers"] == "ns1.x.com, ns2.x.com"
    assert data["txt_records"] == "v=spf1 -all | google-site-verification=abc"


async def test_domain_rdap_and_subdomains(providers):
    providers.route("rdap.org", {
        "entities": [{"vcardArray": ["vcard", [["version", {}, "text", "4.0"], ["fn", {}, "text", "Example Registrar"]]]}],
        "events": [
            {"eventAction": "registration", "eventDate": "1995-08-14T04:00:00Z"},
            {"eventAction": "expiration", "eventDate": "2030-08-13T04:00:00Z"},
        ],
        "status": ["client delete prohibited", "client transfer prohibited"],
    })
    providers.route("crt.sh", [
        {"name_value": "www.x.com\nx.com"},
        {"name_value": "*.x.com"},
        {"name_value": "api.x.com"},
        {"name_value": "www.x.com"},
    ])

    data = (await pipelines.dns_lookup("x.com", None, providers.client())).enriched_data

    assert data["registrar"] == "Example Registrar"
    assert data["creation_date"] == "1995-08-14T04:00:00Z"
    assert data["expiry_date"] == "2030-08-13T04:00:00Z"
    assert data["status"] == "client delete prohibited, client transfer prohibited"
    assert data["subdomains"] == "www.x.com, api.x.com"
    assert data["subdomain_count"] == 2


async def test_domain_rdap_without_entities_defaults_registrar(providers):
    providers.route("rdap.org", {"events": []})

    data = (await pipelines.dns_lookup("x.com", None, providers.client())).enriched_data

    assert data["registrar"] == "Unknown"
    assert "creation_date" not in data
    assert "subdomains" not in data


async def test_domain_resolver_failure_does_not_stop_pipeline(providers, monkeypatch):
    from osint.errors import ProviderError

    async def broken(domain):
        raise ProviderError("DNS", "A lookup failed: Timeout")

    async def ns(domain):
        return ["ns1.x.com"]

    monkeypatch.setattr(dns_records, "resolve_a", broken)
    monkeypatch.setattr(dns_records, "resolve_ns", ns)

    result = await pipelines.dns_lookup("x.com", None, providers.client())

    assert result.enriched_data["nameservers"] == "ns1.x.com"
    assert any("Timeout" in line for line in result.logs)


# ---------------------------------------------------------------- email

def _hunter(**fields):
    base = {"result": "deliverable", "score": 91, "disposable": False, "webmail": True,
            "mx_records": True, "gibberish": False}
    base.update(fields)
    return {"data": base}


async def test_email_deliverable_is_normalized(providers):
    providers.route("api.hunter.io", _hunter())

    result = await pipelines.email_lookup("bob@example.com", {"hunter": "k"}, providers.client())

    data = result.enriched_data
    assert result.type == "email_info"
    assert data["user"] == "bob"
    assert data["domain"] == "example.com"
    assert data["status"] == "Valid"
    assert data["score"] == "91%"
    assert data["disposable"] == "No"
    assert data["webmail"] == "Yes"
    assert data["mx_records"] == "Found"
    assert data["provider"] == "Standard"


async def test_email_other_verdicts_pass_through(providers):
    providers.route("api.hunter.io", _hunter(result="risky", mx_records=False, disposable=True))

    data = (await pipelines.email_lookup("bob@example.com", {"hunter": "k"}, providers.client())).enriched_data

    assert data["status"] == "risky"
    assert data["mx_records"] == "Missing"
    assert data["disposable"] == "Yes"


async def test_email_provider_error_sets_status(providers):
    providers.route("api.hunter.io", httpx.Response(401, json={"errors": [{"details": "bad key"}]}))

    result = await pipelines.email_lookup("bob@example.com", {"hunter": "k"}, providers.client())

    assert result.enriched_data["status"] == "API Error"
    assert any("Hunter.io" in line for line in result.logs)


async def test_email_without_at_sign(providers):
    data = (await pipelines.email_lookup("not-an-email", None, providers.client())).enriched_data
    assert data["user"] == "not-an-email"
    assert data["domain"] == ""


# ---------------------------------------------------------------- phone

NUMVERIFY_VALID = {
    "valid": True,
    "number": "34600111222",
    "country_prefix": "+34",
    "country_name": "Spain",
    "location": "Madrid",
    "carrier": "Movistar",
    "line_type": "mobile",
}


@pytest.mark.parametrize("keys, answer, expected", [
    ({}, None, "Unknown"),
    ({"numverify": "k"}, NUMVERIFY_VALID, "Yes"),
    ({"numverify": "k"}, {"valid": False}, "No/Invalid"),
    ({"numverify": "k"}, {"success": False, "error": {"type": "invalid_access_key"}}, "Unknown"),
    ({"numverify": "k"}, httpx.ConnectError("down"), "Unknown"),
    ({"numverify": "k"}, httpx.Response(500), "Unknown"),
])
async def test_phone_validity_states(providers, keys, answer, expected):
    if answer is not None:
        providers.route("apilayer.net", answer)

    result = await pipelines.phone_lookup("+34600111222", keys, providers.client())

    assert result.enriched_data["valid"] == expected


async def test_phone_valid_overwrites_defaults(providers):
    providers.route("apilayer.net", NUMVERIFY_VALID)

    data = (await pipelines.phone_lookup("+34600111222", {"numverify": "k"}, providers.client())).enriched_data

    assert data["country_code"] == "+34"
    assert data["country"] == "Spain"
    assert data["location"] == "Madrid"
    assert data["carrier"] == "Movistar"
    assert data["line_type"] == "mobile"


async def test_phone_provider_error_type_in_carrier(providers):
    providers.route("apilayer.net", {"success": False, "error": {"type": "invalid_access_key", "info": "bad"}})

    data = (await pipelines.phone_lookup("+34600111222", {"numverify": "k"}, providers.client())).enriched_data

    assert data["carrier"] == "API Error: invalid_access_key"


async def test_phone_request_failure_in_carrier(providers):
    providers.route("apilayer.net", httpx.ConnectError("down"))

    data = (await pipelines.phone_lookup("+34600111222", {"numverify": "k"}, providers.client())).enriched_data

    assert data["carrier"] == "Request Failed"
    assert data["line_type"] == "Unknown"


# ---------------------------------------------------------------- enrich()

async def test_enrich_routes_by_type(providers):
    response = await pipelines.enrich("phone", "+34600111222", {}, providers.client())

    assert response.success is True
    assert response.result.type == "phone_info"


async def test_enrich_unsupported_type(providers):
    response = await pipelines.enrich("crypto", "bc1q...", {}, providers.client())

    assert response.success is False
    assert response.result is None
