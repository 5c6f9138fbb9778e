"""
Provider adapters.

Each adapter talks to one external service, normalizes its payload into a
flat dict and raises ProviderError on failure. Pipelines and plugins share
them so a given provider is always mapped the same way.
"""

from . import abuseipdb, crtsh, dns_records, hunter, ipapi, numverify, rdap, shodan, virustotal

__all__ = [
    "abuseipdb",
    "crtsh",
    "dns_records",
    "hunter",
    "ipapi",
    "numverify",
    "rdap",
    "shodan",
    "virustotal",
]
