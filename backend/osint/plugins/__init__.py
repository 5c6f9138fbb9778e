"""Built-in plugins, in registration order."""

from .base import OSINTPlugin, Credentials

from .ip.shodan import ShodanPlugin
from .ip.abuseipdb import AbuseIPDBPlugin
from .ip.ipapi import IpApiPlugin
from .ip.virustotal import VirusTotalPlugin
from .domain.dns_lookup import DnsLookupPlugin
from .domain.crtsh import CrtShPlugin
from .email.hunter import HunterPlugin
from .phone.numverify import NumverifyPlugin
from .identity import SherlockPlugin, parse_sherlock_output

BUILTIN_PLUGINS = [
    # IP
    ShodanPlugin,
    AbuseIPDBPlugin,
    IpApiPlugin,
    VirusTotalPlugin,    # also accepts domains

    # Domain
    DnsLookupPlugin,
    CrtShPlugin,

    # Email / phone
    HunterPlugin,
    NumverifyPlugin,

    # Identity (external process)
    SherlockPlugin,
]

__all__ = [
    "OSINTPlugin",
    "Credentials",
    "BUILTIN_PLUGINS",
    "ShodanPlugin",
    "AbuseIPDBPlugin",
    "IpApiPlugin",
    "VirusTotalPlugin",
    "DnsLookupPlugin",
    "CrtShPlugin",
    "HunterPlugin",
    "NumverifyPlugin",
    "SherlockPlugin",
    "parse_sherlock_output",
]
