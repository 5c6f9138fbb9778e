"""DNS record enumeration into ip/server/dns_record nodes."""

import logging

from models.graph import ExecutionResult, Node
from ...errors import error_message
from ...providers import dns_records
from ..base import OSINTPlugin

logger = logging.getLogger(__name__)


class DnsLookupPlugin(OSINTPlugin):
    name = "Basic DNS Enumeration"
    description = "Resolve A, MX, NS, and TXT records"
    accepted_types = frozenset({"domain"})

    async def execute(self, node: Node, config=None) -> ExecutionResult:
        result = ExecutionResult()
        domain = node.value("domain")
        if not domain:
            result.log("Error: Input node does not contain a domain field in data.")
            return result

        logger.info("DNS enumeration for %s", domain)
        result.log(f"Resolving DNS for {domain}...")

        # A records
        try:
            ips = await dns_records.resolve_a(domain)
        except Exception as e:
            result.log(f"A lookup failed: {error_message(e)}")
        else:
            for ip in ips:
                result.add_node(node, "ip", {"ip": ip, "source": "dns_a_record"}, prefix="ip", dx=0)
            result.log(f"Found {len(ips)} A records." if ips else "No A records found.")

        # MX records
        try:
            mx = await dns_records.resolve_mx(domain)
        except Exception as e:
            result.log(f"MX lookup failed: {error_message(e)}")
        else:
            for exchange, priority in mx:
                result.add_node(
                    node,
                    "server",
                    {"hostname": exchange, "priority": priority, "type": "mail_server"},
                    prefix="mx",
                    dx=50,
                )
            if mx:
                result.log(f"Found {len(mx)} MX records.")

        # NS records
        try:
            ns = await dns_records.resolve_ns(domain)
        except Exception as e:
            result.log(f"NS lookup failed: {error_message(e)}")
        else:
            for host in ns:
                result.add_node(node, "server", {"hostname": host, "type": "nameserver"}, prefix="ns", dx=-50)
            if ns:
                result.log(f"Found {len(ns)} NS records.")

        # TXT records are kept together on a single node
        try:
            txt = await dns_records.resolve_txt(domain)
        except Exception as e:
            result.log(f"TXT lookup failed: {error_message(e)}")
        else:
            if txt:
                result.add_node(
                    node,
                    "dns_record",
                    {"records": " | ".join(txt), "type": "TXT"},
                    prefix="txt",
                    dx=0,
                    dy=150,
                )
                result.log(f"Found {len(txt)} TXT strings.")

        return result
