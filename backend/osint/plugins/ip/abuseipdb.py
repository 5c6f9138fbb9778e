"""AbuseIPDB reputation report node."""

import logging

from models.graph import ExecutionResult, Node
from ...errors import ProviderError, error_message
from ...http import http_client
from ...providers import abuseipdb
from ..base import OSINTPlugin

logger = logging.getLogger(__name__)


class AbuseIPDBPlugin(OSINTPlugin):
    name = "AbuseIPDB Check"
    description = "Check IP reputation against AbuseIPDB database"
    accepted_types = frozenset({"ip"})

    async def execute(self, node: Node, config=None) -> ExecutionResult:
        result = ExecutionResult()
        ip = node.value("ip")
        if not ip:
            result.log("Error: Input node does not contain an ip field in data.")
            return result

        key = self.credential(config, "abuseipdb")
        if not key:
            result.log("Skipping AbuseIPDB: No API Key provided.")
            return result

        result.log(f"Querying AbuseIPDB for {ip}...")
        try:
            async with http_client(self.client) as client:
                report = await abuseipdb.check_ip(client, ip, key)
        except ProviderError as e:
            logger.warning("AbuseIPDB request failed for %s: %s", ip, e.message)
            result.log(f"AbuseIPDB Request Failed: {e.message}")
            return result
        except Exception as e:
            logger.exception("Unexpected AbuseIPDB failure for %s", ip)
            result.log(f"AbuseIPDB Request Failed: {error_message(e)}")
            return result

        result.add_node(
            node,
            "reputation_data",
            {
                "risk_score": report["abuse_confidence"],
                "total_reports": report["total_reports"],
                "last_report": report["last_report"],
                "usage_type": report["usage_type"],
                "domain_assoc": report["domain_assoc"],
                "source": "abuseipdb",
            },
            prefix="rep_abuseipdb",
            dx=60,
            dy=60,
        )
        result.log(f"AbuseIPDB confidence score: {report['abuse_confidence']}%")
        return result
