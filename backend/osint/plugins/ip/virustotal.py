"""VirusTotal verdict node for addresses and domains."""

import logging

from models.graph import ExecutionResult, Node
from ...errors import ProviderError, error_message
from ...http import http_client
from ...providers import virustotal
from ..base import OSINTPlugin

logger = logging.getLogger(__name__)


class VirusTotalPlugin(OSINTPlugin):
    name = "VirusTotal Reputation"
    description = "Check reputation of IP or Domain on VirusTotal"
    accepted_types = frozenset({"ip", "domain"})

    async def execute(self, node: Node, config=None) -> ExecutionResult:
        result = ExecutionResult()
        kind = "ip" if node.type == "ip" else "domain"
        value = node.value(kind)
        if not value:
            result.log(f"Error: Input node does not contain a {kind} field in data.")
            return result

        key = self.credential(config, "virustotal")
        if not key:
            result.log("Skipping VirusTotal: No API Key provided.")
            return result

        result.log(f"Querying VirusTotal for {value} ({kind})...")
        try:
            async with http_client(self.client) as client:
                report = await virustotal.lookup(client, value, kind, key)
        except ProviderError as e:
            logger.warning("VirusTotal request failed for %s: %s", value, e.message)
            result.log(f"VirusTotal Request Failed: {e.message}")
            return result
        except Exception as e:
            logger.exception("Unexpected VirusTotal failure for %s", value)
            result.log(f"VirusTotal Request Failed: {error_message(e)}")
            return result

        report.pop("whois", None)
        result.add_node(node, "vt_report", {**report, "source": "virustotal"}, prefix="rep_vt", dx=-50, dy=50)
        result.log(
            f"VirusTotal verdicts: {report['malicious']} malicious, "
            f"{report['suspicious']} suspicious, {report['harmless']} harmless."
        )
        return result
