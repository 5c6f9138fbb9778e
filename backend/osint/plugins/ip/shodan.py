"""Shodan host report with one node per open port."""

import logging

from models.graph import Cost, ExecutionResult, Node
from ...errors import ProviderError, error_message
from ...http import http_client
from ...providers import shodan
from ..base import OSINTPlugin

logger = logging.getLogger(__name__)


class ShodanPlugin(OSINTPlugin):
    name = "Shodan IP Enrichment"
    description = "Gather vulnerability and host information from Shodan"
    accepted_types = frozenset({"ip"})
    cost = Cost.PAID

    async def execute(self, node: Node, config=None) -> ExecutionResult:
        result = ExecutionResult()
        ip = node.value("ip")
        if not ip:
            result.log("Error: Input node does not contain an ip field in data.")
            return result

        key = self.credential(config, "shodan")
        if not key:
            result.log("Skipping Shodan: No API Key provided.")
            return result

        result.log(f"Querying Shodan for {ip}...")
        try:
            async with http_client(self.client) as client:
                host = await shodan.lookup_host(client, ip, key)
        except ProviderError as e:
            logger.warning("Shodan request failed for %s: %s", ip, e.message)
            result.log(f"Shodan Request Failed: {e.message}")
            return result
        except Exception as e:
            logger.exception("Unexpected Shodan failure for %s", ip)
            result.log(f"Shodan Request Failed: {error_message(e)}")
            return result

        result.add_node(
            node,
            "shodan_data",
            {**shodan.flatten(host), "source": "shodan"},
            prefix="rep_shodan",
            dx=50,
            dy=50,
        )

        for port in host["ports"]:
            result.add_node(
                node,
                "port",
                {"port": port, "protocol": "tcp", "service": "unknown", "ip": ip},
                prefix=f"port_{port}",
            )

        result.log(f"Shodan returned {len(host['ports'])} open ports.")
        return result
