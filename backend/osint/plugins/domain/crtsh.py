"""Subdomains from certificate transparency as new domain nodes."""

import logging

from models.graph import ExecutionResult, Node
from ...errors import ProviderError, error_message
from ...http import http_client
from ...providers import crtsh
from ..base import OSINTPlugin

logger = logging.getLogger(__name__)


class CrtShPlugin(OSINTPlugin):
    name = "CRT.sh Subdomain Enumeration"
    description = "Find subdomains using SSL certificate transparency logs via crt.sh"
    accepted_types = frozenset({"domain"})

    async def execute(self, node: Node, config=None) -> ExecutionResult:
        result = ExecutionResult()
        domain = node.value("domain")
        if not domain:
            result.log("Error: Input node does not contain a domain field in data.")
            return result

        result.log(f"Querying crt.sh for {domain}...")
        try:
            async with http_client(self.client) as client:
                subdomains, total = await crtsh.find_subdomains(client, domain)
        except ProviderError as e:
            result.log(f"Error executing crt.sh lookup: {e.message}")
            return result
        except Exception as e:
            logger.exception("Unexpected crt.sh failure for %s", domain)
            result.log(f"Error executing crt.sh lookup: {error_message(e)}")
            return result

        result.log(f"Found {total} unique subdomains.")
        if total > len(subdomains):
            result.log(f"Showing the first {len(subdomains)}.")

        for sub in subdomains:
            result.add_node(node, "domain", {"domain": sub, "source": "crt.sh"})
        return result
