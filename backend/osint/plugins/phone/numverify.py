"""Numverify carrier/location node."""

import logging

from models.graph import ExecutionResult, Node
from ...errors import ProviderError, error_message
from ...http import http_client
from ...providers import numverify
from ..base import OSINTPlugin

logger = logging.getLogger(__name__)


class NumverifyPlugin(OSINTPlugin):
    name = "Numverify Phone Lookup"
    description = "Validate phone number and get carrier/location info"
    accepted_types = frozenset({"phone"})

    async def execute(self, node: Node, config=None) -> ExecutionResult:
        result = ExecutionResult()
        phone = node.value("phone")
        if not phone:
            result.log("Error: Input node does not contain a phone field in data.")
            return result

        key = self.credential(config, "numverify")
        if not key:
            result.log("Skipping Numverify: No API Key provided.")
            return result

        result.log(f"Querying Numverify for {phone}...")
        try:
            async with http_client(self.client) as client:
                data = await numverify.validate_number(client, phone, key)
        except ProviderError as e:
            logger.warning("Numverify request failed for %s: %s", phone, e.message)
            result.log(f"Numverify API Error: {e.message}")
            return result
        except Exception as e:
            logger.exception("Unexpected Numverify failure for %s", phone)
            result.log(f"Numverify API Error: {error_message(e)}")
            return result

        if not data.get("valid"):
            result.log(f"Numverify reports {phone} as invalid.")
            return result

        result.add_node(
            node,
            "phone_data",
            {
                "country": data.get("country_name"),
                "location": data.get("location"),
                "carrier": data.get("carrier"),
                "line_type": data.get("line_type"),
                "source": "numverify",
            },
            prefix="numverify",
            dx=50,
            dy=0,
        )
        result.log(f"Numverify: {data.get('carrier') or 'unknown carrier'} ({data.get('line_type') or 'unknown'})")
        return result
