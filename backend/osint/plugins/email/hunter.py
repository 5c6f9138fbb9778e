"""Hunter.io verification result node."""

import logging

from models.graph import Cost, ExecutionResult, Node
from ...errors import ProviderError, error_message
from ...http import http_client
from ...providers import hunter
from ..base import OSINTPlugin

logger = logging.getLogger(__name__)


class HunterPlugin(OSINTPlugin):
    name = "Hunter.io Email Lookup"
    description = "Verify email address and find professional details"
    accepted_types = frozenset({"email"})
    cost = Cost.PAID

    async def execute(self, node: Node, config=None) -> ExecutionResult:
        result = ExecutionResult()
        email = node.value("email")
        if not email:
            result.log("Error: Input node does not contain an email field in data.")
            return result

        key = self.credential(config, "hunter")
        if not key:
            result.log("Skipping Hunter.io: No API Key provided.")
            return result

        result.log(f"Querying Hunter.io for {email}...")
        try:
            async with http_client(self.client) as client:
                check = await hunter.verify_email(client, email, key)
        except ProviderError as e:
            logger.warning("Hunter.io request failed for %s: %s", email, e.message)
            result.log(f"Hunter.io Request Failed: {e.message}")
            return result
        except Exception as e:
            logger.exception("Unexpected Hunter.io failure for %s", email)
            result.log(f"Hunter.io Request Failed: {error_message(e)}")
            return result

        result.add_node(
            node,
            "email_data",
            {
                "status": check["result"],
                "score": check["score"],
                "disposable": check["disposable"],
                "webmail": check["webmail"],
                "mx_records": check["mx_records"],
                "source": "hunter.io",
            },
            prefix="hunter",
            dx=50,
            dy=0,
        )
        result.log(f"Hunter.io verdict: {check['result']}")
        return result
