"""Free geolocation node from ip-api.com."""

import logging

from models.graph import ExecutionResult, Node
from ...errors import ProviderError, error_message
from ...http import http_client
from ...providers import ipapi
from ..base import OSINTPlugin

logger = logging.getLogger(__name__)


class IpApiPlugin(OSINTPlugin):
    name = "IP-API Geolocation"
    description = "Basic geolocation and ISP info using IP-API (Free)"
    accepted_types = frozenset({"ip"})

    async def execute(self, node: Node, config=None) -> ExecutionResult:
        result = ExecutionResult()
        ip = node.value("ip")
        if not ip:
            result.log("Error: Input node does not contain an ip field in data.")
            return result

        result.log(f"Querying IP-API for {ip}...")
        try:
            async with http_client(self.client) as client:
                geo = await ipapi.geolocate(client, ip)
        except ProviderError as e:
            result.log(f"IP-API failed: {e.message}")
            return result
        except Exception as e:
            logger.exception("Unexpected IP-API failure for %s", ip)
            result.log(f"IP-API failed: {error_message(e)}")
            return result

        result.add_node(node, "geo_data", {**geo, "source": "ip-api"}, prefix="info_ipapi", dx=40, dy=40)
        result.log(f"Located {ip} in {geo.get('city') or '?'}, {geo.get('country') or '?'}.")
        return result
