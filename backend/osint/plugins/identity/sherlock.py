"""
Username search across social sites via the Sherlock CLI.

Sherlock prints one line per hit when run with --print-found:

    [*] Checking username bob on:
    [+] Instagram: https://www.instagram.com/bob

Everything else on stdout is progress noise.
"""

import logging
from dataclasses import dataclass
from urllib.parse import urlparse

from config import settings
from models.graph import ExecutionResult, Node
from ...errors import ToolExecutionError
from ...worker import ProcessWorker
from ..base import OSINTPlugin

logger = logging.getLogger(__name__)

HIT_MARKER = "[+]"
SEPARATOR = ": "


@dataclass
class ProfileHit:
    service: str
    url: str

    @property
    def hostname(self) -> str:
        return urlparse(self.url).hostname or ""


def parse_sherlock_output(stdout: str) -> tuple[list[ProfileHit], list[str]]:
    """
    Parse Sherlock stdout.

    Returns:
        (hits, skipped) where skipped holds hit-marked lines that did not
        match the "<service>: <url>" grammar
    """
    hits: list[ProfileHit] = []
    skipped: list[str] = []

    for raw in stdout.splitlines():
        line = raw.strip()
        if HIT_MARKER not in line:
            continue

        body = line.split(HIT_MARKER, 1)[1].strip()
        service, sep, url = body.partition(SEPARATOR)
        service, url = service.strip(), url.strip()

        parsed = urlparse(url)
        if not sep or not service or not parsed.scheme or not parsed.netloc:
            skipped.append(line)
            continue

        hits.append(ProfileHit(service=service, url=url))

    return hits, skipped


class SherlockPlugin(OSINTPlugin):
    name = "Sherlock"
    description = "Search social networks for a username (Sherlock engine)"
    version = "1.0.0"
    author = "Sherlock Project (Wrapped)"
    accepted_types = frozenset({"identity"})

    def __init__(self, client=None, worker: ProcessWorker | None = None):
        super().__init__(client)
        self.worker = worker

    def build_args(self, username: str) -> list[str]:
        return [
            username,
            "--timeout", str(settings.SHERLOCK_SITE_TIMEOUT),
            "--print-found",
            "--no-color",
        ]

    async def execute(self, node: Node, config=None) -> ExecutionResult:
        result = ExecutionResult()
        username = node.value("username", "handle")
        if not username:
            result.log("Error: Input node does not contain a username or handle field in data.")
            return result

        worker = self.worker or ProcessWorker()
        result.log(f"Running Sherlock for {username}...")
        run = await worker.execute(settings.SHERLOCK_SCRIPT, self.build_args(username))

        if not run.success:
            # Nonzero exits and timeouts often still carry usable hits
            if not run.stdout.strip():
                raise ToolExecutionError(f"Sherlock failed: {run.error or run.stderr.strip()}")
            logger.warning("Sherlock ended with %s; parsing partial output", run.error)
            result.log(f"Sherlock ended early ({run.error}); using partial output.")

        hits, skipped = parse_sherlock_output(run.stdout)

        for line in skipped:
            result.log(f"Skipped unparseable line: {line}")

        for hit in hits:
            result.add_node(
                node,
                "url",
                {"url": hit.url, "title": f"{hit.service} Profile", "domain": hit.hostname, "source": "sherlock"},
                prefix="url",
            )
            result.log(f"Found profile on {hit.service}: {hit.url}")

        if not hits:
            result.log("No matches found by Sherlock.")
        return result
