"""Runs external command-line tools under a hard deadline."""

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from config import settings

logger = logging.getLogger(__name__)

# Grace period for pipes after exit or kill
DRAIN_SECONDS = 2


@dataclass
class WorkerResult:
    success: bool
    stdout: str = ""
    stderr: str = ""
    error: Optional[str] = None


async def _pump(stream: asyncio.StreamReader | None, sink: list[bytes]) -> None:
    """Copy a pipe into `sink` chunk by chunk so partial output survives a kill."""
    if stream is None:
        return
    while True:
        chunk = await stream.read(4096)
        if not chunk:
            break
        sink.append(chunk)


async def _settle(aw, timeout: float = DRAIN_SECONDS) -> None:
    """Wait a bounded time; grandchildren may hold the pipes open forever."""
    try:
        await asyncio.wait_for(aw, timeout=timeout)
    except asyncio.TimeoutError:
        pass


def _text(chunks: list[bytes]) -> str:
    return b"".join(chunks).decode("utf-8", errors="replace")


class ProcessWorker:
    """
    Launch one tool per call from the tools directory.

    Never raises for tool failures: spawn errors, nonzero exits and
    timeouts are all reported in the returned WorkerResult, with whatever
    stdout was captured so far.
    """

    def __init__(
        self,
        tools_dir: str | Path | None = None,
        timeout: float | None = None,
        python: str | None = None,
    ):
        self.tools_dir = Path(tools_dir or settings.TOOLS_DIR).resolve()
        self.timeout = timeout if timeout is not None else settings.PROCESS_TIMEOUT_SECONDS
        self.python = python or settings.PYTHON_EXECUTABLE

    def build_command(self, tool: str, args: list[str]) -> list[str]:
        path = self.tools_dir / tool
        if path.suffix == ".py":
            return [self.python, str(path), *args]
        return [str(path), *args]

    async def execute(self, tool: str, args: list[str]) -> WorkerResult:
        cmd = self.build_command(tool, [str(a) for a in args])
        logger.info("Executing: %s", " ".join(cmd))

        stdout: list[bytes] = []
        stderr: list[bytes] = []

        try:
            proc = await asyncio.create_subprocess_exec(
                *cmd,
                cwd=self.tools_dir,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as e:
            logger.error("Spawn error for %s: %s", tool, e)
            return WorkerResult(success=False, error=e.strerror or str(e))

        readers = asyncio.gather(_pump(proc.stdout, stdout), _pump(proc.stderr, stderr))

        try:
            await asyncio.wait_for(proc.wait(), timeout=self.timeout)
        except asyncio.TimeoutError:
            # wait() only resolves once the pipes close too, so a tool that
            # exited in time but left a child holding stdout lands here
            if proc.returncode is None:
                proc.kill()
                await _settle(proc.wait())
                await _settle(readers)
                logger.warning("%s killed after %ss", tool, self.timeout)
                return WorkerResult(
                    success=False,
                    stdout=_text(stdout),
                    stderr=_text(stderr) + f"\n[Timeout] Process killed after {self.timeout:g}s",
                    error="Timeout",
                )
            logger.info("%s exited but its pipes are still open", tool)
            await _settle(readers)
        else:
            await readers

        code = proc.returncode
        logger.info("%s finished with code %s", tool, code)

        if code == 0:
            return WorkerResult(success=True, stdout=_text(stdout), stderr=_text(stderr))
        return WorkerResult(
            success=False,
            stdout=_text(stdout),
            stderr=_text(stderr),
            error=f"exit code {code}",
        )
