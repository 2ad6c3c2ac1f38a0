import asyncio
import logging
from collections.abc import Sequence

from .models import ProbeResult, RoundOutcome
from .prober import probe
from .transport import TransportConfig

logger = logging.getLogger(__name__)


class RoundCollector:
    """Fans out one probe per URL and gathers what arrives before a deadline.

    With ``cancel_pending`` (the default) probes still running at the
    deadline are cancelled. Otherwise they are left to finish in the
    background and their results are dropped; ``aclose()`` cancels any
    such stragglers at the end of a run.
    """

    def __init__(self, transport: TransportConfig | None = None, cancel_pending: bool = True):
        self.transport = transport or TransportConfig()
        self.cancel_pending = cancel_pending
        self._abandoned: set[asyncio.Task] = set()

    @property
    def abandoned(self) -> int:
        return len(self._abandoned)

    async def _deliver(self, url: str, channel: asyncio.Queue) -> None:
        # unbounded queue: put_nowait never blocks, even once nobody reads
        channel.put_nowait(await probe(url, self.transport))

    async def collect(self, urls: Sequence[str], timeout_s: float) -> RoundOutcome:
        loop = asyncio.get_running_loop()
        channel: asyncio.Queue[ProbeResult] = asyncio.Queue()
        deadline = loop.time() + timeout_s
        tasks = [asyncio.create_task(self._deliver(u, channel)) for u in urls]

        results: list[ProbeResult] = []
        try:
            while len(results) < len(tasks):
                remaining = deadline - loop.time()
                if remaining <= 0:
                    raise TimeoutError
                results.append(await asyncio.wait_for(channel.get(), timeout=remaining))
        except TimeoutError:
            logger.info(
                f"Round timed out after {timeout_s:.3f}s: "
                f"{len(results)}/{len(urls)} results"
            )
            await self._dispose([t for t in tasks if not t.done()])

        return RoundOutcome(results=tuple(results), url_count=len(urls))

    async def _dispose(self, pending: list[asyncio.Task]) -> None:
        if not pending:
            return
        if self.cancel_pending:
            logger.debug(f"Cancelling {len(pending)} pending probes")
            for task in pending:
                task.cancel()
            await asyncio.gather(*pending, return_exceptions=True)
            return

        logger.debug(f"Abandoning {len(pending)} pending probes")
        for task in pending:
            self._abandoned.add(task)
            task.add_done_callback(self._abandoned.discard)

    async def aclose(self) -> None:
        if not self._abandoned:
            return
        stragglers = list(self._abandoned)
        logger.debug(f"Cancelling {len(stragglers)} abandoned probes")
        for task in stragglers:
            task.cancel()
        await asyncio.gather(*stragglers, return_exceptions=True)
