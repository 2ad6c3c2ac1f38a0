import logging

import aiohttp

from .models import ProbeResult
from .transport import TransportConfig
from .utils import now, since

logger = logging.getLogger(__name__)


async def probe(url: str, transport: TransportConfig) -> ProbeResult:
    """Time a single GET of ``url``, body included, without following redirects."""
    start = now()

    try:
        target, request_kwargs = transport.route(url)
    except ValueError as e:
        logger.warning(f"Cannot create request for {url}: {e}")
        return ProbeResult(url=url, duration=since(start), error=e)

    try:
        async with transport.session() as session:
            async with session.get(
                target, allow_redirects=False, **request_kwargs
            ) as resp:
                content = await resp.read()
                duration = since(start)
                logger.debug(
                    f"Fetched {url}: status={resp.status}, size={len(content)} bytes"
                )
                return ProbeResult(
                    url=url, duration=duration, status=resp.status, size=len(content)
                )
    except (aiohttp.ClientError, TimeoutError, OSError, ValueError) as e:
        duration = since(start)
        logger.warning(f"Cannot launch request for {url}: {e!r}")
        return ProbeResult(url=url, duration=duration, error=e)
