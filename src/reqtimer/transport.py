import logging
from dataclasses import dataclass
from typing import Any

import aiohttp
from yarl import URL

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TransportConfig:
    """Run-wide client settings, built once before the first round.

    ``ip`` and ``port`` redirect every connection to a fixed destination
    while the request keeps the original ``Host`` header and TLS hostname.
    """

    ip: str | None = None
    port: int | None = None
    verify_tls: bool = True
    connect_timeout_s: float = 30.0

    @property
    def overrides_destination(self) -> bool:
        return bool(self.ip) or self.port is not None

    @staticmethod
    def _authority(url: URL) -> str:
        host = url.raw_host or ""
        if ":" in host:
            host = f"[{host}]"
        if url.is_default_port():
            return host
        return f"{host}:{url.port}"

    def route(self, url: str) -> tuple[URL, dict[str, Any]]:
        target = URL(url)
        if not self.overrides_destination:
            return target, {}
        if not target.raw_host:
            raise ValueError(f"no host in url {url!r}")

        kwargs: dict[str, Any] = {"headers": {"Host": self._authority(target)}}
        if target.scheme == "https":
            kwargs["server_hostname"] = target.raw_host
        if self.ip:
            target = target.with_host(self.ip)
        if self.port is not None:
            target = target.with_port(self.port)
        logger.debug(f"Routing {url} to {target}")
        return target, kwargs

    def session(self) -> aiohttp.ClientSession:
        # one connection per probe: nothing is pooled between rounds
        connector = aiohttp.TCPConnector(
            ssl=self.verify_tls,
            force_close=True,
            use_dns_cache=False,
            limit=0,
        )
        timeout = aiohttp.ClientTimeout(total=None, sock_connect=self.connect_timeout_s)
        return aiohttp.ClientSession(connector=connector, timeout=timeout)
