import logging
from urllib.parse import urlparse

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from .transport import TransportConfig

logger = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")


class ArgumentError(ValueError):
    """Invalid command-line input; nothing has been probed yet."""


class RunConfig(BaseModel):
    """Validated run settings, as given on the command line (milliseconds)."""

    model_config = ConfigDict(frozen=True)

    urls: list[str]
    timeout_ms: int = Field(default=1000, gt=0)
    count: int = Field(default=1, ge=1)
    ip: str | None = None
    port: int | None = Field(default=None, ge=1, le=65535)
    insecure: bool = False
    wait_ms: int = Field(default=500, ge=0)
    quiet: bool = False
    report_interval_s: float = Field(default=5.0, gt=0)
    cancel_pending: bool = True

    @field_validator("urls")
    @classmethod
    def _check_urls(cls, urls: list[str]) -> list[str]:
        if not urls:
            raise ValueError("not enough arguments")
        checked = []
        for arg in urls:
            try:
                parsed = urlparse(arg.strip())
                parsed.port  # raises on a malformed port
            except ValueError as e:
                raise ValueError(f"cannot parse {arg} as url: {e}") from e
            if parsed.scheme not in ALLOWED_SCHEMES:
                raise ValueError(f"unsupported url scheme in {arg}")
            if not parsed.hostname:
                raise ValueError(f"no host in url {arg}")
            checked.append(parsed.geturl())
        return checked

    @field_validator("ip")
    @classmethod
    def _blank_ip_is_none(cls, ip: str | None) -> str | None:
        if ip is None:
            return None
        return ip.strip() or None

    @property
    def timeout_s(self) -> float:
        return self.timeout_ms / 1000

    @property
    def wait_s(self) -> float:
        return self.wait_ms / 1000

    def transport(self) -> TransportConfig:
        return TransportConfig(ip=self.ip, port=self.port, verify_tls=not self.insecure)


def load_config(**values) -> RunConfig:
    try:
        return RunConfig(**values)
    except ValidationError as e:
        messages = []
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"] if not isinstance(p, int))
            msg = err["msg"].removeprefix("Value error, ")
            messages.append(f"{field}: {msg}" if field != "urls" else msg)
        logger.debug(f"Configuration rejected: {messages}")
        raise ArgumentError("; ".join(messages)) from e
