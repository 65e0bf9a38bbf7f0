import logging
import re
from typing import Iterable

from starlette.datastructures import URL
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from app.core.config import DEFAULT_ORIGINS, Settings, settings
from app.core.errors import OriginRejected, error_response

logger = logging.getLogger(__name__)

_DEFAULT_PORTS = {"http": 80, "https": 443}
_SEPARATORS = re.compile(r"[\s,]+")


def normalize_origin(origin: str) -> str:
    """
    Reduce a URL-ish value to scheme://host[:port].

    Values that don't parse as an absolute URL come back trimmed but otherwise as given.
    """
    raw = origin.strip()
    try:
        url = URL(raw)
        scheme = url.scheme.lower()
        hostname = url.hostname
        port = url.port
    except ValueError:
        return raw
    if not scheme or not hostname:
        return raw

    hostname = hostname.lower()
    if ":" in hostname:  # IPv6 literal
        hostname = f"[{hostname}]"
    if port is not None and port != _DEFAULT_PORTS.get(scheme):
        return f"{scheme}://{hostname}:{port}"
    return f"{scheme}://{hostname}"


def normalize_origins(*raw_values: str | None) -> list[str]:
    out: list[str] = []
    for raw in raw_values:
        if not raw:
            continue
        for part in _SEPARATORS.split(str(raw)):
            part = part.strip()
            if part:
                out.append(normalize_origin(part))
    return out


def origin_hostname(origin: str) -> str | None:
    try:
        hostname = URL(origin).hostname
    except ValueError:
        return None
    return hostname.lower() if hostname else None


class OriginPolicy:
    """Static part of the allow-set plus the trusted wildcard suffixes."""

    def __init__(self, static_origins: Iterable[str], trusted_suffixes: Iterable[str] = ()):
        self.static_origins = frozenset(static_origins)
        self.trusted_suffixes = tuple(s if s.startswith(".") else f".{s}" for s in trusted_suffixes)

    @classmethod
    def from_settings(cls, cfg: Settings) -> "OriginPolicy":
        static = normalize_origins(*DEFAULT_ORIGINS, *cfg.configured_origins, *cfg.deployment_origins)
        return cls(static, cfg.trusted_suffixes)

    def allowed_for_host(self, host: str | None) -> set[str]:
        """The allow-set for a request addressed to `host`."""
        allowed = set(self.static_origins)
        if host and host.strip():
            host = host.strip()
            allowed.add(normalize_origin(f"https://{host}"))
            allowed.add(normalize_origin(f"http://{host}"))
        return allowed

    def is_trusted_host(self, origin: str) -> bool:
        hostname = origin_hostname(origin)
        if not hostname:
            return False
        return any(hostname.endswith(suffix) for suffix in self.trusted_suffixes)

    def check(self, origin: str | None, host: str | None) -> None:
        """Raise OriginRejected unless `origin` may call the API."""
        if not origin:
            # non-browser caller
            return
        normalized = normalize_origin(origin)
        allowed = self.allowed_for_host(host)
        if normalized in allowed or self.is_trusted_host(normalized):
            return

        logger.warning(
            "Blocked CORS origin origin=%s allowed=%s",
            normalized,
            sorted(allowed),
        )
        raise OriginRejected()


class OriginGateMiddleware(BaseHTTPMiddleware):
    """Rejects requests from disallowed origins before they reach routing."""

    def __init__(self, app: ASGIApp, policy: OriginPolicy | None = None):
        super().__init__(app)
        self.policy = policy or OriginPolicy.from_settings(settings)

    async def dispatch(self, request: Request, call_next) -> Response:
        try:
            self.policy.check(request.headers.get("origin"), request.headers.get("host"))
        except OriginRejected as exc:
            return error_response(exc.status_code, exc.message)
        return await call_next(request)
