"""site_research.utils: URL helpers shared by the config and the link filter."""

from __future__ import annotations

from typing import Sequence
from urllib.parse import urlparse

__all__: Sequence[str] = ("host_of",)

_DEFAULT_PORTS = {"http": 80, "https": 443}


def host_of(url: str) -> str:
    """Comparable host of *url*: lower-cased hostname, plus ``:port`` only when it is not the scheme default.

    Userinfo is ignored. Returns ``""`` when *url* cannot be parsed.
    """
    try:
        parsed = urlparse(url)
        host = parsed.hostname or ""
        port = parsed.port
    except ValueError:
        return ""
    if ":" in host:
        host = f"[{host}]"
    if port is None or port == _DEFAULT_PORTS.get(parsed.scheme):
        return host
    return f"{host}:{port}"
