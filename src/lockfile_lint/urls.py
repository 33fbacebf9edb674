"""URL inspection helpers shared by the URL-shape validators."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import unquote, urlsplit

# Shortcut names accepted in place of registry hostnames
REGISTRY: dict[str, str] = {
    "npm": "registry.npmjs.org",
    "yarn": "registry.yarnpkg.com",
    "verdaccio": "registry.verdaccio.org",
}

PUBLIC_REGISTRY_HOSTS = frozenset({REGISTRY["npm"], REGISTRY["yarn"]})


@dataclass(frozen=True)
class ParsedUrl:
    scheme: str
    host: str
    path: str


def parse_url(value: str) -> ParsedUrl | None:
    """Return the scheme/host/path of ``value``, or None when it is unparseable.

    A URL is unparseable when it has no scheme or an invalid netloc/port.
    Hosts are lowercased and include the port when one is given.
    """
    try:
        parts = urlsplit(value.strip())
        port = parts.port
    except ValueError:
        return None
    if not parts.scheme:
        return None

    host = parts.hostname or ""
    if host and port is not None:
        host = f"{host}:{port}"
    return ParsedUrl(scheme=parts.scheme.lower(), host=host, path=parts.path)


def normalise_scheme(scheme: str) -> str:
    """Normalise ``"https:"`` / ``"HTTPS"`` style values to ``"https"``."""
    return scheme.strip().rstrip(":").lower()


def expand_hosts(hosts: tuple[str, ...]) -> set[str]:
    """Expand registry shortcuts and lowercase each allowed host."""
    return {REGISTRY.get(host, host).strip().lower() for host in hosts}


def registry_package_name(url: ParsedUrl) -> str | None:
    """Return the package name encoded in a public registry tarball URL.

    ``/@scope/name/-/name-1.0.0.tgz`` yields ``@scope/name``.
    """
    if url.host not in PUBLIC_REGISTRY_HOSTS:
        return None
    head, sep, _ = url.path.partition("/-/")
    if not sep:
        return None
    name = unquote(head.lstrip("/"))
    return name or None
