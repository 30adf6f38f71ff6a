"""
URL and domain helpers for banner records and link extraction.
"""

from __future__ import annotations

from urllib import parse

_LOOPBACK_HOSTS = frozenset(["localhost", "127.0.0.1"])


def extract_domain(url: str) -> str:
    """Extract the hostname from a URL string.

    Loopback hosts keep their port (``localhost:8080``) so that
    several local test sites are kept apart when de-duplicating
    banners by domain.
    """
    try:
        parsed = parse.urlparse(url)
        hostname = parsed.hostname
        if not hostname:
            return "unknown"
        if hostname in _LOOPBACK_HOSTS and parsed.port:
            return f"{hostname}:{parsed.port}"
        return hostname
    except ValueError:
        return "unknown"


def resolve_href(base_url: str, href: str) -> str:
    """Resolve *href* against the page URL the way ``a.href`` does.

    Returns an empty string for an empty *href*; malformed input is
    returned unchanged.
    """
    if not href:
        return ""
    try:
        return parse.urljoin(base_url, href)
    except ValueError:
        return href
