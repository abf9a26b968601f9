"""
Route validation

The route is the public URL of a deployment (config/common/route). It must be
a bare origin: a scheme and a host, with no port and no path.
"""

from typing import Optional, Tuple
from urllib.parse import SplitResult, urlsplit

from hostdeploy.exceptions import (
    HasPathError,
    HasPortError,
    InvalidURIError,
    MissingHostError,
    MissingSchemeError,
    NotHttpsError,
)


def _parse(uri: str) -> SplitResult:
    if any(c.isspace() for c in uri):
        raise InvalidURIError(uri)
    try:
        parts = urlsplit(uri)
    except ValueError:
        raise InvalidURIError(uri)
    # Any digits are a port (reported later as HasPort); anything else is malformed
    _, port = _split_authority(parts.netloc)
    if port is not None and not (port.isascii() and port.isdigit()):
        raise InvalidURIError(uri)
    return parts


def _split_authority(netloc: str) -> Tuple[str, Optional[str]]:
    """Split an authority into (host, port) keeping the host's case as written."""
    hostport = netloc.rpartition("@")[2]
    if hostport.startswith("["):
        end = hostport.find("]")
        host, rest = hostport[: end + 1], hostport[end + 1 :]
        port = rest[1:] if rest.startswith(":") else None
    else:
        host, sep, port = hostport.partition(":")
        port = port if sep else None
    return host, port or None


def validate_route(uri: str, must_be_https: bool) -> str:
    """
    Validate a route and return its host.

    Checks run in order: scheme, path, port, host. When https is not
    required any scheme is accepted.

    Raises:
        InvalidRouteError: One of its subclasses naming the violated rule
    """
    parts = _parse(uri)

    if not parts.scheme:
        raise MissingSchemeError(uri)
    if must_be_https and parts.scheme != "https":
        raise NotHttpsError(uri)

    if any(segment for segment in parts.path.split("/")):
        raise HasPathError(uri)

    host, port = _split_authority(parts.netloc)
    if port is not None:
        raise HasPortError(uri)
    if not host:
        raise MissingHostError(uri)
    return host


def get_host_from_route(must_be_https: bool, route: str) -> str:
    """Strip the route text and validate it, returning the canonical host."""
    return validate_route(route.strip(), must_be_https)
