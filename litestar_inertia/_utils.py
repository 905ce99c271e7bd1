from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any, Callable

if TYPE_CHECKING:
    from litestar_inertia.types import InertiaHeaderType


class InertiaHeaders(str, Enum):
    """Enum for Inertia Headers"""

    ENABLED = "X-Inertia"
    VERSION = "X-Inertia-Version"
    PARTIAL_DATA = "X-Inertia-Partial-Data"
    PARTIAL_COMPONENT = "X-Inertia-Partial-Component"
    LOCATION = "X-Inertia-Location"
    VARY = "Vary"


def get_enabled_header(enabled: bool = True) -> dict[str, Any]:
    """Mark a response as an Inertia page object."""
    return {InertiaHeaders.ENABLED.value: "true" if enabled else "false"}


def get_vary_header(vary: bool = True) -> dict[str, Any]:
    """Ask caches to key responses on the Inertia marker header."""
    return {InertiaHeaders.VARY.value: InertiaHeaders.ENABLED.value} if vary else {}


def get_location_header(location: str) -> dict[str, Any]:
    """Return headers for a forced client side reload."""
    return {InertiaHeaders.LOCATION.value: location}


_HEADER_BUILDERS: dict[str, Callable[[Any], dict[str, Any]]] = {
    "enabled": get_enabled_header,
    "vary": get_vary_header,
    "location": get_location_header,
}


def get_headers(inertia_headers: InertiaHeaderType) -> dict[str, Any]:
    """Build the response headers for ``inertia_headers``. Entries set to ``None`` are skipped."""
    if not inertia_headers:
        msg = "Value for inertia_headers cannot be None."
        raise ValueError(msg)
    headers: dict[str, Any] = {}
    for key, value in inertia_headers.items():
        if value is not None:
            headers.update(_HEADER_BUILDERS[key](value))
    return headers
