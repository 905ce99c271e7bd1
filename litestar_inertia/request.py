from __future__ import annotations

from functools import cached_property
from typing import TYPE_CHECKING
from urllib.parse import unquote

from litestar import Request
from litestar.connection.base import (
    AuthT,
    StateT,
    UserT,
    empty_receive,
    empty_send,
)

from litestar_inertia._utils import InertiaHeaders
from litestar_inertia.helpers import parse_partial_keys

__all__ = ("InertiaDetails", "InertiaRequest", "get_request_uri")


if TYPE_CHECKING:
    from litestar.types import Receive, Scope, Send

    from litestar_inertia.types import InertiaRequestProtocol


def get_request_uri(request: InertiaRequestProtocol) -> str:
    """Return the request target: path and query string, without scheme or host."""
    url = request.url
    return f"{url.path}?{url.query}" if url.query else url.path


class InertiaDetails:
    """InertiaDetails holds all the values sent by Inertia client in headers and provide convenient properties."""

    def __init__(self, request: InertiaRequestProtocol) -> None:
        """Initialize :class:`InertiaDetails`"""
        self.request = request

    def _get_header_value(self, name: InertiaHeaders) -> str | None:
        """Parse request header

        Check for uri encoded header and unquotes it in readable format.
        """

        if value := self.request.headers.get(name.value.lower()):
            is_uri_encoded = self.request.headers.get(f"{name.value.lower()}-uri-autoencoded") == "true"
            return unquote(value) if is_uri_encoded else value
        return None

    def __bool__(self) -> bool:
        """Check if request is sent by an Inertia client.

        Only the literal value ``true`` (any case) marks an Inertia visit, other values are full page loads.
        """
        return (self._get_header_value(InertiaHeaders.ENABLED) or "").lower() == "true"

    @cached_property
    def version(self) -> str:
        """Asset version the client was built with. Empty when the header is missing."""
        return self._get_header_value(InertiaHeaders.VERSION) or ""

    @cached_property
    def partial_component(self) -> str | None:
        """Component targeted by a partial reload."""
        return self._get_header_value(InertiaHeaders.PARTIAL_COMPONENT)

    @cached_property
    def partial_data(self) -> str | None:
        """Raw comma separated prop keys requested by a partial reload."""
        return self._get_header_value(InertiaHeaders.PARTIAL_DATA)

    @cached_property
    def partial_keys(self) -> list[str]:
        return parse_partial_keys(self.partial_data)

    def is_partial_render(self, component: str) -> bool:
        """Whether a partial reload targets ``component``."""
        return self.partial_component is not None and self.partial_component == component

    @cached_property
    def request_uri(self) -> str:
        return get_request_uri(self.request)


class InertiaRequest(Request[UserT, AuthT, StateT]):
    """Inertia Request class to work with Inertia client."""

    __slots__ = ("_inertia",)

    def __init__(self, scope: Scope, receive: Receive = empty_receive, send: Send = empty_send) -> None:
        """Initialize :class:`InertiaRequest`"""
        super().__init__(scope=scope, receive=receive, send=send)
        self._inertia = InertiaDetails(self)

    @property
    def inertia(self) -> InertiaDetails:
        return self._inertia

    @property
    def is_inertia(self) -> bool:
        """Whether the request was sent by an Inertia client."""
        return bool(self._inertia)
