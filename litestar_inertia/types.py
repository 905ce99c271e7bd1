from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Mapping, MutableMapping, Protocol, TypedDict, runtime_checkable

__all__ = (
    "InertiaHeaderType",
    "InertiaRequestProtocol",
    "InertiaResponseProtocol",
    "JSONEncoder",
    "PageProps",
    "TemplateRendererProtocol",
    "URLProtocol",
)


@dataclass
class PageProps:
    """Inertia Page Props Type.

    Field order is the wire order of the page object.
    """

    component: str
    props: dict[str, Any] = field(default_factory=dict)
    url: str = "/"
    version: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {"component": self.component, "props": self.props, "url": self.url, "version": self.version}


class InertiaHeaderType(TypedDict, total=False):
    """Type for inertia_headers parameter in get_headers()."""

    enabled: bool | None
    vary: bool | None
    location: str | None


class URLProtocol(Protocol):
    """The parts of a request URL the Inertia core reads.

    ``str(url)`` must return the absolute URL.
    """

    @property
    def path(self) -> str: ...

    @property
    def query(self) -> str: ...


@runtime_checkable
class InertiaRequestProtocol(Protocol):
    """Minimal request capabilities needed by :class:`~litestar_inertia.response.Inertia`.

    :class:`litestar.Request` satisfies this protocol. ``headers`` lookups must be case-insensitive.
    """

    @property
    def method(self) -> str: ...

    @property
    def headers(self) -> Mapping[str, str]: ...

    @property
    def url(self) -> URLProtocol: ...


class InertiaResponseProtocol(Protocol):
    """Minimal response capabilities needed by the protocol guard."""

    status_code: int
    headers: MutableMapping[str, Any]


class TemplateRendererProtocol(Protocol):
    """Anything that renders a named template with a context into a string."""

    def render(self, template_name: str, context: Mapping[str, Any]) -> str: ...


JSONEncoder = Callable[[Any], bytes]
"""Signature of the page encoder: a value in, JSON bytes out."""
