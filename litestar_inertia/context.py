"""Request scoped Inertia state.

The active request and the props shared during its handling live on a :class:`~contextvars.ContextVar`, so
concurrent requests served by the same worker never observe each other's shared props.
"""

from __future__ import annotations

from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Iterator, Mapping, overload

from litestar_inertia.exceptions import NoRequestContextError

if TYPE_CHECKING:
    from litestar_inertia.types import InertiaRequestProtocol

__all__ = (
    "RequestContext",
    "get_current_request",
    "get_request_context",
    "get_shared_props",
    "request_context",
    "share",
)

_request_context: ContextVar[RequestContext | None] = ContextVar("litestar_inertia_request_context", default=None)


@dataclass
class RequestContext:
    """The request being handled and the props shared while handling it."""

    request: InertiaRequestProtocol
    shared_props: dict[str, Any] = field(default_factory=dict)

    def share(self, key: str | Mapping[str, Any], value: Any = None) -> None:
        if isinstance(key, Mapping):
            self.shared_props.update(key)
        else:
            self.shared_props[key] = value


@contextmanager
def request_context(request: InertiaRequestProtocol) -> Iterator[RequestContext]:
    """Make ``request`` the current request, with empty shared props, for the duration of the block."""
    context = RequestContext(request=request)
    token = _request_context.set(context)
    try:
        yield context
    finally:
        _request_context.reset(token)


def get_request_context(operation: str = "access the Inertia request context") -> RequestContext:
    context = _request_context.get()
    if context is None:
        raise NoRequestContextError(operation)
    return context


def get_current_request() -> InertiaRequestProtocol:
    """Return the request currently being handled.

    Raises:
        NoRequestContextError: If called outside of :func:`request_context`.
    """
    return get_request_context("read the current request").request


@overload
def share(key: str, value: Any) -> None: ...


@overload
def share(key: Mapping[str, Any]) -> None: ...


def share(key: str | Mapping[str, Any], value: Any = None) -> None:
    """Share props with every Inertia response rendered for the current request.

    Args:
        key: A prop name, or a mapping of prop names to values.
        value: The value to share when ``key`` is a name. May be a deferred prop.
    """
    get_request_context("share Inertia props").share(key, value)


def get_shared_props() -> dict[str, Any]:
    """Return a copy of the props shared for the current request."""
    return dict(get_request_context("read shared Inertia props").shared_props)
