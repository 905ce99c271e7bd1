from __future__ import annotations

import inspect
from contextlib import contextmanager
from functools import singledispatch
from typing import TYPE_CHECKING, Any, Callable, Coroutine, Generic, Iterable, Iterator, Mapping, TypeVar, Union, cast

from anyio.from_thread import BlockingPortal, start_blocking_portal

if TYPE_CHECKING:
    from typing_extensions import TypeGuard

__all__ = (
    "DeferredProp",
    "is_deferred_prop",
    "lazy",
    "parse_partial_keys",
    "resolve_prop",
    "resolve_props",
)

T = TypeVar("T")

PropCallback = Callable[[], Union[T, Coroutine[Any, Any, T]]]


class DeferredProp(Generic[T]):
    """A page prop whose value is produced on demand.

    The callback is only invoked when the prop is selected for the response being built, either because the
    whole page is rendered or because a partial reload asked for its key.
    """

    __slots__ = ("_callback",)

    def __init__(self, callback: PropCallback[T]) -> None:
        if not callable(callback):
            msg = f"A deferred prop requires a callable, got {type(callback).__name__!r}."
            raise TypeError(msg)
        self._callback = callback

    @property
    def callback(self) -> PropCallback[T]:
        return self._callback

    @property
    def is_async(self) -> bool:
        return inspect.iscoroutinefunction(self._callback)

    @staticmethod
    @contextmanager
    def with_portal(portal: BlockingPortal | None = None) -> Iterator[BlockingPortal]:
        if portal is None:
            with start_blocking_portal() as p:
                yield p
        else:
            yield portal

    def render(self, portal: BlockingPortal | None = None) -> T:
        """Invoke the callback and return its value.

        Coroutine functions are run to completion on a blocking portal. Without ``portal`` a new portal thread is
        started for this call, and the caller blocks until the coroutine finishes.
        """
        if not self.is_async:
            return cast("T", self._callback())
        with self.with_portal(portal) as p:
            return cast("T", p.call(cast("Callable[[], Coroutine[Any, Any, T]]", self._callback)))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._callback!r})"


def lazy(callback: PropCallback[T]) -> DeferredProp[T]:
    """Wrap a zero argument callable so it is only evaluated when the prop is rendered.

    Args:
        callback: A sync or async callable returning the prop value.

    Returns:
        The deferred prop.

    Example::

        inertia.render("Users/Index", {"users": lazy(lambda: User.all())})
    """
    return DeferredProp[T](callback)


def is_deferred_prop(value: Any) -> TypeGuard[DeferredProp[Any]]:
    """Check if value is a deferred property."""
    return isinstance(value, DeferredProp)


@singledispatch
def resolve_prop(value: Any, portal: BlockingPortal | None = None) -> Any:
    """Return the concrete value of a prop.

    Concrete values are returned as they are.
    """
    return value


@resolve_prop.register(DeferredProp)
def _resolve_deferred_prop(value: DeferredProp[Any], portal: BlockingPortal | None = None) -> Any:
    return value.render(portal)


def resolve_props(
    props: Mapping[str, Any],
    only: Iterable[str] | None = None,
    portal: BlockingPortal | None = None,
) -> dict[str, Any]:
    """Resolve a mapping of props, keeping insertion order.

    Async deferred props share one portal. Without ``portal`` it is only started when a selected prop needs it.

    Args:
        props: The merged page props.
        only: Keys to keep. ``None`` or an empty collection keeps every prop.
        portal: Optional portal used to run async deferred props.

    Returns:
        A new dict holding only concrete values.
    """
    selected = set(only or ())
    chosen = {key: value for key, value in props.items() if not selected or key in selected}
    if portal is None and any(is_deferred_prop(value) and value.is_async for value in chosen.values()):
        with DeferredProp.with_portal() as shared_portal:
            return {key: resolve_prop(value, shared_portal) for key, value in chosen.items()}
    return {key: resolve_prop(value, portal) for key, value in chosen.items()}


def parse_partial_keys(partial_data: str | None) -> list[str]:
    """Split the comma separated ``X-Inertia-Partial-Data`` header into prop keys.

    Whitespace around each key is trimmed and empty entries are dropped.
    """
    if not partial_data:
        return []
    return [key for key in (part.strip() for part in partial_data.split(",")) if key]
