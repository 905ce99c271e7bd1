"""Litestar-Inertia exception classes."""

__all__ = [
    "LitestarInertiaError",
    "ManifestNotFoundError",
    "NoRequestContextError",
]


class LitestarInertiaError(Exception):
    """Base exception for Litestar-Inertia related errors."""


class NoRequestContextError(LitestarInertiaError, RuntimeError):
    """Raised when request scoped Inertia state is used outside of a request."""

    def __init__(self, operation: str = "render an Inertia response") -> None:
        super().__init__(f"Cannot {operation} outside of a request context.")


class ManifestNotFoundError(LitestarInertiaError):
    """Raised when the asset manifest used to compute the version is not found."""

    def __init__(self, manifest_path: str) -> None:
        super().__init__(f"Asset manifest file not found at {manifest_path!r}. Did you forget to build your assets?")
