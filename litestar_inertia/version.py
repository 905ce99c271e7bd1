from __future__ import annotations

import hashlib
import logging
import threading
from pathlib import Path

from litestar_inertia.exceptions import ManifestNotFoundError

__all__ = ("AssetVersion",)

logger = logging.getLogger("litestar_inertia")


class AssetVersion:
    """The version of the deployed client assets.

    Set once at startup and read by every request. :meth:`override` is the only way to change it afterwards.
    """

    __slots__ = ("_lock", "_value")

    def __init__(self, value: str | None = None) -> None:
        self._lock = threading.Lock()
        self._value = value

    @classmethod
    def from_manifest(cls, manifest_path: Path | str) -> AssetVersion:
        """Use the SHA-256 digest of a build manifest as the version.

        Raises:
            ManifestNotFoundError: If the manifest does not exist.
        """
        path = Path(manifest_path)
        if not path.is_file():
            raise ManifestNotFoundError(str(path))
        return cls(hashlib.sha256(path.read_bytes()).hexdigest())

    @property
    def value(self) -> str | None:
        return self._value

    def override(self, value: str | None) -> None:
        with self._lock:
            previous, self._value = self._value, value
        logger.info("Inertia asset version changed from %r to %r", previous, value)

    def matches(self, client_version: str | None) -> bool:
        """Compare a client supplied version with this one. A missing value on either side is an empty string."""
        return (client_version or "") == str(self)

    def __str__(self) -> str:
        return self._value or ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._value!r})"
