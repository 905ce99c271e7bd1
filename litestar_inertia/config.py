from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

__all__ = ("InertiaConfig",)


@dataclass
class InertiaConfig:
    """Configuration for InertiaJS support.

    To enable Inertia integration, pass an :class:`InertiaPlugin <litestar_inertia.plugin.InertiaPlugin>` built
    from this class to the :class:`Litestar <litestar.app.Litestar>` constructor using the 'plugins' key.
    """

    root_template: str = field(default_factory=lambda: os.getenv("INERTIA_ROOT_TEMPLATE", "index.html"))
    """Name of the root template to use.

    This must be a path that is found in ``template_dir``.
    """
    template_dir: Path | str | None = field(default="templates")
    """Location of the Jinja2 template files.

    When ``None``, no template engine is configured and only Inertia (JSON) visits can be answered.
    """
    version: str | None = field(default_factory=lambda: os.getenv("INERTIA_VERSION") or None)
    """The asset version sent to the client.

    Clients built against another version are told to reload the page.
    """
    manifest_path: Path | str | None = None
    """Optionally derive the asset version from the hash of a build manifest.

    Only used when ``version`` is not set.
    """
    root_element_id: str = "app"
    """The ``id`` of the element rendered by the ``inertia()`` template function."""
    dependency_key: str = "inertia"
    """Name of the dependency that provides the :class:`Inertia <litestar_inertia.response.Inertia>` instance."""

    def __post_init__(self) -> None:
        if self.template_dir is not None and isinstance(self.template_dir, str):
            self.template_dir = Path(self.template_dir)
        if self.manifest_path is not None and isinstance(self.manifest_path, str):
            self.manifest_path = Path(self.manifest_path)
