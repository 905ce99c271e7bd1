from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from litestar.di import Provide
from litestar.middleware import DefineMiddleware
from litestar.plugins import CLIPlugin, InitPluginProtocol
from litestar.template.config import TemplateConfig

from litestar_inertia.config import InertiaConfig
from litestar_inertia.middleware import InertiaMiddleware, ProtocolGuard
from litestar_inertia.request import InertiaRequest
from litestar_inertia.response import Inertia
from litestar_inertia.version import AssetVersion

if TYPE_CHECKING:
    from click import Group
    from litestar.config.app import AppConfig

    from litestar_inertia.template_engine import InertiaTemplateEngine

logger = logging.getLogger("litestar_inertia")


class InertiaPlugin(InitPluginProtocol, CLIPlugin):
    """Inertia plugin."""

    __slots__ = ("_config", "_guard", "_inertia", "_template_engine", "_version")

    def __init__(self, config: InertiaConfig | None = None) -> None:
        """Initialize ``Inertia``.

        Args:
            config: configuration to use for Inertia.  The default configuration will be used if it is not provided.
        """
        if config is None:
            config = InertiaConfig()
        self._config = config
        self._version = self._create_version(config)
        self._template_engine = self._create_template_engine(config)
        self._inertia = Inertia(
            self._template_engine,
            root_template=config.root_template,
            version=self._version,
        )
        self._guard = ProtocolGuard(self._version)

    @staticmethod
    def _create_version(config: InertiaConfig) -> AssetVersion:
        if config.version is None and config.manifest_path is not None:
            return AssetVersion.from_manifest(config.manifest_path)
        return AssetVersion(config.version)

    @staticmethod
    def _create_template_engine(config: InertiaConfig) -> InertiaTemplateEngine | None:
        if config.template_dir is None:
            return None
        from litestar_inertia.template_engine import InertiaTemplateEngine

        return InertiaTemplateEngine(directory=config.template_dir, root_element_id=config.root_element_id)  # type: ignore[arg-type]

    @property
    def config(self) -> InertiaConfig:
        return self._config

    @property
    def inertia(self) -> Inertia:
        return self._inertia

    @property
    def guard(self) -> ProtocolGuard:
        return self._guard

    @property
    def version(self) -> AssetVersion:
        return self._version

    @property
    def template_engine(self) -> InertiaTemplateEngine | None:
        return self._template_engine

    def _provide_inertia(self) -> Inertia:
        return self._inertia

    def on_cli_init(self, cli: Group) -> None:
        from litestar_inertia.cli import inertia_group

        cli.add_command(inertia_group)

    def on_app_init(self, app_config: AppConfig) -> AppConfig:
        """Configure application for use with Inertia.

        Args:
            app_config: The :class:`AppConfig <.config.app.AppConfig>` instance.
        """
        app_config.middleware.append(DefineMiddleware(InertiaMiddleware, guard=self._guard))
        app_config.request_class = InertiaRequest
        app_config.dependencies[self._config.dependency_key] = Provide(self._provide_inertia, sync_to_thread=False)
        if self._template_engine is not None and app_config.template_config is None:
            app_config.template_config = TemplateConfig(instance=self._template_engine)
        app_config.state.update({"inertia": self._inertia})
        logger.debug("Inertia configured with asset version %r", self._version.value)
        return app_config
