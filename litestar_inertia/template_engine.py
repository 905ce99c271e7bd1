from __future__ import annotations

from typing import TYPE_CHECKING, Any, Mapping

import markupsafe
from litestar.contrib.jinja import JinjaTemplateEngine
from litestar.serialization import encode_json

if TYPE_CHECKING:
    from pathlib import Path

    from jinja2 import Environment

    from litestar_inertia.types import JSONEncoder


class InertiaTemplateEngine(JinjaTemplateEngine):
    """Jinja Template Engine with Inertia Integration."""

    def __init__(
        self,
        directory: Path | list[Path] | None = None,
        engine_instance: Environment | None = None,
        root_element_id: str = "app",
        encoder: JSONEncoder = encode_json,
    ) -> None:
        """Jinja2 based TemplateEngine.

        Args:
            directory: Direct path or list of directory paths from which to serve templates.
            engine_instance: A jinja Environment instance.
            root_element_id: ``id`` of the element the client side application mounts on.
            encoder: Turns the page object into JSON bytes.
        """
        super().__init__(directory=directory, engine_instance=engine_instance)
        self.root_element_id = root_element_id
        self.encoder = encoder
        self.engine.globals.update({"inertia": self.get_root_element})  # pyright: ignore[reportCallIssue,reportArgumentType]

    def get_root_element(self, page: Mapping[str, Any], element_id: str | None = None) -> markupsafe.Markup:
        """Generate the element the client side application mounts on.

        The page object is serialized into the ``data-page`` attribute.

        Arguments:
            page: The page object passed to the root template.
            element_id: Override the configured element ``id``.

        Returns:
            str: The ``div`` tag.
        """
        data = self.encoder(page).decode()
        return markupsafe.Markup('<div id="{}" data-page="{}"></div>').format(
            element_id or self.root_element_id,
            data,
        )

    def render(self, template_name: str, context: Mapping[str, Any]) -> str:
        return self.get_template(template_name).render(**context)

    @classmethod
    def from_environment(cls, jinja_environment: Environment, root_element_id: str = "app") -> InertiaTemplateEngine:  # type: ignore[override]
        """Create an InertiaTemplateEngine from an existing jinja Environment instance.

        Args:
            jinja_environment (jinja2.environment.Environment): A jinja Environment instance.
            root_element_id: ``id`` of the element the client side application mounts on.

        Returns:
            InertiaTemplateEngine instance
        """
        return cls(directory=None, engine_instance=jinja_environment, root_element_id=root_element_id)
