from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Mapping, overload
from urllib.parse import quote

from litestar import MediaType, Response
from litestar.exceptions import ImproperlyConfiguredException
from litestar.serialization import encode_json
from litestar.status_codes import HTTP_200_OK, HTTP_409_CONFLICT

from litestar_inertia._utils import get_headers
from litestar_inertia.context import get_request_context
from litestar_inertia.helpers import resolve_props
from litestar_inertia.request import InertiaDetails
from litestar_inertia.types import InertiaHeaderType, PageProps
from litestar_inertia.version import AssetVersion

if TYPE_CHECKING:
    from anyio.from_thread import BlockingPortal

    from litestar_inertia.types import InertiaRequestProtocol, JSONEncoder, TemplateRendererProtocol

__all__ = ("Inertia", "InertiaExternalRedirect")

logger = logging.getLogger("litestar_inertia")


class Inertia:
    """Render Inertia page responses.

    A single instance serves the whole application. Per request state (the current request and the shared props)
    is read from :mod:`litestar_inertia.context` at render time.
    """

    __slots__ = ("encoder", "portal", "root_template", "template_engine", "version")

    def __init__(
        self,
        template_engine: TemplateRendererProtocol | None = None,
        *,
        root_template: str = "index.html",
        version: AssetVersion | None = None,
        encoder: JSONEncoder = encode_json,
        portal: BlockingPortal | None = None,
    ) -> None:
        """Initialize :class:`Inertia`.

        Args:
            template_engine: Renders the root template for full page responses.
            root_template: Name of the root template.
            version: The current asset version. A new, unset version is used if not provided.
            encoder: Turns the page object into JSON bytes.
            portal: Optional portal used to run async deferred props.
        """
        self.template_engine = template_engine
        self.root_template = root_template
        self.version = version if version is not None else AssetVersion()
        self.encoder = encoder
        self.portal = portal

    @overload
    def share(self, key: str, value: Any) -> None: ...

    @overload
    def share(self, key: Mapping[str, Any]) -> None: ...

    def share(self, key: str | Mapping[str, Any], value: Any = None) -> None:
        """Share props with every response rendered for the current request."""
        get_request_context("share Inertia props").share(key, value)

    def get_shared_props(self) -> dict[str, Any]:
        return dict(get_request_context("read shared Inertia props").shared_props)

    def get_version(self) -> str | None:
        return self.version.value

    def set_version(self, version: str | None) -> None:
        """Override the asset version for every subsequent request."""
        self.version.override(version)

    def build_page(
        self,
        request: InertiaRequestProtocol,
        component: str,
        props: Mapping[str, Any] | None = None,
        shared_props: Mapping[str, Any] | None = None,
    ) -> PageProps:
        """Merge and resolve props into the page object for ``request``.

        Props given here override shared props of the same name; the key keeps the position it had in the shared
        props. A partial reload targeting ``component`` with a non-empty list of keys only resolves those keys.
        """
        details = InertiaDetails(request)
        all_props = {**(shared_props or {}), **(props or {})}
        only: list[str] | None = None
        if details.is_partial_render(component) and details.partial_keys:
            only = details.partial_keys
            logger.debug("Partial reload of %r with props %s", component, only)
        return PageProps(
            component=component,
            props=resolve_props(all_props, only=only, portal=self.portal),
            url=details.request_uri,
            version=str(self.version),
        )

    def render(self, component: str, props: Mapping[str, Any] | None = None) -> Response[Any]:
        """Render ``component`` for the current request.

        Inertia requests receive the page object as JSON, every other request receives the root template with the
        page object in its ``page`` context variable.

        Args:
            component: The client side page component.
            props: Props for this response.

        Raises:
            NoRequestContextError: If called outside of a request context.

        Returns:
            The response.
        """
        context = get_request_context()
        request = context.request
        page = self.build_page(request, component, props, context.shared_props)

        if InertiaDetails(request):
            return Response[Any](
                content=self.encoder(page.to_dict()),
                status_code=HTTP_200_OK,
                media_type=MediaType.JSON,
                headers=get_headers(InertiaHeaderType(enabled=True, vary=True)),
            )

        if self.template_engine is None:
            msg = "Template engine is not configured"
            raise ImproperlyConfiguredException(msg)
        return Response[Any](
            content=self.template_engine.render(self.root_template, {"page": page.to_dict()}),
            status_code=HTTP_200_OK,
            media_type=MediaType.HTML,
        )


class InertiaExternalRedirect(Response[Any]):
    """Client side redirect."""

    def __init__(self, redirect_to: str, **kwargs: Any) -> None:
        """Initialize external redirect, Set status code to 409 (required by Inertia),
        and pass redirect url.
        """
        super().__init__(
            content=kwargs.pop("content", b""),
            status_code=HTTP_409_CONFLICT,
            headers=get_headers(InertiaHeaderType(location=quote(redirect_to, safe="/#%[]=:;$&()+,!?*@'~"))),
            **kwargs,
        )
