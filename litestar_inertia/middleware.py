from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, TypeVar

from litestar.enums import ScopeType
from litestar.middleware import AbstractMiddleware
from litestar.status_codes import HTTP_302_FOUND, HTTP_303_SEE_OTHER

from litestar_inertia.context import request_context
from litestar_inertia.request import InertiaDetails, InertiaRequest
from litestar_inertia.response import InertiaExternalRedirect

if TYPE_CHECKING:
    from litestar.types import ASGIApp, Message, Receive, Scope, Send

    from litestar_inertia.types import InertiaRequestProtocol, InertiaResponseProtocol
    from litestar_inertia.version import AssetVersion

__all__ = ("InertiaMiddleware", "ProtocolGuard")

logger = logging.getLogger("litestar_inertia")

ResponseT = TypeVar("ResponseT", bound="InertiaResponseProtocol")

SEE_OTHER_METHODS = frozenset({"PUT", "PATCH", "DELETE"})


class ProtocolGuard:
    """Enforce the Inertia protocol on requests entering and responses leaving the application."""

    __slots__ = ("version",)

    def __init__(self, version: AssetVersion) -> None:
        self.version = version

    def on_request(self, request: InertiaRequestProtocol) -> InertiaExternalRedirect | None:
        """Return a 409 response when an Inertia visit was made with stale assets.

        Only ``GET`` visits are checked. The response tells the client to reload the current URL.
        """
        details = InertiaDetails(request)
        if not details or request.method.upper() != "GET":
            return None
        if self.version.matches(details.version):
            return None
        location = str(request.url)
        logger.debug(
            "Inertia asset version mismatch (client %r, server %r), reloading %s",
            details.version,
            str(self.version),
            location,
        )
        return InertiaExternalRedirect(location)

    def redirect_status_code(self, request: InertiaRequestProtocol, status_code: int) -> int:
        """Turn a 302 answering an Inertia ``PUT``, ``PATCH`` or ``DELETE`` into a 303.

        Clients replay a 302 with the original method, a 303 makes them follow up with a ``GET``.
        """
        if (
            status_code == HTTP_302_FOUND
            and request.method.upper() in SEE_OTHER_METHODS
            and InertiaDetails(request)
        ):
            logger.debug("Rewriting 302 to 303 for Inertia %s %s", request.method, request.url)
            return HTTP_303_SEE_OTHER
        return status_code

    def on_response(self, request: InertiaRequestProtocol, response: ResponseT) -> ResponseT:
        response.status_code = self.redirect_status_code(request, response.status_code)
        return response


class InertiaMiddleware(AbstractMiddleware):
    """Middleware for handling Inertia.js protocol requirements.

    This middleware:
    1. Returns 409 Conflict with an X-Inertia-Location header when client and server asset versions differ
    2. Makes the request available to :class:`~litestar_inertia.response.Inertia` while the handler runs
    3. Rewrites 302 redirects answering Inertia PUT, PATCH and DELETE requests to 303
    """

    scopes = {ScopeType.HTTP}

    def __init__(self, app: ASGIApp, guard: ProtocolGuard, **kwargs: Any) -> None:
        super().__init__(app, **kwargs)
        self.guard = guard

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        request: InertiaRequest[Any, Any, Any] = InertiaRequest(scope=scope, receive=receive)
        conflict = self.guard.on_request(request)
        if conflict is not None:
            response = conflict.to_asgi_response(app=None, request=request)
            await response(scope, receive, send)
            return

        async def send_wrapper(message: Message) -> None:
            if message["type"] == "http.response.start":
                message["status"] = self.guard.redirect_status_code(request, message["status"])
            await send(message)

        with request_context(request):
            await self.app(scope, receive, send_wrapper)
