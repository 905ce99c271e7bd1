from __future__ import annotations

from litestar_inertia._utils import InertiaHeaders
from litestar_inertia.config import InertiaConfig
from litestar_inertia.context import get_current_request, get_shared_props, request_context, share
from litestar_inertia.exceptions import LitestarInertiaError, ManifestNotFoundError, NoRequestContextError
from litestar_inertia.helpers import DeferredProp, lazy
from litestar_inertia.middleware import InertiaMiddleware, ProtocolGuard
from litestar_inertia.plugin import InertiaPlugin
from litestar_inertia.request import InertiaDetails, InertiaRequest
from litestar_inertia.response import Inertia, InertiaExternalRedirect
from litestar_inertia.types import PageProps
from litestar_inertia.version import AssetVersion

__all__ = (
    "AssetVersion",
    "DeferredProp",
    "Inertia",
    "InertiaConfig",
    "InertiaDetails",
    "InertiaExternalRedirect",
    "InertiaHeaders",
    "InertiaMiddleware",
    "InertiaPlugin",
    "InertiaRequest",
    "LitestarInertiaError",
    "ManifestNotFoundError",
    "NoRequestContextError",
    "PageProps",
    "ProtocolGuard",
    "get_current_request",
    "get_shared_props",
    "lazy",
    "request_context",
    "share",
)
