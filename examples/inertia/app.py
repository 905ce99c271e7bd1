"""Inertia example - one set of route handlers serving both full page loads and Inertia visits.

Run with ``litestar --app examples.inertia.app:app run`` and check the asset version with
``litestar --app examples.inertia.app:app inertia version``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from litestar import Litestar, Request, Response, get, put
from litestar.response import Redirect
from litestar.status_codes import HTTP_302_FOUND

from litestar_inertia import Inertia, InertiaConfig, InertiaPlugin, lazy, share

here = Path(__file__).parent

USERS = {1: {"id": 1, "name": "Alice"}, 2: {"id": 2, "name": "Bob"}}


def share_auth(request: Request[Any, Any, Any]) -> None:
    """Share the signed in user with every page."""
    share("auth", {"user": request.headers.get("x-user", "guest")})


@get("/", sync_to_thread=False)
def index(inertia: Inertia) -> Response[Any]:
    """Serve the home page."""
    return inertia.render("Home", {"message": "Welcome to Inertia!"})


@get("/users", sync_to_thread=False)
def list_users(inertia: Inertia) -> Response[Any]:
    """Serve the user list. The statistics are only computed when requested."""
    return inertia.render(
        "Users/Index",
        {
            "users": list(USERS.values()),
            "stats": lazy(lambda: {"count": len(USERS)}),
        },
    )


@put("/users/{user_id:int}", sync_to_thread=False)
def update_user(user_id: int) -> Redirect:
    """Update a user and go back to the list."""
    USERS[user_id]["name"] = USERS[user_id]["name"].title()
    return Redirect(path="/users", status_code=HTTP_302_FOUND)


inertia = InertiaPlugin(config=InertiaConfig(template_dir=here / "templates", version="1.0"))

app = Litestar(
    route_handlers=[index, list_users, update_user],
    plugins=[inertia],
    before_request=share_auth,
    debug=True,
)
