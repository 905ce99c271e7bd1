from __future__ import annotations

from typing import TYPE_CHECKING

from click import Context, group, pass_context

if TYPE_CHECKING:
    from litestar.cli._utils import LitestarEnv


@group(name="inertia")
def inertia_group() -> None:
    """Manage Inertia."""


@inertia_group.command(name="version", help="Show the asset version sent to Inertia clients.")
@pass_context
def inertia_version(ctx: Context) -> None:
    """Print the current asset version."""
    from litestar.cli._utils import console

    from litestar_inertia.plugin import InertiaPlugin

    if callable(ctx.obj):
        ctx.obj = ctx.obj()
    env: LitestarEnv = ctx.obj
    plugin = env.app.plugins.get(InertiaPlugin)
    version = plugin.version.value
    if version is None:
        console.print("[yellow]No Inertia asset version is configured.[/]")
        return
    console.print(version, markup=False, highlight=False)
