from __future__ import annotations

from ..core import console as ui
from ..core import git
from ..core.options import opt
from ..core.tool import ADVANCED, REMOTES, Context, Tool
from .pull import pull
from .status import render_status


def run(ctx: Context) -> None:
    ui.info(ctx.console, "🔄 Syncing with remote...")
    pull(ctx, ctx.opts.rebase)
    ctx.console.print()
    render_status(ctx.console, git.status(ctx.repo))


TOOL = Tool(
    name="gsync",
    summary="Pull and show the resulting status",
    category=REMOTES,
    tier=ADVANCED,
    handler=run,
    options=(opt("--rebase", help="rebase instead of merge"),),
    examples=("gsync", "gsync --rebase"),
)
