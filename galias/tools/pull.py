from __future__ import annotations

from ..core import console as ui
from ..core import git
from ..core.options import opt
from ..core.tool import BASIC, REMOTES, Context, Tool
from .status import render_status


def pull(ctx: Context, rebase: bool = False) -> None:
    args = ["pull"]
    if rebase:
        args.append("--rebase")
    res = ctx.repo.git(*args)
    if "Already up to date" in res.stdout:
        ui.success(ctx.console, "Already up to date")
    else:
        ui.raw(ctx.console, res.stdout)
        ui.success(ctx.console, "Pulled latest changes")


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    if opts.force:
        ui.warn(ctx.console, "Discarding local changes (reset --hard HEAD)")
        repo.git("reset", "--hard", "HEAD")
    ui.info(ctx.console, "⬇️  Pulling from remote...")
    pull(ctx, opts.rebase)
    if opts.status or not (opts.force or opts.rebase):
        ctx.console.print()
        render_status(ctx.console, git.status(repo))


TOOL = Tool(
    name="gpull",
    summary="Pull remote changes and show the resulting status",
    category=REMOTES,
    tier=BASIC,
    handler=run,
    options=(
        opt("--force", help="discard local changes before pulling"),
        opt("--rebase", help="rebase instead of merge"),
        opt("--status", help="show status after pulling"),
    ),
    examples=("gpull", "gpull --rebase", "gpull --force"),
)
