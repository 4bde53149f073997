from __future__ import annotations

from ..core import console as ui
from ..core import git
from ..core.options import Positional
from ..core.tool import BASIC, STAGING, Context, Tool
from ..core.util import plural


def run(ctx: Context) -> None:
    repo = ctx.repo
    if ctx.opts.files:
        git.stage(repo, ctx.opts.files)
        ui.success(ctx.console, f"Added {plural(len(ctx.opts.files), 'path')}")
    else:
        ui.info(ctx.console, "📦 Staging all changes...")
        git.stage_all(repo)
    staged = git.staged_files(repo)
    ui.info(ctx.console, f"📋 {plural(len(staged), 'file')} staged for commit", "green")
    ui.next_steps(ctx.console, [("Commit", 'gcommit "message"')] if staged else [])


TOOL = Tool(
    name="gadd",
    summary="Stage files, or everything when none are given",
    category=STAGING,
    tier=BASIC,
    handler=run,
    positionals=(Positional("files", "*", help="paths to stage"),),
    examples=("gadd", "gadd src/app.py README.md"),
)
