from __future__ import annotations

from ..core import console as ui
from ..core import git
from ..core.errors import NothingToDo
from ..core.options import Positional, opt
from ..core.tool import ADVANCED, COMMITS, Context, Tool
from ..core.util import join_tokens
from .common import message_for, push_current, stage_everything


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    report = git.status(repo)
    if opts.staged and not report.has_staged:
        raise NothingToDo("No staged changes to commit", "Stage files with gadd, or drop --staged")
    if report.clean:
        raise NothingToDo("No changes to commit")

    message = join_tokens(opts.message) or message_for(report, staged_only=opts.staged)
    if not opts.staged:
        stage_everything(ctx)
    sha = git.commit(repo, message)
    ui.success(ctx.console, f"Committed {sha[:7]}: {message}")
    if opts.push:
        push_current(ctx, report.branch)


TOOL = Tool(
    name="gquick",
    summary="Stage everything and commit in one step",
    category=COMMITS,
    tier=ADVANCED,
    handler=run,
    positionals=(Positional("message", "*", help="commit message (generated when omitted)"),),
    options=(
        opt("--staged", help="commit only what is already staged"),
        opt("--push", help="push after committing"),
    ),
    examples=("gquick", 'gquick "Fix typo in README"', "gquick --push"),
)
