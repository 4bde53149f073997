from __future__ import annotations

from ..core import console as ui
from ..core import git
from ..core.errors import NothingToDo
from ..core.options import Positional, opt
from ..core.tool import BASIC, HISTORY, Context, Tool
from ..core.util import clock, join_tokens, plural


def default_message(branch: str | None) -> str:
    return f"WIP on {branch or 'HEAD'} at {clock()}"


def list_stashes(ctx: Context) -> None:
    repo = ctx.repo
    stashes = git.stash_list(repo)
    if not stashes:
        raise NothingToDo("No stashes found", "Save work in progress with: gstash")
    ui.header(ctx.console, f"📦 Stashes ({len(stashes)})")
    for i, line in enumerate(stashes):
        files = repo.git("stash", "show", "--name-only", f"stash@{{{i}}}", check=False).lines
        ui.bullet(ctx.console, f"{line} ({plural(len(files), 'file')})", style="white")


def stash_args(opts, message: str) -> list[str]:
    args = ["stash", "push", "-m", message]
    if opts.include_untracked:
        args.append("--include-untracked")
    if opts.keep_index:
        args.append("--keep-index")
    if opts.partial:
        args.append("--patch")
    return args


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    if opts.list:
        list_stashes(ctx)
        return
    report = git.status(repo)
    if report.clean:
        raise NothingToDo("No changes to stash")

    ui.header(ctx.console, "📦 Stashing changes")
    ui.field(ctx.console, "Staged:", len(report.staged) + len(report.renamed), "green")
    ui.field(ctx.console, "Modified:", len(report.modified) + len(report.deleted), "yellow")
    ui.field(ctx.console, "Untracked:", len(report.untracked), "magenta")
    if report.untracked and not opts.include_untracked:
        ui.hint(ctx.console, "Untracked files stay in place. Use -u to stash them too")

    message = join_tokens(opts.message) or default_message(report.branch)
    repo.git(*stash_args(opts, message), interactive=opts.partial)
    ui.success(ctx.console, f"Stashed: {message}")
    ui.next_steps(ctx.console, [("Restore later", "gpop"), ("See all stashes", "gstash --list")])


TOOL = Tool(
    name="gstash",
    summary="Stash work in progress with a descriptive message",
    category=HISTORY,
    tier=BASIC,
    handler=run,
    positionals=(Positional("message", "*", help="stash message"),),
    options=(
        opt("--list", help="list stashes with file counts"),
        opt("-u", "--include-untracked", dest="include_untracked", help="stash untracked files too"),
        opt("--keep-index", dest="keep_index", help="keep staged changes in place"),
        opt("--partial", help="choose hunks interactively"),
    ),
    examples=("gstash", 'gstash "halfway through refactor"', "gstash -u", "gstash --list"),
)
