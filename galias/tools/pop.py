from __future__ import annotations

from ..core import console as ui
from ..core import git
from ..core.errors import ErrorKind, GitCommandError, NothingToDo
from ..core.options import Positional, opt
from ..core.tool import BASIC, HISTORY, Context, Tool


def stash_ref(value: str | None) -> str | None:
    if value is None:
        return None
    if value.isdigit():
        return f"stash@{{{value}}}"
    return value


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    stashes = git.stash_list(repo)
    if not stashes:
        raise NothingToDo("No stashes found", "Save work in progress with: gstash")

    if opts.list:
        ui.header(ctx.console, f"📦 Stashes ({len(stashes)})")
        for line in stashes:
            ui.bullet(ctx.console, line, style="white")
        return

    ref = stash_ref(opts.stash)
    if opts.preview:
        ui.header(ctx.console, f"🔍 Preview of {ref or 'stash@{0}'}")
        ui.raw(ctx.console, repo.git("stash", "show", "-p", *([ref] if ref else [])).stdout)
        return

    if git.has_changes(repo):
        ui.warn(ctx.console, "You have uncommitted changes; the stash will be merged on top of them")

    verb = "apply" if opts.keep else "pop"
    try:
        repo.git("stash", verb, *([ref] if ref else []))
    except GitCommandError as exc:
        if exc.kind is ErrorKind.MERGE_CONFLICT:
            exc.hint = "Resolve the conflicts, then gadd the files. The stash was kept"
        raise
    if opts.keep:
        ui.success(ctx.console, f"Applied {ref or 'latest stash'} (kept in stash list)")
    else:
        ui.success(ctx.console, f"Restored {ref or 'latest stash'}")
    ui.next_steps(ctx.console, [("Review changes", "gstatus")])


TOOL = Tool(
    name="gpop",
    summary="Restore stashed work",
    category=HISTORY,
    tier=BASIC,
    handler=run,
    positionals=(Positional("stash", "?", help="stash@{n} or index n"),),
    options=(
        opt("--list", help="list stashes"),
        opt("--preview", help="show the stash diff without applying"),
        opt("--keep", help="apply but keep the stash"),
    ),
    examples=("gpop", "gpop 1", "gpop --preview", "gpop --keep"),
)
