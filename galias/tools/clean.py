from __future__ import annotations

from ..core import console as ui
from ..core import git, settings
from ..core.options import opt
from ..core.repo import Repo
from ..core.tool import ADVANCED, MAINTENANCE, Context, Tool
from ..core.util import plural


def deletable_branches(repo: Repo) -> list[str]:
    current = git.current_branch(repo)
    return [
        name
        for name in git.merged_branches(repo)
        if name != current and name not in settings.PROTECTED_BRANCHES
    ]


def step(ctx: Context, label: str, *args: str) -> bool:
    res = ctx.repo.git(*args, check=False)
    if res.ok:
        ui.success(ctx.console, label)
    else:
        ui.warn(ctx.console, f"{label} failed: {res.output}")
    return res.ok


def clean_branches(ctx: Context) -> None:
    names = deletable_branches(ctx.repo)
    if not names:
        ui.info(ctx.console, "🌿 No merged branches to delete", "green")
        return
    for name in names:
        step(ctx, f"Deleted merged branch {name}", "branch", "-d", name)


def prune_remote(ctx: Context) -> None:
    if git.has_remote(ctx.repo):
        step(ctx, f"Pruned stale {settings.DEFAULT_REMOTE} branches", "remote", "prune", settings.DEFAULT_REMOTE)


def report_counts(ctx: Context) -> None:
    merged = deletable_branches(ctx.repo)
    stashes = git.stash_list(ctx.repo)
    ui.field(ctx.console, "🌿 Merged branches:", len(merged), "yellow" if merged else "green")
    ui.field(ctx.console, "📦 Stashes:", len(stashes), "yellow" if stashes else "green")
    steps = []
    if merged:
        steps.append(("Delete merged branches", "gclean --branches"))
    if stashes:
        steps.append(("Review stashes", "gstash --list"))
    ui.next_steps(ctx.console, steps)


def run(ctx: Context) -> None:
    opts = ctx.opts
    ui.header(ctx.console, "🧹 Repository cleanup")
    if opts.all:
        clean_branches(ctx)
        prune_remote(ctx)
        step(ctx, "Aggressive garbage collection", "gc", "--aggressive", "--prune=now")
        return
    if opts.branches:
        clean_branches(ctx)
    if opts.gc:
        step(ctx, "Garbage collection", "gc", "--prune=now")
        step(ctx, "Repacked objects", "repack", "-ad")
    if opts.stash:
        stashes = git.stash_list(ctx.repo)
        ui.info(ctx.console, f"📦 {plural(len(stashes), 'stash', 'es')} stored", "cyan")
        if stashes:
            ui.hint(ctx.console, "Review them with gstash --list and drop old ones with git stash drop")
    if opts.branches or opts.gc or opts.stash:
        return
    prune_remote(ctx)
    step(ctx, "Garbage collection", "gc", "--prune=now")
    report_counts(ctx)


TOOL = Tool(
    name="gclean",
    summary="Delete merged branches, prune remotes and collect garbage",
    category=MAINTENANCE,
    tier=ADVANCED,
    handler=run,
    options=(
        opt("--branches", help="delete merged branches (protected ones are kept)"),
        opt("--gc", help="garbage collect and repack"),
        opt("--stash", help="report stored stashes"),
        opt("--all", help="branches, remote prune and aggressive gc"),
    ),
    examples=("gclean", "gclean --branches", "gclean --all"),
)
