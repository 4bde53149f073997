from __future__ import annotations

from ..core import console as ui
from ..core import git, settings
from ..core.errors import UsageError
from ..core.options import opt
from ..core.repo import Repo
from ..core.tool import ADVANCED, WORKFLOW, Context, Tool
from ..core.util import timestamp


def reset_target(repo: Repo) -> str:
    for ref in ("@{upstream}", f"{settings.DEFAULT_REMOTE}/HEAD"):
        if git.ref_exists(repo, ref):
            return ref
    raise UsageError("No upstream or origin/HEAD to reset to", "Set an upstream with: gpush --upstream")


def hard_reset(ctx: Context) -> None:
    repo = ctx.repo
    target = reset_target(repo)
    backup = f"{settings.FRESH_BACKUP_PREFIX}-{timestamp()}"
    repo.git("branch", backup)
    ui.success(ctx.console, f"Saved current state as {backup}")
    if git.has_remote(repo):
        repo.git("fetch", settings.DEFAULT_REMOTE)
    repo.git("reset", "--hard", target)
    ui.success(ctx.console, f"Reset to {target}")
    ui.hint(ctx.console, f"Uncommitted changes were discarded. Committed work is on {backup}")


def clean_untracked(ctx: Context) -> None:
    res = ctx.repo.git("clean", "-fd")
    removed = res.lines
    ui.success(ctx.console, f"Removed {len(removed)} untracked path(s)")


def refresh(ctx: Context) -> None:
    repo = ctx.repo
    if git.has_changes(repo):
        # untracked files must be stashed too, clean -fd runs next
        git.stash_push(repo, f"gfresh {timestamp()}", include_untracked=True)
        ui.success(ctx.console, "Stashed local changes (restore with gpop)")
    repo.git("pull")
    ui.success(ctx.console, "Pulled latest changes")
    clean_untracked(ctx)


def run(ctx: Context) -> None:
    opts = ctx.opts
    ui.header(ctx.console, "🌱 Fresh start")
    if opts.hard:
        hard_reset(ctx)
    elif opts.clean:
        clean_untracked(ctx)
    else:
        refresh(ctx)


TOOL = Tool(
    name="gfresh",
    summary="Get back to a clean, up to date working tree",
    category=WORKFLOW,
    tier=ADVANCED,
    handler=run,
    options=(
        opt("--hard", help="back up the branch, then hard reset to upstream"),
        opt("--clean", help="only remove untracked files"),
    ),
    examples=("gfresh", "gfresh --clean", "gfresh --hard"),
)
