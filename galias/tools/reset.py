from __future__ import annotations

from ..core import console as ui
from ..core import git, settings
from ..core.errors import UsageError
from ..core.options import Positional, opt
from ..core.tool import BASIC, HISTORY, Context, Tool


def mode_of(opts) -> str:
    if opts.hard:
        return "hard"
    if opts.soft:
        return "soft"
    return "mixed"


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    target = opts.target or "HEAD"
    mode = mode_of(opts)

    if opts.target and git.is_tracked(repo, target) and not git.ref_exists(repo, target):
        repo.git("reset", "-q", "HEAD", "--", target)
        ui.success(ctx.console, f"Unstaged {target}")
        return

    if not git.ref_exists(repo, target):
        raise UsageError(f"Invalid reference: {target}", "Check it with: glog  or  gbranch -a")

    if mode == "hard":
        report = git.status(repo)
        if not report.clean and not opts.force:
            ui.warn(ctx.console, "Hard reset would discard these uncommitted changes:")
            for entry in report.entries[: settings.PREVIEW_LIMIT]:
                ui.bullet(ctx.console, entry.display, style="yellow")
            if len(report.entries) > settings.PREVIEW_LIMIT:
                ui.bullet(ctx.console, f"... and {len(report.entries) - settings.PREVIEW_LIMIT} more")
            raise UsageError("Refusing to discard uncommitted changes", "Stash them with gstash, or rerun with --force")

    before = git.short_sha(repo)
    repo.git("reset", f"--{mode}", target)
    after = git.short_sha(repo)
    ui.success(ctx.console, f"Reset ({mode}) to {target}")
    if before and after and before != after:
        ui.info(ctx.console, f"   HEAD moved {before} -> {after}", "dim")
    if mode == "soft":
        ui.hint(ctx.console, "Changes are still staged. Recommit with: gcommit")


TOOL = Tool(
    name="greset",
    summary="Move HEAD, or unstage a file",
    category=HISTORY,
    tier=BASIC,
    handler=run,
    positionals=(Positional("target", "?", help="commit, branch or file (default HEAD)"),),
    options=(
        opt("--soft", help="keep changes staged"),
        opt("--mixed", help="keep changes unstaged (default)"),
        opt("--hard", help="discard all changes"),
        opt("--force", help="allow --hard with uncommitted changes"),
    ),
    examples=("greset", "greset HEAD~1 --soft", "greset src/app.py", "greset --hard origin/main"),
)
