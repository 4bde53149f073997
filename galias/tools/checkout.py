from __future__ import annotations

from ..core import console as ui
from ..core import git, settings
from ..core.errors import NothingToDo, UsageError
from ..core.options import Positional, opt
from ..core.tool import BASIC, BRANCHES, Context, Tool


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    if opts.list:
        ui.header(ctx.console, "🌿 Available branches")
        ui.raw(ctx.console, repo.git("branch", "-v").stdout)
        return

    target = opts.create or opts.branch
    if not target:
        raise UsageError("Branch name required", "gcheckout <branch>  or  gcheckout -b <new-branch>")

    current = git.current_branch(repo)
    if not opts.create and target == current:
        raise NothingToDo(f"Already on branch {target}")

    if not opts.create and not opts.force and git.has_changes(repo):
        raise UsageError(
            "You have uncommitted changes",
            "Commit with gcommit, stash with gstash, or use --force",
        )

    if opts.create:
        if git.branch_exists(repo, target):
            raise UsageError(f"Branch {target} already exists", f"Switch to it with: gcheckout {target}")
        args = ["checkout", "-b", target]
    else:
        if not git.ref_exists(repo, target) and not git.ref_exists(repo, f"{settings.DEFAULT_REMOTE}/{target}"):
            raise UsageError(f"Branch {target} does not exist", f"Create it with: gcheckout -b {target}")
        args = ["checkout", target]
    if opts.force:
        args.insert(1, "--force")

    repo.git(*args)
    verb = "Created and switched to" if opts.create else "Switched to"
    ui.success(ctx.console, f"{verb} {target}")
    if current:
        ui.info(ctx.console, f"   (was on {current})", "dim")


TOOL = Tool(
    name="gcheckout",
    summary="Switch branches safely, or create a new one",
    category=BRANCHES,
    tier=BASIC,
    handler=run,
    positionals=(Positional("branch", "?", help="branch to switch to"),),
    options=(
        opt("-b", dest="create", arity=1, metavar="NEW", help="create and switch to a new branch"),
        opt("--list", help="list branches with their last commit"),
        opt("-f", "--force", help="switch even with uncommitted changes"),
    ),
    examples=("gcheckout main", "gcheckout -b feature/login", "gcheckout --list"),
)
