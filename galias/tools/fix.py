from __future__ import annotations

from ..core import console as ui
from ..core import git, settings
from ..core.errors import NothingToDo, UsageError
from ..core.options import Positional, opt
from ..core.tool import ADVANCED, COMMITS, Context, Tool
from ..core.util import join_tokens, timestamp
from .common import stage_everything


def hotfix(ctx: Context, message: str) -> None:
    repo = ctx.repo
    name = f"{settings.HOTFIX_PREFIX}-{timestamp()}"
    repo.git("checkout", "-b", name)
    ui.success(ctx.console, f"Created hotfix branch {name}")
    if git.has_changes(repo):
        stage_everything(ctx)
        git.commit(repo, f"HOTFIX: {message or 'urgent fix'}")
        ui.success(ctx.console, "Committed hotfix changes")
    ui.next_steps(ctx.console, [("Push the hotfix", "gpush --upstream")])


def amend(ctx: Context, message: str) -> None:
    repo = ctx.repo
    if not git.has_commits(repo):
        raise UsageError("No commit to amend yet")
    if git.has_changes(repo):
        stage_everything(ctx)
    if message:
        repo.git("commit", "--amend", "-m", message)
    else:
        repo.git("commit", "--amend", "--no-edit")
    ui.success(ctx.console, "Amended the last commit")
    ui.hint(ctx.console, "If it was already pushed you will need: gpush --force")


def resolve_conflicts(ctx: Context) -> None:
    report = git.status(ctx.repo)
    if not report.conflicted:
        raise NothingToDo("No merge conflicts found")
    ui.listing(ctx.console, "⚔️  Conflicted files", report.conflicted, "bold red")
    ui.info(ctx.console, "🔧 Opening merge tool...")
    ctx.repo.git("mergetool", interactive=True)
    ui.next_steps(ctx.console, [("Commit the resolution", 'gcommit "Resolve merge conflicts"')])


def diagnose(ctx: Context) -> None:
    repo = ctx.repo
    ui.header(ctx.console, "🩺 Repository diagnostics")
    report = git.status(repo)
    steps = []
    if report.detached:
        ui.warn(ctx.console, "Detached HEAD")
        steps.append(("Get back on a branch", "gcheckout -b <name>"))
    if report.conflicted:
        ui.warn(ctx.console, f"{len(report.conflicted)} conflicted file(s)")
        steps.append(("Resolve conflicts", "gfix --conflicts"))
    if report.behind:
        ui.warn(ctx.console, f"Behind upstream by {report.behind}")
        steps.append(("Update", "gpull"))
    if not report.clean:
        ui.info(ctx.console, f"📝 {len(report.entries)} uncommitted change(s)", "yellow")
        steps.append(("Commit them as a fix", 'gfix "what you fixed"'))
    if git.has_commits(repo):
        last = repo.git("log", "-1", "--pretty=%h %s").stdout
        ui.field(ctx.console, "📜 Last commit:", last)
        steps.append(("Fix the last message", "gfix --typo"))
    if not steps:
        ui.success(ctx.console, "No problems found")
    ui.next_steps(ctx.console, steps)


def run(ctx: Context) -> None:
    opts = ctx.opts
    message = join_tokens(opts.message)
    if opts.hotfix:
        hotfix(ctx, message)
    elif opts.amend:
        amend(ctx, message)
    elif opts.conflicts:
        resolve_conflicts(ctx)
    elif opts.typo:
        ctx.repo.git("commit", "--amend", interactive=True)
        ui.success(ctx.console, "Commit message updated")
    elif message:
        if not git.has_changes(ctx.repo):
            raise NothingToDo("No changes to commit as a fix")
        stage_everything(ctx)
        sha = git.commit(ctx.repo, f"Fix: {message}")
        ui.success(ctx.console, f"Committed {sha[:7]}: Fix: {message}")
    else:
        diagnose(ctx)


TOOL = Tool(
    name="gfix",
    summary="Quick fixes: amend, hotfix branch, conflicts, message typos",
    category=COMMITS,
    tier=ADVANCED,
    handler=run,
    positionals=(Positional("message", "*", help="fix description"),),
    options=(
        opt("--hotfix", help="create a hotfix branch and commit pending changes"),
        opt("--amend", help="fold pending changes into the last commit"),
        opt("--conflicts", help="open the merge tool on conflicted files"),
        opt("--typo", help="edit the last commit message"),
    ),
    examples=("gfix", 'gfix "null check in parser"', "gfix --amend", "gfix --hotfix"),
)
