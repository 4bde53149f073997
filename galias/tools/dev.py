from __future__ import annotations

from ..core import console as ui
from ..core import git, settings
from ..core.errors import UsageError
from ..core.options import Positional, opt
from ..core.tool import ADVANCED, WORKFLOW, Context, Tool
from ..core.util import plural
from .clean import prune_remote, step
from .status import render_changes, render_sync

_PREFIXES = (
    (("feature-", "feat-"), "feature/"),
    (("fix-", "bugfix-"), "bugfix/"),
    (("hotfix-",), "hotfix/"),
)


def normalize_branch_name(name: str) -> str:
    """feature-login -> feature/login, fix-crash -> bugfix/crash, login -> feature/login."""
    name = name.strip()
    if "/" in name:
        return name
    for prefixes, folder in _PREFIXES:
        for prefix in prefixes:
            if name.startswith(prefix) and len(name) > len(prefix):
                return folder + name[len(prefix):]
    return f"feature/{name}"


def overview(ctx: Context) -> None:
    repo = ctx.repo
    ui.header(ctx.console, "🚀 Development session")
    report = git.status(repo)
    render_sync(ctx.console, report)
    render_changes(ctx.console, report)
    stashes = git.stash_list(repo)
    if stashes:
        ui.info(ctx.console, f"📦 {plural(len(stashes), 'stash', 'es')} saved", "cyan")
    res = repo.git("log", "--oneline", "-n", "3", check=False)
    if res.ok and res.stdout:
        ctx.console.print()
        ui.info(ctx.console, "📜 Recent commits:", "bold blue")
        for line in res.lines:
            ui.bullet(ctx.console, line)


def continue_session(ctx: Context) -> None:
    if git.stash_list(ctx.repo):
        ctx.repo.git("stash", "pop")
        ui.success(ctx.console, "Restored stashed work")
    overview(ctx)


def sync_with_main(ctx: Context) -> None:
    repo = ctx.repo
    branch = git.current_branch(repo)
    main = git.main_branch(repo)
    if not main:
        raise UsageError("No main or master branch found")
    stashed = git.has_changes(repo)
    if stashed:
        git.stash_push(repo, f"gdev sync on {branch}", include_untracked=True)
    if git.has_remote(repo):
        repo.git("fetch", settings.DEFAULT_REMOTE)
    if branch != main:
        repo.git("checkout", main)
    if git.has_remote(repo):
        repo.git("pull", settings.DEFAULT_REMOTE, main)
    if branch and branch != main:
        repo.git("checkout", branch)
    if stashed:
        repo.git("stash", "pop")
    ui.success(ctx.console, f"Synced {main}{f' and returned to {branch}' if branch and branch != main else ''}")


def start_branch(ctx: Context, raw_name: str) -> None:
    repo = ctx.repo
    name = normalize_branch_name(raw_name)
    if git.branch_exists(repo, name):
        repo.git("checkout", name)
        ui.success(ctx.console, f"Switched to existing branch {name}")
        return
    repo.git("checkout", "-b", name)
    ui.success(ctx.console, f"Created and switched to {name}")
    ui.next_steps(ctx.console, [("Save progress", "gsave"), ("Push the branch", "gpush --upstream")])


def run(ctx: Context) -> None:
    opts = ctx.opts
    if opts.resume:
        continue_session(ctx)
    elif opts.sync:
        sync_with_main(ctx)
    elif opts.clean:
        prune_remote(ctx)
        step(ctx, "Garbage collection", "gc", "--prune=now")
    elif opts.branch:
        start_branch(ctx, opts.branch)
    else:
        overview(ctx)


TOOL = Tool(
    name="gdev",
    summary="Start, resume and sync a development session",
    category=WORKFLOW,
    tier=ADVANCED,
    handler=run,
    positionals=(Positional("branch", "?", help="branch to start, e.g. feature-login"),),
    options=(
        opt("--continue", dest="resume", help="restore stashed work and show the overview"),
        opt("--sync", help="update main and return to the current branch"),
        opt("--clean", help="prune remote branches and collect garbage"),
    ),
    examples=("gdev", "gdev feature-login", "gdev --sync", "gdev --continue"),
)
