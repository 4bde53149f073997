from __future__ import annotations

import time
from typing import Optional

from ..core import console as ui
from ..core import git, settings
from ..core.options import opt
from ..core.repo import Repo
from ..core.tool import ADVANCED, HISTORY, Context, Tool
from ..core.util import plural, timestamp
from .common import stage_everything

DAY = 24 * 60 * 60


def backup_name(label: str, stamp: str | None = None) -> str:
    return f"{settings.BACKUP_PREFIX}-{label}-{stamp or timestamp()}"


def commit_pending(ctx: Context, message: str) -> None:
    if git.has_changes(ctx.repo):
        stage_everything(ctx)
        git.commit(ctx.repo, f"Backup commit: {message}")
        ui.info(ctx.console, "📝 Committed pending changes before backup", "dim")


def branch_backup(ctx: Context, name: str, message: str) -> str:
    commit_pending(ctx, message)
    ctx.repo.git("branch", name)
    ui.success(ctx.console, f"Branch backup: {name}")
    return name


def tag_backup(ctx: Context, name: str, message: str) -> str:
    commit_pending(ctx, message)
    ctx.repo.git("tag", "-a", name, "-m", message)
    ui.success(ctx.console, f"Tag backup: {name}")
    return name


def stash_backup(ctx: Context, name: str) -> Optional[str]:
    if not git.has_changes(ctx.repo):
        ui.info(ctx.console, "No uncommitted changes to stash", "dim")
        return None
    git.stash_push(ctx.repo, name)
    ui.success(ctx.console, f"Stash backup: {name}")
    return name


def remote_backup(ctx: Context, name: str) -> None:
    res = ctx.repo.git("push", settings.DEFAULT_REMOTE, name, check=False)
    if res.ok:
        ui.success(ctx.console, f"Pushed {name} to {settings.DEFAULT_REMOTE}")
    else:
        ui.warn(ctx.console, f"Remote backup failed: {res.output}")


def backup_refs(repo: Repo, kind: str) -> list[tuple[str, int]]:
    """(name, committer unix time) for backup branches or tags."""
    res = repo.git(
        "for-each-ref",
        "--format=%(refname:short) %(committerdate:unix)",
        f"refs/{kind}/{settings.BACKUP_PREFIX}*",
    )
    refs = []
    for line in res.lines:
        name, _, stamp = line.partition(" ")
        refs.append((name, int(stamp) if stamp.isdigit() else 0))
    return refs


def list_backups(ctx: Context) -> None:
    repo = ctx.repo
    ui.header(ctx.console, "🗄️  Backups")
    branches = [name for name, _ in backup_refs(repo, "heads")]
    tags = [name for name, _ in backup_refs(repo, "tags")]
    stashes = [line for line in git.stash_list(repo) if settings.BACKUP_PREFIX in line]
    ui.listing(ctx.console, "🌿 Branches", branches, "green")
    ui.listing(ctx.console, "🏷️  Tags", tags, "yellow")
    ui.listing(ctx.console, "📦 Stashes", stashes, "cyan")
    if not (branches or tags or stashes):
        ui.info(ctx.console, "No backups found", "dim")


def stale_backups(refs: list[tuple[str, int]], now: float, max_age_days: int = settings.BACKUP_MAX_AGE_DAYS) -> list[str]:
    cutoff = now - max_age_days * DAY
    return [name for name, stamp in refs if stamp and stamp < cutoff]


def cleanup_backups(ctx: Context) -> None:
    stale = stale_backups(backup_refs(ctx.repo, "heads"), time.time())
    if not stale:
        ui.success(ctx.console, f"No backup branches older than {settings.BACKUP_MAX_AGE_DAYS} days")
        return
    for name in stale:
        ctx.repo.git("branch", "-D", name)
        ui.bullet(ctx.console, f"deleted {name}")
    ui.success(ctx.console, f"Removed {plural(len(stale), 'old backup branch', 'es')}")


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    if opts.list:
        list_backups(ctx)
        return
    if opts.cleanup:
        cleanup_backups(ctx)
        return

    branch = git.head_ref(repo)
    name = backup_name(opts.name or branch)
    message = opts.message or f"Backup of {branch}"
    ui.header(ctx.console, "🗄️  Creating backup")
    ui.field(ctx.console, "Name:", name, "green")

    do_branch = opts.branch or opts.all or not (opts.tag or opts.stash or opts.remote)
    if do_branch:
        branch_backup(ctx, name, message)
    if opts.tag or opts.all:
        tag_backup(ctx, f"{name}-tag" if do_branch else name, message)
    if opts.stash or opts.all:
        stash_backup(ctx, name)
    if opts.remote or opts.all:
        if not do_branch:
            branch_backup(ctx, name, message)
        remote_backup(ctx, name)
    ui.next_steps(ctx.console, [("See backups", "gbackup --list")])


TOOL = Tool(
    name="gbackup",
    summary="Create, list and clean up backup branches, tags and stashes",
    category=HISTORY,
    tier=ADVANCED,
    handler=run,
    options=(
        opt("--branch", help="backup as a branch (default)"),
        opt("--tag", help="backup as an annotated tag"),
        opt("--stash", help="backup uncommitted changes as a stash"),
        opt("--remote", help="push the backup branch to origin"),
        opt("--all", help="branch, tag, stash and remote backups"),
        opt("--list", help="list existing backups"),
        opt("--cleanup", help=f"delete backup branches older than {settings.BACKUP_MAX_AGE_DAYS} days"),
        opt("--name", arity=1, help="label used in the backup name"),
        opt("--message", arity=1, help="backup description"),
    ),
    examples=("gbackup", "gbackup --tag --name before-upgrade", "gbackup --list", "gbackup --cleanup"),
)
