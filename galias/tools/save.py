from __future__ import annotations

from datetime import datetime

from ..core import console as ui
from ..core import git
from ..core.errors import NothingToDo
from ..core.options import Positional, opt
from ..core.status import StatusReport
from ..core.tool import ADVANCED, COMMITS, Context, Tool
from ..core.util import join_tokens
from .common import message_for, push_current, stage_everything, summarize


def wip_message(branch: str) -> str:
    if "feature" in branch:
        return f"WIP: {branch} - ongoing development"
    if "fix" in branch:
        return f"WIP: {branch} - bug fixing in progress"
    return f"WIP: work in progress on {branch}"


def backup_message(branch: str, count: int, now: datetime | None = None) -> str:
    now = now or datetime.now()
    return f"Backup: {branch} - {now.strftime('%H:%M:%S')} ({count} files)"


def save_message(opts, report: StatusReport) -> str:
    custom = join_tokens(opts.message)
    if custom:
        return custom
    branch = report.branch or "HEAD"
    if opts.wip:
        return wip_message(branch)
    if opts.backup:
        return backup_message(branch, summarize(report, opts.staged).total)
    return message_for(report, staged_only=opts.staged)


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    report = git.status(repo)
    if report.clean and not opts.amend:
        raise NothingToDo("Nothing to save, working tree clean")
    if opts.staged and not report.has_staged and not opts.amend:
        raise NothingToDo("No staged changes to save", "Stage files with gadd, or drop --staged")

    ui.header(ctx.console, "💾 Saving work")
    summary = summarize(report, opts.staged)
    if summary.total:
        ui.field(ctx.console, "📊 Changes:", summary.describe() or "none")
    if summary.total or opts.wip or opts.backup:
        message = save_message(opts, report)
    else:
        message = join_tokens(opts.message)

    if not opts.staged and not report.clean:
        stage_everything(ctx)
    if opts.amend:
        if message:
            git.commit(repo, message, amend=True)
        else:
            repo.git("commit", "--amend", "--no-edit")
        ui.success(ctx.console, "Amended previous commit")
    else:
        sha = git.commit(repo, message)
        ui.success(ctx.console, f"Saved {sha[:7]}: {message}")

    if opts.push:
        push_current(ctx, report.branch)
    else:
        ui.next_steps(ctx.console, [("Share it", "gpush")])


TOOL = Tool(
    name="gsave",
    summary="Save a checkpoint commit (WIP, backup or generated message)",
    category=COMMITS,
    tier=ADVANCED,
    handler=run,
    positionals=(Positional("message", "*", help="commit message (generated when omitted)"),),
    options=(
        opt("--wip", help="work-in-progress message based on the branch"),
        opt("--backup", help="timestamped backup message"),
        opt("--push", help="push after saving"),
        opt("--amend", help="fold into the previous commit"),
        opt("--staged", help="save only what is already staged"),
    ),
    examples=("gsave", "gsave --wip", "gsave --backup --push", 'gsave "checkpoint before refactor"'),
)
