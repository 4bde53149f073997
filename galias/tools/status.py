from __future__ import annotations

from rich.console import Console

from ..core import console as ui
from ..core import git
from ..core.status import StatusReport
from ..core.tool import BASIC, STAGING, Context, Tool
from ..core.util import plural

_STAGED_MARKS = {"added": "+", "modified": "~", "deleted": "-", "staged": "•"}


def render_sync(console: Console, report: StatusReport) -> None:
    if report.detached:
        ui.field(console, "🌿 Branch:", "(detached HEAD)", "bold yellow")
        return
    ui.field(console, "🌿 Branch:", report.branch or "(unknown)", "bold green")
    if not report.upstream:
        ui.info(console, "📡 No upstream branch set", "dim")
        return
    ui.field(console, "📡 Tracking:", report.upstream, "cyan")
    if report.gone:
        ui.warn(console, f"Upstream {report.upstream} no longer exists")
    if report.ahead:
        ui.info(console, f"⬆️  Ahead by {plural(report.ahead, 'commit')}", "yellow")
    if report.behind:
        ui.info(console, f"⬇️  Behind by {plural(report.behind, 'commit')}", "yellow")
    if not report.ahead and not report.behind and not report.gone:
        ui.info(console, f"✅ Up to date with {report.upstream}", "green")


def render_changes(console: Console, report: StatusReport) -> None:
    if report.clean:
        ui.info(console, "✨ Working tree clean", "green")
        return
    staged = [f"{_STAGED_MARKS.get(kind, '•')} {path}" for path, kind in report.staged]
    ui.listing(console, "✅ Staged", staged, "green")
    ui.listing(console, "🔄 Renamed", report.renamed, "green")
    ui.listing(console, "⚔️  Conflicted", report.conflicted, "bold red")
    ui.listing(console, "📝 Modified", report.modified, "yellow")
    ui.listing(console, "🗑️  Deleted", report.deleted, "red")
    ui.listing(console, "❓ Untracked", report.untracked, "magenta")


def suggestions(report: StatusReport) -> list[tuple[str, str]]:
    steps = []
    if report.conflicted:
        steps.append(("Resolve conflicts", "gfix --conflicts"))
    if report.has_unstaged:
        steps.append(("Stage changes", "gadd"))
    if report.has_staged:
        steps.append(("Commit staged changes", 'gcommit "message"'))
    if report.ahead:
        steps.append(("Push commits", "gpush"))
    if report.behind:
        steps.append(("Pull changes", "gpull"))
    return steps


def render_status(console: Console, report: StatusReport) -> None:
    ui.header(console, "📊 Repository Status")
    render_sync(console, report)
    console.print()
    render_changes(console, report)
    ui.next_steps(console, suggestions(report))


def run(ctx: Context) -> None:
    render_status(ctx.console, git.status(ctx.repo))


TOOL = Tool(
    name="gstatus",
    summary="Show branch, sync state and categorized changes",
    category=STAGING,
    tier=BASIC,
    handler=run,
    examples=("gstatus",),
)
