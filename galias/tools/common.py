"""Helpers shared by the tools that stage, commit and push in one go."""

from __future__ import annotations

from ..core import console as ui
from ..core import git, settings
from ..core.status import ChangeSummary, StatusReport, auto_message


def stage_everything(ctx) -> None:
    ui.warn(ctx.console, "Staging all changes (git add -A)")
    git.stage_all(ctx.repo)


def summarize(report: StatusReport, staged_only: bool = False) -> ChangeSummary:
    return ChangeSummary.from_entries(report.entries, staged_only=staged_only)


def message_for(report: StatusReport, staged_only: bool = False) -> str:
    return auto_message(summarize(report, staged_only))


def push_current(ctx, branch: str | None) -> bool:
    """Push the branch, setting the upstream on first push. Failure only warns."""
    repo = ctx.repo
    ui.info(ctx.console, "⬆️  Pushing to remote...")
    if repo.git("push", check=False).ok:
        ui.success(ctx.console, "Pushed to remote")
        return True
    if branch:
        res = repo.git("push", "-u", settings.DEFAULT_REMOTE, branch, check=False)
        if res.ok:
            ui.success(ctx.console, f"Pushed and set upstream {settings.DEFAULT_REMOTE}/{branch}")
            return True
        ui.warn(ctx.console, f"Push failed: {res.output}")
    else:
        ui.warn(ctx.console, "Push failed: not on a branch")
    ui.hint(ctx.console, "Your commit is saved locally. Push later with: gpush")
    return False
