from __future__ import annotations

import os

from ..core import console as ui
from ..core import git
from ..core.errors import NothingToDo, UsageError
from ..core.options import Positional
from ..core.tool import ADVANCED, WORKFLOW, Context, Tool
from .commit import validate_message
from .common import push_current, stage_everything


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    if not opts.message:
        raise UsageError("Commit message required", 'gflow "message" [files...]')
    message = validate_message(opts.message)

    ui.header(ctx.console, "🌊 Add, commit, push")
    if opts.files:
        present = [f for f in opts.files if os.path.exists(os.path.join(ctx.cwd, f)) or git.is_tracked(repo, f)]
        for missing in sorted(set(opts.files) - set(present)):
            ui.warn(ctx.console, f"Skipping missing file: {missing}")
        if not present:
            raise UsageError("None of the given files exist")
        git.stage(repo, present)
        ui.success(ctx.console, f"Staged {len(present)} file(s)")
    else:
        if not git.has_changes(repo):
            raise NothingToDo("No changes to commit")
        stage_everything(ctx)

    if not git.staged_files(repo):
        raise NothingToDo("Nothing staged after adding files")
    sha = git.commit(repo, message)
    ui.success(ctx.console, f"Committed {sha[:7]}: {message}")
    push_current(ctx, git.current_branch(repo))


TOOL = Tool(
    name="gflow",
    summary="Add, commit and push in one command",
    category=WORKFLOW,
    tier=ADVANCED,
    handler=run,
    positionals=(
        Positional("message", "?", help="commit message"),
        Positional("files", "*", help="files to stage (default: all changes)"),
    ),
    examples=('gflow "Add login page"', 'gflow "Fix header" src/header.py'),
)
