from __future__ import annotations

from ..core import console as ui
from ..core import git, settings
from ..core.errors import NothingToDo, UsageError
from ..core.options import Positional, opt
from ..core.tool import BASIC, COMMITS, Context, Tool
from ..core.util import join_tokens


def validate_message(message: str) -> str:
    message = message.strip()
    if not message:
        raise UsageError("Commit message is required", 'gcommit "Describe your change"')
    if len(message) < settings.MIN_MESSAGE_LENGTH:
        raise UsageError(
            f"Commit message must be at least {settings.MIN_MESSAGE_LENGTH} characters",
            "Describe what changed and why",
        )
    subject = message.splitlines()[0]
    if len(subject) > settings.MAX_SUBJECT_LENGTH:
        raise UsageError(
            f"First line is {len(subject)} characters (limit {settings.MAX_SUBJECT_LENGTH})",
            "Keep the subject short and put details in the body",
        )
    return message


def run(ctx: Context) -> None:
    repo = ctx.repo
    message = validate_message(join_tokens(ctx.opts.message))
    if not ctx.opts.amend and not git.staged_files(repo):
        raise NothingToDo("No staged changes to commit", "Stage files first with: gadd")
    sha = git.commit(repo, message, amend=ctx.opts.amend)
    verb = "Amended" if ctx.opts.amend else "Committed"
    ui.success(ctx.console, f"{verb} {sha[:7]}: {message.splitlines()[0]}")
    ui.next_steps(ctx.console, [("Push to remote", "gpush")])


TOOL = Tool(
    name="gcommit",
    summary="Commit staged changes with a validated message",
    category=COMMITS,
    tier=BASIC,
    handler=run,
    positionals=(Positional("message", "*", help="commit message"),),
    options=(opt("--amend", help="amend the previous commit"),),
    examples=('gcommit "Fix login redirect"', 'gcommit --amend "Better message"'),
)
