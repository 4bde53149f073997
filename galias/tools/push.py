from __future__ import annotations

from ..core import console as ui
from ..core import git
from ..core.errors import ErrorKind, GaliasError, NothingToDo, UsageError
from ..core.options import Positional, opt
from ..core.tool import BASIC, REMOTES, Context, Tool
from ..core.util import plural


class NoUpstreamError(GaliasError):
    kind = ErrorKind.NO_UPSTREAM


def push_args(opts, remote: str, branch: str, set_upstream: bool) -> list[str]:
    args = ["push"]
    if opts.force:
        args.append("--force-with-lease")
    if set_upstream:
        args += ["-u", remote, branch]
    elif opts.remote:
        args.append(remote)
        if opts.branch:
            args.append(branch)
    return args


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    report = git.status(repo)
    branch = opts.branch or report.branch
    if report.detached or not branch:
        raise UsageError("Cannot push from a detached HEAD", "Create a branch first: gcheckout -b <name>")
    remote = opts.remote or git.branch_remote(repo, branch)

    ui.field(ctx.console, "🌿 Branch:", branch, "green")
    ui.field(ctx.console, "📡 Remote:", remote, "cyan")

    if not report.upstream and not opts.upstream and not opts.remote:
        raise NoUpstreamError(f"Branch {branch} has no upstream branch")
    if report.upstream and not opts.upstream:
        if not report.ahead and not report.behind:
            raise NothingToDo(f"Already up to date with {report.upstream}")
        if report.behind and not opts.force:
            raise UsageError(
                f"Branch is {plural(report.behind, 'commit')} behind {report.upstream}",
                "Pull first with gpull, or use gpush --force",
            )
        ui.info(ctx.console, f"⬆️  Pushing {plural(report.ahead, 'commit')}...")

    if opts.force:
        ui.warn(ctx.console, "Force pushing with lease")
    repo.git(*push_args(opts, remote, branch, opts.upstream))
    ui.success(ctx.console, f"Pushed {branch} to {remote}")


TOOL = Tool(
    name="gpush",
    summary="Push commits, refusing when behind unless forced",
    category=REMOTES,
    tier=BASIC,
    handler=run,
    positionals=(
        Positional("remote", "?", help="remote name (default: branch remote or origin)"),
        Positional("branch", "?", help="branch to push (default: current)"),
    ),
    options=(
        opt("--force", help="force push with lease"),
        opt("-u", "--upstream", help="push and set the upstream branch"),
    ),
    examples=("gpush", "gpush --upstream", "gpush origin main", "gpush --force"),
)
