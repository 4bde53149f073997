from __future__ import annotations

from ..core import console as ui
from ..core import git, settings
from ..core.errors import UsageError
from ..core.options import Positional
from ..core.repo import Repo
from ..core.tool import ADVANCED, WORKFLOW, Context, Tool
from .clean import clean_branches, prune_remote
from .common import push_current, stage_everything

WORKFLOWS = ("feature", "hotfix", "release", "review", "sync", "cleanup")


def base_branches(repo: Repo) -> tuple[str, str]:
    """(main, develop), where develop falls back to main."""
    main = git.main_branch(repo) or "main"
    develop = "develop" if git.branch_exists(repo, "develop") else main
    return main, develop


def update(ctx: Context, branch: str) -> None:
    ctx.repo.git("checkout", branch)
    if not git.has_remote(ctx.repo):
        return
    res = ctx.repo.git("pull", settings.DEFAULT_REMOTE, branch, check=False)
    if res.ok:
        ui.success(ctx.console, f"Updated {branch}")
    else:
        ui.warn(ctx.console, f"Could not update {branch}: {res.output}")


def commit_leftovers(ctx: Context, message: str) -> None:
    if git.has_changes(ctx.repo):
        stage_everything(ctx)
        git.commit(ctx.repo, message)
        ui.success(ctx.console, f"Committed pending changes: {message}")


def merge_into(ctx: Context, source: str, targets: list[str]) -> None:
    for target in targets:
        ctx.repo.git("checkout", target)
        ctx.repo.git("merge", "--no-ff", source)
        ui.success(ctx.console, f"Merged {source} into {target}")


def start(ctx: Context, kind: str, name: str | None, base: str) -> None:
    if not name:
        raise UsageError(f"{kind.capitalize()} name required", f"gworkflow {kind} <name>")
    branch = f"{kind}/{name}"
    if git.branch_exists(ctx.repo, branch):
        ctx.repo.git("checkout", branch)
        ui.warn(ctx.console, f"Branch {branch} already exists, switched to it")
        return
    update(ctx, base)
    ctx.repo.git("checkout", "-b", branch)
    ui.success(ctx.console, f"Started {branch} from {base}")


def require_branch(repo: Repo, prefix: str) -> str:
    branch = git.current_branch(repo) or ""
    if not branch.startswith(f"{prefix}/"):
        raise UsageError(f"Not on a {prefix} branch", f"Switch to one with: gcheckout {prefix}/<name>")
    return branch


def finish_feature(ctx: Context) -> None:
    branch = require_branch(ctx.repo, "feature")
    _, develop = base_branches(ctx.repo)
    commit_leftovers(ctx, "Complete feature development")
    update(ctx, develop)
    merge_into(ctx, branch, [develop])
    ctx.repo.git("branch", "-d", branch)
    ui.success(ctx.console, f"Feature {branch} finished")


def finish_hotfix(ctx: Context) -> None:
    branch = require_branch(ctx.repo, "hotfix")
    main, develop = base_branches(ctx.repo)
    commit_leftovers(ctx, "Emergency hotfix")
    merge_into(ctx, branch, [main] + ([develop] if develop != main else []))
    ctx.repo.git("branch", "-d", branch)
    ui.success(ctx.console, f"Hotfix {branch} applied")


def finish_release(ctx: Context) -> None:
    branch = require_branch(ctx.repo, "release")
    version = branch.split("/", 1)[1]
    main, develop = base_branches(ctx.repo)
    merge_into(ctx, branch, [main])
    tag = version if version.startswith("v") else f"v{version}"
    ctx.repo.git("tag", "-a", tag, "-m", f"Release version {version}")
    ui.success(ctx.console, f"Tagged {tag}")
    if develop != main:
        merge_into(ctx, branch, [develop])
    ctx.repo.git("branch", "-d", branch)
    ui.success(ctx.console, f"Release {version} finished")


def review(ctx: Context) -> None:
    commit_leftovers(ctx, "Prepare for code review")
    push_current(ctx, git.current_branch(ctx.repo))
    ui.next_steps(ctx.console, [("Open a pull request", "on your git host")])


def run(ctx: Context) -> None:
    workflow, param = ctx.opts.workflow, ctx.opts.param
    ui.header(ctx.console, "⚡ Git Workflow Automation")
    if workflow == "feature":
        if param == "finish":
            finish_feature(ctx)
        elif param == "review":
            review(ctx)
        else:
            start(ctx, "feature", param, base_branches(ctx.repo)[1])
    elif workflow == "hotfix":
        if param == "finish":
            finish_hotfix(ctx)
        else:
            start(ctx, "hotfix", param, base_branches(ctx.repo)[0])
    elif workflow == "release":
        if param == "finish":
            finish_release(ctx)
        else:
            start(ctx, "release", param, base_branches(ctx.repo)[1])
    elif workflow == "review":
        review(ctx)
    elif workflow == "sync":
        ctx.repo.git("fetch", "--all")
        ui.success(ctx.console, "Fetched all remotes")
    elif workflow == "cleanup":
        clean_branches(ctx)
        prune_remote(ctx)
    else:
        raise UsageError(
            f"Unknown workflow: {workflow}" if workflow else "Workflow required",
            f"Use one of: {', '.join(WORKFLOWS)}",
        )


TOOL = Tool(
    name="gworkflow",
    summary="Git-flow style feature, hotfix and release branches",
    category=WORKFLOW,
    tier=ADVANCED,
    handler=run,
    positionals=(
        Positional("workflow", "?", help=f"one of: {', '.join(WORKFLOWS)}"),
        Positional("param", "?", help="name/version, or finish / review"),
    ),
    examples=("gworkflow feature login", "gworkflow feature finish", "gworkflow release 1.2.0", "gworkflow sync"),
)
