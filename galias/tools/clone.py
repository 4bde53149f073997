from __future__ import annotations

import os
import re

from ..core import console as ui
from ..core import git, settings
from ..core.errors import UsageError
from ..core.options import Positional, opt
from ..core.repo import Repo, unchecked_repo
from ..core.tool import BASIC, SETUP, Context, Tool

_SHORTHAND = re.compile(r"^[\w.-]+/[\w.-]+$")

# (dest, flag) pairs forwarded as "--flag value"
_VALUE_FLAGS = (
    ("branch", "--branch"),
    ("depth", "--depth"),
    ("jobs", "--jobs"),
    ("origin", "--origin"),
    ("template", "--template"),
    ("reference", "--reference"),
    ("separate_git_dir", "--separate-git-dir"),
    ("filter", "--filter"),
)
_REPEAT_FLAGS = (("config", "--config"), ("server_option", "--server-option"))
_SWITCHES = (
    ("single_branch", "--single-branch"),
    ("no_single_branch", "--no-single-branch"),
    ("recurse_submodules", "--recurse-submodules"),
    ("shallow_submodules", "--shallow-submodules"),
    ("verbose", "--verbose"),
    ("quiet", "--quiet"),
    ("no_checkout", "--no-checkout"),
    ("bare", "--bare"),
    ("mirror", "--mirror"),
    ("dissociate", "--dissociate"),
)


def expand_url(url: str) -> str:
    if _SHORTHAND.match(url) and not os.path.exists(url):
        return settings.GITHUB_URL.format(slug=url)
    return url


def target_dir(url: str, directory: str | None) -> str:
    if directory:
        return directory
    name = url.rstrip("/").rsplit("/", 1)[-1].rsplit(":", 1)[-1]
    return name[:-4] if name.endswith(".git") else name


def clone_args(opts, url: str) -> list[str]:
    args = ["clone"]
    for dest, flag in _VALUE_FLAGS:
        value = getattr(opts, dest)
        if value is not None:
            args += [flag, str(value)]
    for dest, flag in _REPEAT_FLAGS:
        for value in getattr(opts, dest) or []:
            args += [flag, value]
    for dest, flag in _SWITCHES:
        if getattr(opts, dest):
            args.append(flag)
    args.append(url)
    if opts.directory:
        args.append(opts.directory)
    return args


def show_summary(ctx: Context, path: str) -> None:
    if ctx.opts.bare or ctx.opts.mirror or ctx.opts.no_checkout:
        return
    cloned = Repo(root=path, cwd=path, runner=ctx.runner)
    ui.field(ctx.console, "🌿 Branch:", git.current_branch(cloned) or "(none)", "green")
    ui.field(ctx.console, "📊 Commits:", git.commit_count(cloned))
    if os.path.exists(os.path.join(path, ".gitmodules")):
        ui.hint(ctx.console, "Submodules present. Run: git submodule update --init --recursive")


def run(ctx: Context) -> None:
    opts = ctx.opts
    if not opts.url:
        raise UsageError("Repository URL required", "gclone user/repo  or  gclone <url> [directory]")
    url = expand_url(opts.url)
    dest = os.path.join(ctx.cwd, target_dir(url, opts.directory))
    if os.path.isdir(dest) and os.listdir(dest):
        raise UsageError(f"Directory {dest} already exists and is not empty", "Choose another directory name")

    ui.info(ctx.console, f"📥 Cloning {url}...")
    unchecked_repo(ctx.cwd, ctx.runner).git(*clone_args(opts, url))
    ui.success(ctx.console, f"Cloned into {os.path.relpath(dest, ctx.cwd)}")
    show_summary(ctx, dest)
    ui.next_steps(ctx.console, [("Enter the project", f"cd {os.path.relpath(dest, ctx.cwd)}")])


TOOL = Tool(
    name="gclone",
    summary="Clone a repository (supports user/repo shorthand for GitHub)",
    category=SETUP,
    tier=BASIC,
    handler=run,
    needs_repo=False,
    positionals=(
        Positional("url", "?", help="repository URL or user/repo"),
        Positional("directory", "?", help="target directory"),
    ),
    options=(
        opt("-b", "--branch", arity=1, help="check out this branch"),
        opt("--depth", arity=1, type=int, help="create a shallow clone"),
        opt("-j", "--jobs", arity=1, type=int, help="parallel submodule fetches"),
        opt("--origin", arity=1, help="name of the remote"),
        opt("--template", arity=1, help="template directory"),
        opt("--reference", arity=1, help="reference repository"),
        opt("--separate-git-dir", dest="separate_git_dir", arity=1, help="place .git elsewhere"),
        opt("--config", arity="append", metavar="KEY=VALUE", help="set config in the new repository"),
        opt("--server-option", dest="server_option", arity="append", help="transmit server option"),
        opt("--filter", arity=1, metavar="SPEC", help="partial clone filter"),
        opt("--single-branch", dest="single_branch", help="clone only one branch"),
        opt("--no-single-branch", dest="no_single_branch", help="clone all branches"),
        opt("--recurse-submodules", dest="recurse_submodules", help="initialize submodules"),
        opt("--shallow-submodules", dest="shallow_submodules", help="shallow clone submodules"),
        opt("-v", "--verbose", help="verbose output"),
        opt("-q", "--quiet", help="quiet output"),
        opt("-n", "--no-checkout", dest="no_checkout", help="do not check out HEAD"),
        opt("--bare", help="make a bare repository"),
        opt("--mirror", help="mirror the source repository"),
        opt("--dissociate", help="borrow objects only while cloning"),
    ),
    examples=("gclone octocat/Hello-World", "gclone https://github.com/user/repo.git myrepo"),
)
