from __future__ import annotations

import os

from ..core import console as ui
from ..core.errors import NothingToDo
from ..core.options import Positional, opt
from ..core.repo import unchecked_repo
from ..core.tool import BASIC, SETUP, Context, Tool


def run(ctx: Context) -> None:
    opts = ctx.opts
    path = os.path.abspath(os.path.join(ctx.cwd, opts.directory or "."))
    if os.path.exists(os.path.join(path, ".git")):
        raise NothingToDo(f"Git repository already exists in {path}")
    os.makedirs(path, exist_ok=True)
    args = ["init"]
    if opts.bare:
        args.append("--bare")
    if opts.initial_branch:
        args += ["--initial-branch", opts.initial_branch]
    unchecked_repo(path, ctx.runner).git(*args)
    ui.success(ctx.console, f"Initialized empty git repository in {path}")
    ui.next_steps(
        ctx.console,
        [("Add files", "gadd"), ("First commit", 'gcommit "Initial commit"'), ("Add a remote", "gremote add origin <url>")],
    )


TOOL = Tool(
    name="ginit",
    summary="Create a new git repository",
    category=SETUP,
    tier=BASIC,
    handler=run,
    needs_repo=False,
    positionals=(Positional("directory", "?", help="directory to initialize (default: current)"),),
    options=(
        opt("--bare", help="create a bare repository"),
        opt("-b", "--initial-branch", dest="initial_branch", arity=1, metavar="NAME", help="name of the first branch"),
    ),
    examples=("ginit", "ginit my-project -b main"),
)
