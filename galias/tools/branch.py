from __future__ import annotations

from rich.text import Text

from ..core import console as ui
from ..core.errors import UsageError
from ..core.options import Positional, opt
from ..core.tool import BASIC, BRANCHES, Context, Tool

_ACTIONS = (
    ("delete", ["--delete"], "Deleted"),
    ("force_delete", ["--delete", "--force"], "Force deleted"),
    ("move", ["--move"], "Renamed"),
    ("copy", ["--copy"], "Copied"),
)


def list_args(opts) -> list[str]:
    args = ["branch"]
    if opts.remotes:
        args.append("--remotes")
    if opts.all:
        args.append("--all")
    if opts.verbose:
        args.append("--verbose")
    if opts.merged is not None:
        args.append("--merged")
        if isinstance(opts.merged, str):
            args.append(opts.merged)
    if opts.no_merged is not None:
        args.append("--no-merged")
        if isinstance(opts.no_merged, str):
            args.append(opts.no_merged)
    if opts.contains:
        args += ["--contains", opts.contains]
    if opts.sort:
        args.append(f"--sort={opts.sort}")
    return args


def action_args(opts) -> tuple[list[str], str] | None:
    for dest, flags, label in _ACTIONS:
        if getattr(opts, dest):
            if not opts.names:
                raise UsageError(f"Branch name required for --{dest.replace('_', '-')}", "gbranch -d <name>")
            return ["branch", *flags, *opts.names], label
    return None


def create_args(opts) -> list[str]:
    args = ["branch"]
    if opts.track:
        args.append("--track")
    if opts.no_track:
        args.append("--no-track")
    return args + opts.names


def render_list(ctx: Context, output: str) -> None:
    ui.header(ctx.console, "🌿 Branches")
    if not output.strip():
        ui.info(ctx.console, "No branches found", "dim")
        return
    for line in output.splitlines():
        current = line.startswith("*")
        name = line[2:]
        if current:
            ctx.console.print(Text.assemble(("● ", "bold green"), (name, "bold green")))
        elif name.startswith("remotes/") or ctx.opts.remotes:
            ctx.console.print(Text(f"  {name}", style="dim cyan"))
        else:
            ctx.console.print(Text(f"  {name}"))


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    action = action_args(opts)
    if action is not None:
        args, label = action
        repo.git(*args)
        joiner = " -> " if args[1] in ("--move", "--copy") else ", "
        ui.success(ctx.console, f"{label} {joiner.join(opts.names)}")
        return
    if opts.names:
        repo.git(*create_args(opts))
        ui.success(ctx.console, f"Created branch {opts.names[0]}")
        ui.next_steps(ctx.console, [("Switch to it", f"gcheckout {opts.names[0]}")])
        return
    render_list(ctx, repo.git(*list_args(opts)).stdout)


TOOL = Tool(
    name="gbranch",
    summary="List, create, delete, rename or copy branches",
    category=BRANCHES,
    tier=BASIC,
    handler=run,
    positionals=(Positional("names", "*", help="branch name(s)"),),
    options=(
        opt("-r", "--remotes", help="list remote-tracking branches"),
        opt("-a", "--all", help="list local and remote branches"),
        opt("-v", "--verbose", help="show last commit on each branch"),
        opt("--merged", arity="?", metavar="COMMIT", help="only branches merged into COMMIT (default HEAD)"),
        opt("--no-merged", dest="no_merged", arity="?", metavar="COMMIT", help="only branches not merged"),
        opt("--contains", arity=1, metavar="COMMIT", help="only branches containing COMMIT"),
        opt("--sort", arity=1, metavar="KEY", help="sort key, e.g. -committerdate"),
        opt("-d", "--delete", help="delete a merged branch"),
        opt("-D", "--force-delete", dest="force_delete", help="delete a branch even if unmerged"),
        opt("-m", "--move", help="rename a branch"),
        opt("-c", "--copy", help="copy a branch"),
        opt("--track", help="set up upstream tracking"),
        opt("--no-track", dest="no_track", help="do not set up tracking"),
    ),
    examples=("gbranch", "gbranch feature/login", "gbranch -d old-branch", "gbranch -m old new"),
)
