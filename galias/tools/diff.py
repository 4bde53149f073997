from __future__ import annotations

from ..core import console as ui
from ..core.options import Positional, opt
from ..core.tool import BASIC, STAGING, Context, Tool


def build_args(opts, color: bool = False) -> list[str]:
    args = ["diff"]
    if color:
        args.append("--color=always")
    if opts.cached:
        args.append("--cached")
    if opts.stat:
        args.append("--stat")
    if opts.name_only:
        args.append("--name-only")
    if opts.target:
        args.append(opts.target)
    return args


def run(ctx: Context) -> None:
    opts = ctx.opts
    if opts.cached:
        ui.info(ctx.console, "📋 Staged changes (ready to commit)")
    elif opts.target:
        ui.info(ctx.console, f"🔍 Comparing with {opts.target}")
    else:
        ui.info(ctx.console, "📝 Unstaged changes (working directory)")
    res = ctx.repo.git(*build_args(opts, ctx.console.is_terminal))
    if not res.stdout.strip():
        ui.info(ctx.console, "✨ No differences found", "green")
        return
    ui.raw(ctx.console, res.stdout)


TOOL = Tool(
    name="gdiff",
    summary="Show unstaged, staged or ref-to-ref differences",
    category=STAGING,
    tier=BASIC,
    handler=run,
    positionals=(Positional("target", "?", help="branch, commit or path to compare against"),),
    options=(
        opt("--cached", "--staged", dest="cached", help="show staged changes"),
        opt("--stat", help="show a diffstat only"),
        opt("--name-only", dest="name_only", help="show changed file names only"),
    ),
    examples=("gdiff", "gdiff --staged", "gdiff main"),
)
