from __future__ import annotations

from rich.table import Table
from rich.text import Text

from ..core import console as ui
from ..core import git
from ..core.options import opt
from ..core.tool import ADVANCED, BASIC, CATEGORIES, SETUP, Context, Tool
from ..core.util import basename


def select(tools: list[Tool], opts) -> list[Tool]:
    picked = tools
    if opts.basic and not opts.advanced:
        picked = [t for t in picked if t.tier == BASIC]
    elif opts.advanced and not opts.basic:
        picked = [t for t in picked if t.tier == ADVANCED]
    if opts.category:
        needle = opts.category.lower()
        picked = [t for t in picked if needle in t.category.lower()]
    if opts.search:
        needle = opts.search.lower()
        picked = [t for t in picked if needle in t.name.lower() or needle in t.summary.lower()]
    return picked


def catalog_table(category: str, tools: list[Tool]) -> Table:
    table = Table(title=category, title_style="bold cyan", title_justify="left", show_header=False, box=None)
    table.add_column("tool", style="bold green", no_wrap=True)
    table.add_column("summary")
    table.add_column("example", style="dim")
    for t in tools:
        table.add_row(t.name, t.summary, t.examples[0] if t.examples else "")
    return table


def run(ctx: Context) -> None:
    from . import all_tools

    ui.header(ctx.console, "🧰 galias tools")
    if ctx.repo is not None:
        name = basename(ctx.repo.root)
        ctx.console.print(Text.assemble(("📁 ", ""), (name, "bold"), ("  on ", "dim"), (git.head_ref(ctx.repo), "green")))
    tools = select(all_tools(), ctx.opts)
    if not tools:
        ui.warn(ctx.console, "No tools match your filters")
        return
    for category in CATEGORIES:
        members = [t for t in tools if t.category == category]
        if members:
            ctx.console.print()
            ctx.console.print(catalog_table(category, members))
    ctx.console.print()
    ui.hint(ctx.console, "Run any tool with --help for its options")


TOOL = Tool(
    name="glist",
    summary="List every galias tool by category",
    category=SETUP,
    tier=ADVANCED,
    handler=run,
    needs_repo=False,
    options=(
        opt("--basic", help="only basic tools"),
        opt("--advanced", help="only advanced tools"),
        opt("--category", arity=1, help="filter by category (substring)"),
        opt("--search", arity=1, help="filter by name or summary"),
    ),
    examples=("glist", "glist --category branch", "glist --search stash"),
)
