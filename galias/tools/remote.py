from __future__ import annotations

import re
from collections import OrderedDict

from rich.text import Text

from ..core import console as ui
from ..core.errors import UsageError
from ..core.options import Positional, opt
from ..core.tool import BASIC, REMOTES, Context, Tool

_NAME_RE = re.compile(r"^[A-Za-z0-9._-]+$")

SUBCOMMANDS = ("add", "remove", "rm", "rename", "set-url", "get-url", "show", "prune")


def validate_name(name: str) -> str:
    if not _NAME_RE.match(name):
        raise UsageError(f"Invalid remote name: {name}", "Use letters, digits, dots, dashes and underscores")
    return name


def need(args: list[str], count: int, usage: str) -> list[str]:
    if len(args) < count:
        raise UsageError("Missing arguments", f"Usage: {usage}")
    return args[:count]


def parse_verbose(text: str) -> "OrderedDict[str, dict[str, str]]":
    remotes: "OrderedDict[str, dict[str, str]]" = OrderedDict()
    for line in text.splitlines():
        parts = line.split()
        if len(parts) < 3:
            continue
        name, url, kind = parts[0], parts[1], parts[2].strip("()")
        remotes.setdefault(name, {})[kind] = url
    return remotes


def list_remotes(ctx: Context) -> None:
    res = ctx.repo.git("remote", "-v")
    ui.header(ctx.console, "📡 Remotes")
    remotes = parse_verbose(res.stdout)
    if not remotes:
        ui.info(ctx.console, "No remotes configured", "dim")
        ui.next_steps(ctx.console, [("Add one", "gremote add origin <url>")])
        return
    for name, urls in remotes.items():
        ctx.console.print(Text(name, style="bold green"))
        fetch, push = urls.get("fetch"), urls.get("push")
        if fetch == push:
            ctx.console.print(Text(f"   {fetch}", style="cyan"))
            continue
        if fetch:
            ctx.console.print(Text.assemble(("   fetch: ", "dim"), (fetch, "cyan")))
        if push:
            ctx.console.print(Text.assemble(("   push:  ", "dim"), (push, "cyan")))


def remote_args(opts) -> tuple[list[str], str]:
    """Translate subcommand + arguments into a git argv and a success message."""
    sub, rest = opts.action, opts.args
    if sub == "add":
        name, url = need(rest, 2, "gremote add <name> <url>")
        return ["remote", "add", validate_name(name), url], f"Added remote {name} -> {url}"
    if sub in ("remove", "rm"):
        (name,) = need(rest, 1, "gremote remove <name>")
        return ["remote", "remove", name], f"Removed remote {name}"
    if sub == "rename":
        old, new = need(rest, 2, "gremote rename <old> <new>")
        return ["remote", "rename", old, validate_name(new)], f"Renamed remote {old} -> {new}"
    if sub == "set-url":
        if opts.delete:
            name, url = need(rest, 2, "gremote set-url --delete <name> <url>")
            return ["remote", "set-url", "--delete", name, url], f"Removed URL {url} from {name}"
        name, url = need(rest, 2, "gremote set-url <name> <url>")
        args = ["remote", "set-url"]
        if opts.push:
            args.append("--push")
        if opts.add:
            args.append("--add")
        return args + [name, url], f"Updated {name} URL -> {url}"
    if sub == "get-url":
        (name,) = need(rest, 1, "gremote get-url <name>")
        args = ["remote", "get-url"]
        if opts.push:
            args.append("--push")
        if opts.all:
            args.append("--all")
        return args + [name], ""
    if sub == "show":
        return ["remote", "show", *rest], ""
    if sub == "prune":
        (name,) = need(rest or ["origin"], 1, "gremote prune [name]")
        args = ["remote", "prune"]
        if opts.dry_run:
            args.append("--dry-run")
        return args + [name], f"Pruned stale branches from {name}"
    raise UsageError(f"Unknown remote command: {sub}", f"Use one of: {', '.join(SUBCOMMANDS)}")


def run(ctx: Context) -> None:
    opts = ctx.opts
    if not opts.action:
        list_remotes(ctx)
        return
    args, done = remote_args(opts)
    res = ctx.repo.git(*args)
    if done:
        ui.success(ctx.console, done)
    ui.raw(ctx.console, res.stdout)


TOOL = Tool(
    name="gremote",
    summary="List and manage remotes",
    category=REMOTES,
    tier=BASIC,
    handler=run,
    positionals=(
        Positional("action", "?", help=f"one of: {', '.join(SUBCOMMANDS)}"),
        Positional("args", "*", help="arguments for the action"),
    ),
    options=(
        opt("-v", "--verbose", help="list remotes with URLs (default)"),
        opt("--push", help="operate on push URLs"),
        opt("--add", help="add a URL instead of replacing"),
        opt("--delete", help="delete a matching URL"),
        opt("--all", help="show all URLs"),
        opt("--dry-run", dest="dry_run", help="report what prune would do"),
    ),
    examples=("gremote", "gremote add origin git@github.com:user/repo.git", "gremote rename origin upstream"),
)


def run_remove(ctx: Context) -> None:
    ctx.opts.action, ctx.opts.args = "remove", [ctx.opts.name] if ctx.opts.name else []
    run(ctx)


REMOVE_TOOL = Tool(
    name="gremote-remove",
    summary="Remove a remote",
    category=REMOTES,
    tier=BASIC,
    handler=run_remove,
    positionals=(Positional("name", "?", help="remote to remove"),),
    examples=("gremote-remove upstream",),
)
