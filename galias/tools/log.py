from __future__ import annotations

from dataclasses import dataclass

from rich.text import Text

from ..core import console as ui
from ..core import git, settings
from ..core.errors import NothingToDo
from ..core.options import Positional, opt
from ..core.tool import BASIC, HISTORY, Context, Tool

SEP = "\x1f"
PRETTY = SEP.join(("%h", "%an", "%ar", "%s", "%D"))


@dataclass(frozen=True)
class LogEntry:
    sha: str
    author: str
    age: str
    subject: str
    refs: str = ""


def parse_log(text: str) -> list[LogEntry]:
    entries = []
    for line in text.splitlines():
        parts = line.split(SEP)
        if len(parts) < 4:
            continue
        entries.append(LogEntry(*parts[:5]))
    return entries


def log_args(opts, color: bool = False) -> list[str]:
    count = opts.max_count or opts.count or settings.DEFAULT_LOG_COUNT
    args = ["log", "-n", str(count)]
    if opts.author:
        args.append(f"--author={opts.author}")
    if opts.since:
        args.append(f"--since={opts.since}")
    if opts.graph:
        args += ["--graph", "--oneline", "--decorate"]
    elif opts.oneline:
        args += ["--oneline", "--decorate"]
    else:
        return args + [f"--pretty=format:{PRETTY}"]
    if color:
        args.append("--color=always")
    return args


def render_entries(ctx: Context, entries: list[LogEntry]) -> None:
    for e in entries:
        line = Text.assemble((e.sha, "yellow"), " ")
        if e.refs:
            line.append(f"({e.refs}) ", style="bold cyan")
        line.append(e.subject)
        line.append(f"  {e.author}, {e.age}", style="dim")
        ctx.console.print(line)


def run(ctx: Context) -> None:
    opts, repo = ctx.opts, ctx.repo
    if not git.has_commits(repo):
        raise NothingToDo("No commits yet", 'Make a first commit with: gquick "Initial commit"')
    res = repo.git(*log_args(opts, ctx.console.is_terminal))
    ui.header(ctx.console, "📜 Commit History")
    if not res.stdout.strip():
        ui.info(ctx.console, "No matching commits", "dim")
        return
    if opts.graph or opts.oneline:
        ui.raw(ctx.console, res.stdout)
    else:
        render_entries(ctx, parse_log(res.stdout))


TOOL = Tool(
    name="glog",
    summary="Show recent commit history",
    category=HISTORY,
    tier=BASIC,
    handler=run,
    positionals=(Positional("count", "?", type=int, help=f"number of commits (default {settings.DEFAULT_LOG_COUNT})"),),
    options=(
        opt("-n", "--max-count", dest="max_count", arity=1, type=int, metavar="N", help="number of commits"),
        opt("--oneline", help="compact one line per commit"),
        opt("--graph", help="draw the branch graph"),
        opt("--author", arity=1, help="only commits by this author"),
        opt("--since", arity=1, metavar="DATE", help='only commits since DATE, e.g. "2 weeks ago"'),
    ),
    examples=("glog", "glog 20", "glog --graph", 'glog --author alice --since "1 week ago"'),
)
