from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import Optional

from rich.console import Console

from . import __version__
from .core import console as ui
from .core.console import make_console, setup_logging
from .core.errors import GaliasError, NothingToDo
from .core.repo import find_repo, try_find_repo
from .core.tool import Context
from .core.util import Runner, run
from .tools import all_tools, get_tool

logger = logging.getLogger(__name__)


def _report(console: Console, exc: GaliasError) -> None:
    ui.error(console, exc.message)
    if exc.hint:
        ui.hint(console, exc.hint)


def run_tool(
    name: str,
    argv: list[str],
    cwd: Optional[str] = None,
    runner: Runner = run,
    console: Optional[Console] = None,
) -> int:
    """Run one tool end to end and return its exit status.

    Flow: parse flags, resolve the repository, run the handler. Help exits 0
    before any git command runs. Failures print a message plus a hint and
    return 1; a no-op returns 0.
    """
    tool = get_tool(name)
    console = console or make_console()
    cwd = os.path.abspath(cwd or os.getcwd())
    parser = tool.parser()
    try:
        opts, extras = parser.parse_known_intermixed_args(argv)
    except SystemExit as exc:
        return exc.code if isinstance(exc.code, int) else 0
    setup_logging(opts.debug)
    if extras:
        logger.debug("%s: ignoring unrecognized arguments: %s", name, " ".join(extras))

    try:
        repo = find_repo(cwd, runner) if tool.needs_repo else try_find_repo(cwd, runner)
        tool.handler(Context(opts=opts, console=console, cwd=cwd, runner=runner, repo=repo))
    except NothingToDo as exc:
        ui.info(console, f"ℹ️  {exc.message}", "yellow")
        if exc.hint:
            ui.hint(console, exc.hint)
        return 0
    except GaliasError as exc:
        logger.debug("%s failed", name, exc_info=True)
        _report(console, exc)
        return 1
    return 0


def _entry(name: str, argv: Optional[list[str]] = None) -> None:
    try:
        code = run_tool(name, sys.argv[1:] if argv is None else argv)
    except KeyboardInterrupt:
        code = 1
    except Exception as e:
        print(f"Fatal error in {name}: {e}", file=sys.stderr)
        code = 1
    sys.exit(code)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="galias", description="Friendly shims around everyday git commands")
    parser.add_argument("--version", action="version", version=f"galias {__version__}")
    parser.add_argument("tool", nargs="?", help="tool to run, e.g. gstatus (see: galias glist)")
    parser.add_argument("args", nargs=argparse.REMAINDER, help="arguments for the tool")
    return parser


def main(argv: Optional[list[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(sys.argv[1:] if argv is None else argv)
    if not args.tool:
        parser.print_help()
        sys.exit(0)
    names = {t.name for t in all_tools()}
    name = args.tool if args.tool in names else f"g{args.tool}"
    if name not in names:
        parser.error(f"unknown tool: {args.tool}")
    _entry(name, args.args)


def gstatus() -> None:
    _entry("gstatus")


def gdiff() -> None:
    _entry("gdiff")


def gadd() -> None:
    _entry("gadd")


def gcommit() -> None:
    _entry("gcommit")


def gbranch() -> None:
    _entry("gbranch")


def gcheckout() -> None:
    _entry("gcheckout")


def gclone() -> None:
    _entry("gclone")


def ginit() -> None:
    _entry("ginit")


def glog() -> None:
    _entry("glog")


def gpop() -> None:
    _entry("gpop")


def gpull() -> None:
    _entry("gpull")


def gpush() -> None:
    _entry("gpush")


def gremote() -> None:
    _entry("gremote")


def gremote_remove() -> None:
    _entry("gremote-remove")


def greset() -> None:
    _entry("greset")


def gstash() -> None:
    _entry("gstash")


def gbackup() -> None:
    _entry("gbackup")


def gclean() -> None:
    _entry("gclean")


def gdev() -> None:
    _entry("gdev")


def gfix() -> None:
    _entry("gfix")


def gflow() -> None:
    _entry("gflow")


def gfresh() -> None:
    _entry("gfresh")


def glist() -> None:
    _entry("glist")


def gquick() -> None:
    _entry("gquick")


def grelease() -> None:
    _entry("grelease")


def gsave() -> None:
    _entry("gsave")


def gsync() -> None:
    _entry("gsync")


def gworkflow() -> None:
    _entry("gworkflow")
