from __future__ import annotations

import logging
from typing import IO, Iterable, Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.text import Text

from . import settings


def make_console(file: Optional[IO[str]] = None) -> Console:
    return Console(file=file, highlight=False, emoji=False, soft_wrap=True)


def setup_logging(debug: bool = False) -> None:
    level = logging.DEBUG if debug else logging.WARNING
    handler = RichHandler(
        console=Console(stderr=True),
        show_level=True,
        show_path=False,
        show_time=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    log = logging.getLogger("galias")
    log.handlers = [handler]
    log.setLevel(level)
    log.propagate = False


def header(console: Console, title: str) -> None:
    console.print(Text(title, style="bold magenta"))
    console.print(Text("─" * settings.RULE_WIDTH, style="dim"))


def info(console: Console, message: str, style: str = "blue") -> None:
    console.print(Text(message, style=style))


def success(console: Console, message: str) -> None:
    console.print(Text(f"✅ {message}", style="bold green"))


def warn(console: Console, message: str) -> None:
    console.print(Text(f"⚠️  {message}", style="yellow"))


def error(console: Console, message: str) -> None:
    console.print(Text(f"❌ {message}", style="bold red"))


def hint(console: Console, message: str) -> None:
    console.print(Text(f"💡 {message}", style="cyan"))


def field(console: Console, label: str, value: object, style: str = "white") -> None:
    console.print(Text.assemble((label, "blue"), " ", (str(value), style)))


def bullet(console: Console, text: str, style: str = "dim", indent: int = 3) -> None:
    console.print(Text(f"{' ' * indent}• {text}", style=style))


def listing(console: Console, title: str, items: Iterable[str], style: str, marker: str = "") -> None:
    items = list(items)
    if not items:
        return
    console.print(Text(f"{title} ({len(items)}):", style=f"bold {style}"))
    for item in items:
        console.print(Text(f"   {marker}{item}", style=style))


def next_steps(console: Console, steps: list[tuple[str, str]]) -> None:
    if not steps:
        return
    console.print()
    console.print(Text("💡 Next steps:", style="cyan"))
    for desc, cmd in steps:
        console.print(Text.assemble(("   • ", "dim"), (f"{desc}: ", "dim"), (cmd, "cyan")))


def raw(console: Console, text: str) -> None:
    """Print git output unchanged, keeping any ANSI colors it carries."""
    if text:
        console.print(Text.from_ansi(text), soft_wrap=True)
