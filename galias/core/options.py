from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Any, Callable, Optional, Union

# arity: 0 = switch, 1 = takes a value, "?" = optional value, "append" = repeatable value
Arity = Union[int, str]


@dataclass(frozen=True)
class Option:
    flags: tuple[str, ...]
    dest: Optional[str] = None
    arity: Arity = 0
    type: Callable[[str], Any] = str
    default: Any = None
    const: Any = True
    metavar: Optional[str] = None
    help: str = ""


@dataclass(frozen=True)
class Positional:
    name: str
    arity: Optional[str] = None
    type: Callable[[str], Any] = str
    default: Any = None
    help: str = ""


def opt(*flags: str, **kwargs: Any) -> Option:
    return Option(tuple(flags), **kwargs)


class ShimParser(argparse.ArgumentParser):
    """ArgumentParser that reports bad input with exit status 1."""

    def error(self, message: str) -> None:  # type: ignore[override]
        self.print_usage(sys.stderr)
        self.exit(1, f"{self.prog}: error: {message}\n")


def _add_option(parser: argparse.ArgumentParser, o: Option) -> None:
    kwargs: dict[str, Any] = {"help": o.help}
    if o.dest:
        kwargs["dest"] = o.dest
    if o.arity == 0:
        kwargs["action"] = "store_true"
    elif o.arity == 1:
        kwargs.update(type=o.type, default=o.default, metavar=o.metavar)
    elif o.arity == "?":
        kwargs.update(nargs="?", type=o.type, default=o.default, const=o.const, metavar=o.metavar)
    elif o.arity == "append":
        kwargs.update(action="append", type=o.type, default=None, metavar=o.metavar)
    else:
        raise ValueError(f"unsupported arity {o.arity!r} for {o.flags}")
    parser.add_argument(*o.flags, **kwargs)


def _add_positional(parser: argparse.ArgumentParser, p: Positional) -> None:
    kwargs: dict[str, Any] = {"help": p.help, "type": p.type}
    if p.arity is not None:
        kwargs["nargs"] = p.arity
    if p.arity == "*":
        kwargs["default"] = [] if p.default is None else p.default
    elif p.arity == "?":
        kwargs["default"] = p.default
    parser.add_argument(p.name, **kwargs)


def build_parser(
    prog: str,
    description: str,
    options: tuple[Option, ...] = (),
    positionals: tuple[Positional, ...] = (),
) -> ShimParser:
    parser = ShimParser(prog=prog, description=description)
    for p in positionals:
        _add_positional(parser, p)
    for o in options:
        _add_option(parser, o)
    parser.add_argument("--debug", action="store_true", help="log every git command")
    return parser
