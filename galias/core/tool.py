from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Callable, Optional

from rich.console import Console

from .options import Option, Positional, ShimParser, build_parser
from .repo import Repo
from .util import Runner

BASIC = "basic"
ADVANCED = "advanced"

STAGING = "File Staging & Status"
COMMITS = "Commit Operations"
BRANCHES = "Branch Management"
REMOTES = "Remote Operations"
HISTORY = "History & Recovery"
SETUP = "Repository Setup"
WORKFLOW = "Workflow Automation"
MAINTENANCE = "Maintenance & Cleanup"

CATEGORIES = (STAGING, COMMITS, BRANCHES, REMOTES, HISTORY, SETUP, WORKFLOW, MAINTENANCE)


@dataclass
class Context:
    opts: argparse.Namespace
    console: Console
    cwd: str
    runner: Runner
    repo: Optional[Repo] = None


@dataclass(frozen=True)
class Tool:
    name: str
    summary: str
    category: str
    handler: Callable[[Context], None]
    tier: str = BASIC
    options: tuple[Option, ...] = ()
    positionals: tuple[Positional, ...] = ()
    examples: tuple[str, ...] = field(default_factory=tuple)
    needs_repo: bool = True

    def parser(self) -> ShimParser:
        return build_parser(self.name, self.summary, self.options, self.positionals)
