from __future__ import annotations

import logging
import os
import subprocess
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Protocol

logger = logging.getLogger(__name__)

NOT_FOUND_CODE = 127


@dataclass(frozen=True)
class CmdResult:
    code: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.code == 0

    @property
    def output(self) -> str:
        return self.stderr or self.stdout

    @property
    def lines(self) -> list[str]:
        return [line for line in self.stdout.splitlines() if line.strip()]


class Runner(Protocol):
    def __call__(self, cmd: list[str], cwd: str | None = None, interactive: bool = False) -> CmdResult: ...


def run(cmd: list[str], cwd: str | None = None, interactive: bool = False) -> CmdResult:
    logger.debug("run: %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        if interactive:
            proc = subprocess.run(cmd, cwd=cwd, check=False)
            return CmdResult(proc.returncode, "", "")
        proc = subprocess.run(
            cmd,
            cwd=cwd,
            text=True,
            capture_output=True,
            check=False,
        )
    except FileNotFoundError as exc:
        return CmdResult(NOT_FOUND_CODE, "", f"{cmd[0]}: command not found ({exc})")
    # porcelain lines start with a significant space, keep leading whitespace
    return CmdResult(proc.returncode, proc.stdout.rstrip(), proc.stderr.strip())


def timestamp(now: datetime | None = None) -> str:
    """Filesystem and ref safe local timestamp, e.g. 2024-05-01T13-45-09."""
    now = now or datetime.now()
    return now.strftime("%Y-%m-%dT%H-%M-%S")


def clock(now: datetime | None = None) -> str:
    now = now or datetime.now()
    return now.strftime("%H:%M")


def basename(path: str) -> str:
    return os.path.basename(path.rstrip("/")) or path


def join_tokens(tokens: Iterable[str]) -> str:
    return " ".join(tokens).strip()


def plural(count: int, word: str, suffix: str = "s") -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}{suffix}"
