"""
Status Layer - Parse `git status --porcelain=v1 -b` and summarize changes.

Everything here is pure: it takes the porcelain text and returns plain
dataclasses, so both the status display and the commit message synthesis
can be tested without a repository.
"""

from __future__ import annotations

import re
from collections import Counter
from dataclasses import dataclass, field
from typing import Optional

from .util import basename

UNMERGED = {"DD", "AU", "UD", "UA", "DU", "AA", "UU"}

CHANGE_ORDER = ("added", "modified", "deleted", "renamed")
VERBS = {"added": "Add", "modified": "Update", "deleted": "Remove", "renamed": "Rename"}

_BRANCH_RE = re.compile(r"^## (?P<branch>.+?)(?:\.\.\.(?P<upstream>\S+))?(?: \[(?P<track>[^\]]+)\])?$")


@dataclass(frozen=True)
class Entry:
    code: str
    path: str
    orig_path: Optional[str] = None

    @property
    def index(self) -> str:
        return self.code[0]

    @property
    def worktree(self) -> str:
        return self.code[1]

    @property
    def display(self) -> str:
        if self.orig_path:
            return f"{self.orig_path} -> {self.path}"
        return self.path


@dataclass
class StatusReport:
    branch: Optional[str] = None
    upstream: Optional[str] = None
    ahead: int = 0
    behind: int = 0
    gone: bool = False
    detached: bool = False
    entries: list[Entry] = field(default_factory=list)
    staged: list[tuple[str, str]] = field(default_factory=list)
    modified: list[str] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    untracked: list[str] = field(default_factory=list)
    renamed: list[str] = field(default_factory=list)
    conflicted: list[str] = field(default_factory=list)

    @property
    def clean(self) -> bool:
        return not self.entries

    @property
    def has_staged(self) -> bool:
        return bool(self.staged or self.renamed)

    @property
    def has_unstaged(self) -> bool:
        return bool(self.modified or self.deleted or self.untracked)


_C_ESCAPE = re.compile(rb"\\([0-7]{3}|.)", re.S)
_C_CHARS = {b"a": 7, b"b": 8, b"t": 9, b"n": 10, b"v": 11, b"f": 12, b"r": 13}


def _unescape(m: re.Match) -> bytes:
    seq = m.group(1)
    if len(seq) == 3:
        return bytes([int(seq, 8)])
    return bytes([_C_CHARS.get(seq, seq[0])])


def unquote(path: str) -> str:
    """Undo git's C-style path quoting.

    Non-ASCII bytes arrive as octal escapes (``"caf\\303\\251.txt"``) and
    are decoded back to UTF-8 text.
    """
    if len(path) >= 2 and path[0] == '"' and path[-1] == '"':
        raw = _C_ESCAPE.sub(_unescape, path[1:-1].encode("utf-8"))
        return raw.decode("utf-8", errors="replace")
    return path


def parse_entry(line: str) -> Optional[Entry]:
    if len(line) < 4 or line[2] != " ":
        return None
    code, rest = line[:2], line[3:]
    if code == "!!":
        return None
    if " -> " in rest and ("R" in code or "C" in code):
        old, new = rest.split(" -> ", 1)
        return Entry(code, unquote(new), unquote(old))
    return Entry(code, unquote(rest))


def parse_branch_line(line: str, report: StatusReport) -> None:
    head = line[3:]
    for prefix in ("No commits yet on ", "Initial commit on "):
        if head.startswith(prefix):
            report.branch = head[len(prefix):].strip()
            return
    if head.startswith("HEAD (no branch)"):
        report.detached = True
        return
    m = _BRANCH_RE.match(line)
    if not m:
        return
    report.branch = m.group("branch")
    report.upstream = m.group("upstream")
    track = m.group("track") or ""
    for part in track.split(","):
        part = part.strip()
        if part.startswith("ahead "):
            report.ahead = int(part[6:])
        elif part.startswith("behind "):
            report.behind = int(part[7:])
        elif part == "gone":
            report.gone = True


def categorize(report: StatusReport) -> None:
    for entry in report.entries:
        if entry.code in UNMERGED:
            report.conflicted.append(entry.path)
            continue
        if entry.code == "??":
            report.untracked.append(entry.path)
            continue
        x, y = entry.index, entry.worktree
        if x not in " ?":
            if x == "A":
                report.staged.append((entry.path, "added"))
            elif x == "M":
                report.staged.append((entry.path, "modified"))
            elif x == "D":
                report.staged.append((entry.path, "deleted"))
            elif x == "R":
                report.renamed.append(entry.display)
            else:
                report.staged.append((entry.path, "staged"))
        if y == "M":
            report.modified.append(entry.path)
        elif y == "D":
            report.deleted.append(entry.path)


def parse_status(text: str) -> StatusReport:
    """Build a StatusReport from porcelain v1 output.

    The optional ``## `` header supplies branch and tracking info. When no
    entry lines are present the report is clean and nothing is categorized.
    """
    report = StatusReport()
    for line in text.splitlines():
        if not line.strip():
            continue
        if line.startswith("## "):
            parse_branch_line(line, report)
            continue
        entry = parse_entry(line)
        if entry is not None:
            report.entries.append(entry)
    if report.entries:
        categorize(report)
    return report


def change_kind(entry: Entry) -> str:
    if entry.code == "??":
        return "added"
    if "R" in entry.code:
        return "renamed"
    if "D" in entry.code:
        return "deleted"
    if "A" in entry.code:
        return "added"
    return "modified"


@dataclass(frozen=True)
class ChangeSummary:
    files: tuple[tuple[str, str], ...]

    @classmethod
    def from_entries(cls, entries: list[Entry], staged_only: bool = False) -> "ChangeSummary":
        picked = [e for e in entries if not staged_only or e.index not in " ?"]
        return cls(tuple((change_kind(e), e.path) for e in picked))

    @property
    def total(self) -> int:
        return len(self.files)

    @property
    def counts(self) -> Counter:
        return Counter(kind for kind, _ in self.files)

    def describe(self) -> str:
        counts = self.counts
        return ", ".join(f"{counts[k]} {k}" for k in CHANGE_ORDER if counts[k])


def auto_message(summary: ChangeSummary) -> str:
    """Synthesize a commit message from categorized changes.

    One file gives ``"<Verb> <basename>"``. Several files give
    ``"<Verb> N files: 2 added, 1 modified"`` with counts in the fixed
    order added, modified, deleted, renamed.
    """
    if not summary.files:
        raise ValueError("no changes to describe")
    if summary.total == 1:
        kind, path = summary.files[0]
        return f"{VERBS[kind]} {basename(path)}"
    kinds = set(summary.counts)
    verb = VERBS[kinds.pop()] if len(kinds) == 1 else "Update"
    return f"{verb} {summary.total} files: {summary.describe()}"
