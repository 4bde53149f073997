"""
Error Layer - Failure kinds, classification and remediation hints.

Git reports failures as free text on stderr. This module turns that text
into an ErrorKind once, at the command wrapper, so that tools and the CLI
boundary only ever branch on the kind.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from .util import NOT_FOUND_CODE, CmdResult


class ErrorKind(Enum):
    NOT_A_REPOSITORY = "not-a-repository"
    NOT_INSTALLED = "not-installed"
    NOTHING_TO_COMMIT = "nothing-to-commit"
    ALREADY_EXISTS = "already-exists"
    NOT_FULLY_MERGED = "not-fully-merged"
    UNKNOWN_REF = "unknown-ref"
    LOCAL_CHANGES = "local-changes"
    MERGE_CONFLICT = "merge-conflict"
    NO_UPSTREAM = "no-upstream"
    REJECTED = "rejected"
    NO_SUCH_REMOTE = "no-such-remote"
    NO_COMMITS = "no-commits"
    AUTH_FAILED = "auth-failed"
    REMOTE_NOT_FOUND = "remote-not-found"
    NETWORK = "network"
    UNKNOWN = "unknown"


# Checked in order; the first matching pattern wins.
_PATTERNS: list[tuple[ErrorKind, tuple[str, ...]]] = [
    (ErrorKind.NOT_A_REPOSITORY, ("not a git repository",)),
    (ErrorKind.NO_COMMITS, ("does not have any commits yet", "bad default revision 'head'")),
    (ErrorKind.NOTHING_TO_COMMIT, ("nothing to commit", "nothing added to commit", "working tree clean")),
    (ErrorKind.NOT_FULLY_MERGED, ("not fully merged",)),
    (ErrorKind.ALREADY_EXISTS, ("already exists",)),
    (ErrorKind.LOCAL_CHANGES, ("your local changes", "would be overwritten")),
    (ErrorKind.MERGE_CONFLICT, ("conflict", "unmerged paths", "needs merge")),
    (ErrorKind.NO_UPSTREAM, ("has no upstream branch", "no tracking information")),
    (ErrorKind.REJECTED, ("[rejected]", "failed to push some refs", "non-fast-forward")),
    (ErrorKind.NO_SUCH_REMOTE, ("no such remote",)),
    (ErrorKind.REMOTE_NOT_FOUND, ("repository not found", "does not appear to be a git repository")),
    (ErrorKind.AUTH_FAILED, ("permission denied", "authentication failed", "could not read username")),
    (ErrorKind.NETWORK, ("could not resolve host", "connection timed out", "unable to access", "network is unreachable")),
    (
        ErrorKind.UNKNOWN_REF,
        (
            "did not match any file",
            "unknown revision",
            "ambiguous argument",
            "not a valid object name",
            "invalid reference",
            "not a valid ref",
            "not found in upstream",
        ),
    ),
]

_HINTS: dict[ErrorKind, str] = {
    ErrorKind.NOT_A_REPOSITORY: "Navigate to your project directory or run: ginit",
    ErrorKind.NOT_INSTALLED: "Install git and make sure it is on your PATH",
    ErrorKind.NOTHING_TO_COMMIT: "Make some changes first, then try again",
    ErrorKind.ALREADY_EXISTS: "Pick a different name, or switch to the existing one",
    ErrorKind.NOT_FULLY_MERGED: "Use gbranch -D <name> to force delete an unmerged branch",
    ErrorKind.UNKNOWN_REF: "Check the name with: gbranch -a  or  glog",
    ErrorKind.LOCAL_CHANGES: "Commit with gcommit or stash with gstash first",
    ErrorKind.MERGE_CONFLICT: "Resolve the conflicts, then stage the files with gadd and commit",
    ErrorKind.NO_UPSTREAM: "Set an upstream with: gpush --upstream",
    ErrorKind.REJECTED: "The remote has new commits. Run gpull first, or gpush --force if you are sure",
    ErrorKind.NO_SUCH_REMOTE: "List configured remotes with: gremote -v",
    ErrorKind.NO_COMMITS: "Make a first commit with: gquick \"Initial commit\"",
    ErrorKind.AUTH_FAILED: "Check your credentials or SSH keys for this remote",
    ErrorKind.REMOTE_NOT_FOUND: "Check the repository URL and that you have access to it",
    ErrorKind.NETWORK: "Check your network connection and try again",
}


def classify(result: CmdResult) -> ErrorKind:
    """Map a failed command result to an ErrorKind."""
    if result.ok:
        raise ValueError("cannot classify a successful result")
    if result.code == NOT_FOUND_CODE:
        return ErrorKind.NOT_INSTALLED
    text = f"{result.stderr}\n{result.stdout}".lower()
    for kind, needles in _PATTERNS:
        if any(n in text for n in needles):
            return kind
    return ErrorKind.UNKNOWN


def hint_for(kind: ErrorKind) -> Optional[str]:
    return _HINTS.get(kind)


class GaliasError(Exception):
    """Base class for failures reported at the CLI boundary (exit 1)."""

    kind = ErrorKind.UNKNOWN

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self._hint = hint

    @property
    def hint(self) -> Optional[str]:
        return self._hint or hint_for(self.kind)

    @hint.setter
    def hint(self, value: Optional[str]) -> None:
        self._hint = value


class RepositoryNotFoundError(GaliasError):
    """Raised when a tool that needs a work tree runs outside of one."""

    kind = ErrorKind.NOT_A_REPOSITORY

    def __init__(self, path: str):
        super().__init__(f"Not a git repository: {path}")
        self.path = path


class GitCommandError(GaliasError):
    """Raised for a git invocation that exited non-zero."""

    def __init__(self, args: list[str], result: CmdResult, hint: Optional[str] = None):
        self.args_used = list(args)
        self.result = result
        self.kind = classify(result)
        detail = result.output or f"exit status {result.code}"
        super().__init__(f"git {' '.join(args)} failed: {detail}", hint)


class UsageError(GaliasError):
    """Raised for missing or invalid user input, or a refused precondition."""


class NothingToDo(Exception):
    """Raised when there is nothing to act on. Reported as a notice, exit 0."""

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint
