from __future__ import annotations

import io
import shutil
import subprocess

import pytest
from rich.console import Console

from galias.core.repo import Repo
from galias.core.util import CmdResult

FAKE_ROOT = "/fake/repo"


class FakeRunner:
    """Records git invocations and answers them from canned results.

    Keys are the git arguments joined by spaces; the longest key that
    prefixes an invocation wins. Unmatched invocations succeed silently.
    """

    def __init__(self, responses: dict[str, CmdResult | str] | None = None, in_repo: bool = True):
        self.calls: list[list[str]] = []
        self.responses: dict[str, CmdResult] = {}
        if in_repo:
            self.responses["rev-parse --show-toplevel"] = CmdResult(0, FAKE_ROOT, "")
        else:
            self.responses["rev-parse --show-toplevel"] = CmdResult(
                128, "", "fatal: not a git repository (or any of the parent directories): .git"
            )
        for key, value in (responses or {}).items():
            self.responses[key] = CmdResult(0, value, "") if isinstance(value, str) else value

    def __call__(self, cmd: list[str], cwd: str | None = None, interactive: bool = False) -> CmdResult:
        self.calls.append(list(cmd))
        key = " ".join(cmd[1:])
        best = None
        for prefix in self.responses:
            if key == prefix or key.startswith(prefix + " "):
                if best is None or len(prefix) > len(best):
                    best = prefix
        return self.responses[best] if best is not None else CmdResult(0, "", "")

    @property
    def git_args(self) -> list[str]:
        return [" ".join(c[1:]) for c in self.calls]

    def ran(self, prefix: str) -> bool:
        return any(a == prefix or a.startswith(prefix + " ") for a in self.git_args)


@pytest.fixture
def console() -> Console:
    return Console(file=io.StringIO(), width=200, color_system=None, highlight=False, emoji=False, soft_wrap=True)


def output(console: Console) -> str:
    return console.file.getvalue()


@pytest.fixture
def fake_repo():
    def make(responses=None) -> tuple[Repo, FakeRunner]:
        runner = FakeRunner(responses)
        return Repo(root=FAKE_ROOT, cwd=FAKE_ROOT, runner=runner), runner

    return make


def _git(cwd, *args: str) -> str:
    return subprocess.run(["git", *args], cwd=cwd, check=True, capture_output=True, text=True).stdout


@pytest.fixture
def git_repo(tmp_path):
    """A fresh repository on branch main with one commit."""
    if shutil.which("git") is None:
        pytest.skip("git is not installed")
    path = tmp_path / "repo"
    path.mkdir()
    _git(path, "init", "-q")
    _git(path, "symbolic-ref", "HEAD", "refs/heads/main")
    _git(path, "config", "user.name", "Test User")
    _git(path, "config", "user.email", "test@example.com")
    _git(path, "config", "commit.gpgsign", "false")
    (path / "README.md").write_text("# demo\n")
    _git(path, "add", "README.md")
    _git(path, "commit", "-q", "-m", "Initial commit")
    return path


@pytest.fixture
def git():
    return _git
