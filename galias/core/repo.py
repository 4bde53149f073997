from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field

from .errors import GitCommandError, RepositoryNotFoundError
from .util import CmdResult, Runner, run

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Repo:
    """Handle to the directory git runs in.

    ``root`` is the top of the work tree, ``cwd`` the directory the user
    invoked the tool from (relative paths resolve against it).
    """

    root: str
    cwd: str
    runner: Runner = field(default=run, repr=False, compare=False)

    def git(self, *args: str, check: bool = True, interactive: bool = False) -> CmdResult:
        cmd = ["git", *args]
        logger.debug("git %s", " ".join(args))
        res = self.runner(cmd, cwd=self.cwd, interactive=interactive)
        if check and not res.ok:
            raise GitCommandError(list(args), res)
        return res


def find_repo(cwd: str | None = None, runner: Runner = run) -> Repo:
    cwd = os.path.abspath(cwd or os.getcwd())
    res = runner(["git", "rev-parse", "--show-toplevel"], cwd=cwd, interactive=False)
    if not res.ok or not res.stdout.strip():
        raise RepositoryNotFoundError(cwd)
    return Repo(root=res.stdout.strip(), cwd=cwd, runner=runner)


def try_find_repo(cwd: str | None = None, runner: Runner = run) -> Repo | None:
    try:
        return find_repo(cwd, runner)
    except RepositoryNotFoundError:
        return None


def unchecked_repo(cwd: str | None = None, runner: Runner = run) -> Repo:
    """Handle for tools that create repositories (ginit, gclone)."""
    cwd = os.path.abspath(cwd or os.getcwd())
    return Repo(root=cwd, cwd=cwd, runner=runner)
