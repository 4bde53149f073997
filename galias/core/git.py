from __future__ import annotations

import logging
from typing import Optional

from . import settings
from .repo import Repo
from .status import StatusReport, parse_status

logger = logging.getLogger(__name__)


def status(repo: Repo) -> StatusReport:
    res = repo.git("status", "--porcelain=v1", "-b", "--untracked-files=all")
    return parse_status(res.stdout)


def has_changes(repo: Repo) -> bool:
    res = repo.git("status", "--porcelain")
    return bool(res.stdout.strip())


def staged_files(repo: Repo) -> list[str]:
    return repo.git("diff", "--cached", "--name-only").lines


def current_branch(repo: Repo) -> Optional[str]:
    res = repo.git("branch", "--show-current", check=False)
    if not res.ok:
        return None
    return res.stdout.strip() or None


def head_ref(repo: Repo) -> str:
    return current_branch(repo) or short_sha(repo) or "HEAD"


def short_sha(repo: Repo, ref: str = "HEAD") -> Optional[str]:
    res = repo.git("rev-parse", "--short", ref, check=False)
    return res.stdout.strip() if res.ok else None


def has_commits(repo: Repo) -> bool:
    return repo.git("rev-parse", "--verify", "--quiet", "HEAD", check=False).ok


def ref_exists(repo: Repo, ref: str) -> bool:
    return repo.git("rev-parse", "--verify", "--quiet", ref, check=False).ok


def branch_exists(repo: Repo, name: str) -> bool:
    return ref_exists(repo, f"refs/heads/{name}")


def merged_branches(repo: Repo, into: str = "HEAD") -> list[str]:
    return repo.git("branch", "--merged", into, "--format=%(refname:short)").lines


def is_tracked(repo: Repo, path: str) -> bool:
    return repo.git("ls-files", "--error-unmatch", "--", path, check=False).ok


def stage_all(repo: Repo) -> None:
    logger.info("staging all changes in %s", repo.root)
    repo.git("add", "-A")


def stage(repo: Repo, paths: list[str]) -> None:
    repo.git("add", "--", *paths)


def commit(repo: Repo, message: str, amend: bool = False) -> str:
    args = ["commit", "-m", message]
    if amend:
        args.append("--amend")
    repo.git(*args)
    return repo.git("rev-parse", "HEAD").stdout.strip()


def stash_list(repo: Repo) -> list[str]:
    return repo.git("stash", "list", check=False).lines


def stash_push(repo: Repo, message: str, include_untracked: bool = False) -> None:
    args = ["stash", "push", "-m", message]
    if include_untracked:
        args.append("--include-untracked")
    repo.git(*args)


def remotes(repo: Repo) -> list[str]:
    return repo.git("remote").lines


def has_remote(repo: Repo, name: str = settings.DEFAULT_REMOTE) -> bool:
    return name in remotes(repo)


def branch_remote(repo: Repo, branch: str) -> str:
    res = repo.git("config", "--get", f"branch.{branch}.remote", check=False)
    return res.stdout.strip() or settings.DEFAULT_REMOTE


def main_branch(repo: Repo) -> Optional[str]:
    for name in settings.MAIN_BRANCHES:
        if branch_exists(repo, name):
            return name
    return None


def commit_count(repo: Repo, ref: str = "HEAD") -> int:
    res = repo.git("rev-list", "--count", ref, check=False)
    return int(res.stdout) if res.ok and res.stdout.strip().isdigit() else 0


def latest_tag(repo: Repo) -> Optional[str]:
    res = repo.git("describe", "--tags", "--abbrev=0", check=False)
    return res.stdout.strip() if res.ok and res.stdout.strip() else None
