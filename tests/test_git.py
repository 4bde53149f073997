import pytest

from galias.core import git
from galias.core.errors import ErrorKind, GitCommandError
from galias.core.util import CmdResult


def test_status_parses_porcelain(fake_repo):
    repo, runner = fake_repo({"status --porcelain=v1 -b": "## main...origin/main [ahead 2]\n M a.py"})
    report = git.status(repo)
    assert report.branch == "main"
    assert report.ahead == 2
    assert report.modified == ["a.py"]
    assert runner.git_args == ["status --porcelain=v1 -b --untracked-files=all"]


def test_failed_command_raises_classified_error(fake_repo):
    repo, _ = fake_repo({"add -- nope.txt": CmdResult(128, "", "fatal: pathspec 'nope.txt' did not match any files")})
    with pytest.raises(GitCommandError) as exc:
        git.stage(repo, ["nope.txt"])
    assert exc.value.kind is ErrorKind.UNKNOWN_REF
    assert exc.value.args_used == ["add", "--", "nope.txt"]


def test_commit_returns_new_head(fake_repo):
    repo, runner = fake_repo({"rev-parse HEAD": "0123456789abcdef"})
    assert git.commit(repo, "Fix it") == "0123456789abcdef"
    assert runner.git_args == ["commit -m Fix it", "rev-parse HEAD"]


def test_current_branch_is_none_when_detached(fake_repo):
    repo, _ = fake_repo({"branch --show-current": ""})
    assert git.current_branch(repo) is None


def test_main_branch_prefers_main_then_master(fake_repo):
    missing = CmdResult(1, "", "")
    repo, _ = fake_repo({"rev-parse --verify --quiet refs/heads/main": missing})
    assert git.main_branch(repo) == "master"
    repo, _ = fake_repo(
        {
            "rev-parse --verify --quiet refs/heads/main": missing,
            "rev-parse --verify --quiet refs/heads/master": missing,
        }
    )
    assert git.main_branch(repo) is None


def test_branch_remote_defaults_to_origin(fake_repo):
    repo, _ = fake_repo({"config --get branch.dev.remote": CmdResult(1, "", "")})
    assert git.branch_remote(repo, "dev") == "origin"
    repo, _ = fake_repo({"config --get branch.dev.remote": "upstream"})
    assert git.branch_remote(repo, "dev") == "upstream"


def test_commit_count_tolerates_empty_history(fake_repo):
    repo, _ = fake_repo({"rev-list --count HEAD": CmdResult(128, "", "fatal: bad revision 'HEAD'")})
    assert git.commit_count(repo) == 0
    repo, _ = fake_repo({"rev-list --count HEAD": "42"})
    assert git.commit_count(repo) == 42


def test_stash_push_can_include_untracked(fake_repo):
    repo, runner = fake_repo()
    git.stash_push(repo, "refresh", include_untracked=True)
    assert runner.git_args == ["stash push -m refresh --include-untracked"]
