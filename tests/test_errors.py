import pytest

from galias.core.errors import (
    ErrorKind,
    GitCommandError,
    NothingToDo,
    RepositoryNotFoundError,
    UsageError,
    classify,
    hint_for,
)
from galias.core.util import NOT_FOUND_CODE, CmdResult


def _fail(stderr, stdout="", code=1):
    return CmdResult(code, stdout, stderr)


@pytest.mark.parametrize(
    "stderr, kind",
    [
        ("fatal: not a git repository (or any of the parent directories): .git", ErrorKind.NOT_A_REPOSITORY),
        ("fatal: A branch named 'dev' already exists.", ErrorKind.ALREADY_EXISTS),
        ("error: The branch 'x' is not fully merged.", ErrorKind.NOT_FULLY_MERGED),
        ("error: pathspec 'nope' did not match any file(s) known to git", ErrorKind.UNKNOWN_REF),
        ("fatal: your current branch 'main' does not have any commits yet", ErrorKind.NO_COMMITS),
        ("fatal: The current branch dev has no upstream branch.", ErrorKind.NO_UPSTREAM),
        (" ! [rejected]        main -> main (fetch first)", ErrorKind.REJECTED),
        ("error: No such remote: 'upstream'", ErrorKind.NO_SUCH_REMOTE),
        ("ERROR: Repository not found.", ErrorKind.REMOTE_NOT_FOUND),
        ("git@github.com: Permission denied (publickey).", ErrorKind.AUTH_FAILED),
        ("fatal: unable to access 'https://x/': Could not resolve host: x", ErrorKind.NETWORK),
        ("something nobody has seen before", ErrorKind.UNKNOWN),
    ],
)
def test_classify_stderr(stderr, kind):
    assert classify(_fail(stderr)) is kind


def test_classify_reads_stdout_when_stderr_is_empty():
    assert classify(_fail("", "nothing to commit, working tree clean")) is ErrorKind.NOTHING_TO_COMMIT
    assert classify(_fail("", "CONFLICT (content): Merge conflict in a.txt")) is ErrorKind.MERGE_CONFLICT


def test_missing_executable_is_not_installed():
    assert classify(_fail("git: command not found", code=NOT_FOUND_CODE)) is ErrorKind.NOT_INSTALLED


def test_classify_refuses_success():
    with pytest.raises(ValueError):
        classify(CmdResult(0, "", ""))


def test_hint_is_a_pure_function_of_kind():
    assert hint_for(ErrorKind.NOT_FULLY_MERGED) == hint_for(ErrorKind.NOT_FULLY_MERGED)
    assert "-D" in hint_for(ErrorKind.NOT_FULLY_MERGED)
    assert "gpull" in hint_for(ErrorKind.REJECTED)
    assert hint_for(ErrorKind.UNKNOWN) is None


def test_git_command_error_carries_kind_and_hint():
    err = GitCommandError(["branch", "-d", "x"], _fail("error: The branch 'x' is not fully merged."))
    assert err.kind is ErrorKind.NOT_FULLY_MERGED
    assert err.hint == hint_for(ErrorKind.NOT_FULLY_MERGED)
    assert "git branch -d x failed" in err.message


def test_explicit_hint_overrides_kind_hint():
    err = GitCommandError(["stash", "pop"], _fail("CONFLICT (content)"), hint="custom")
    assert err.hint == "custom"
    err.hint = None
    assert err.hint == hint_for(ErrorKind.MERGE_CONFLICT)


def test_repository_not_found_hint_suggests_ginit():
    err = RepositoryNotFoundError("/tmp/x")
    assert err.kind is ErrorKind.NOT_A_REPOSITORY
    assert "ginit" in err.hint


def test_usage_error_and_nothing_to_do_keep_messages():
    assert UsageError("bad", "try this").hint == "try this"
    assert NothingToDo("clean").hint is None
