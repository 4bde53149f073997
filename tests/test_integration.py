"""End to end runs against real temporary repositories."""

import shutil

import pytest

from galias.cli import run_tool

from .conftest import output

pytestmark = pytest.mark.skipif(shutil.which("git") is None, reason="git is not installed")


def test_gquick_stages_and_commits_untracked_file(git_repo, git, console):
    (git_repo / "src").mkdir()
    (git_repo / "src" / "app.js").write_text("console.log('hi')\n")

    assert run_tool("gquick", [], cwd=str(git_repo), console=console) == 0

    assert git(git_repo, "log", "-1", "--pretty=%s").strip() == "Add app.js"
    assert git(git_repo, "status", "--porcelain").strip() == ""
    assert "src/app.js" in git(git_repo, "show", "--name-only", "--pretty=").split()


def test_gquick_counts_each_file_in_a_new_directory(git_repo, git, console):
    (git_repo / "lib").mkdir()
    (git_repo / "lib" / "a.py").write_text("a = 1\n")
    (git_repo / "lib" / "b.py").write_text("b = 2\n")

    assert run_tool("gquick", [], cwd=str(git_repo), console=console) == 0
    assert git(git_repo, "log", "-1", "--pretty=%s").strip() == "Add 2 files: 2 added"


def test_gquick_names_non_ascii_file(git_repo, git, console):
    (git_repo / "café.txt").write_text("au lait\n")

    assert run_tool("gquick", [], cwd=str(git_repo), console=console) == 0
    assert git(git_repo, "log", "-1", "--pretty=%s").strip() == "Add café.txt"


def test_gquick_summarizes_several_files(git_repo, git, console):
    (git_repo / "README.md").write_text("# changed\n")
    (git_repo / "a.txt").write_text("a\n")
    (git_repo / "b.txt").write_text("b\n")

    assert run_tool("gquick", [], cwd=str(git_repo), console=console) == 0
    assert git(git_repo, "log", "-1", "--pretty=%s").strip() == "Update 3 files: 2 added, 1 modified"


def test_gstatus_on_clean_repo_is_idempotent(git_repo, console):
    assert run_tool("gstatus", [], cwd=str(git_repo), console=console) == 0
    first = output(console)
    assert "Working tree clean" in first
    assert "main" in first
    assert run_tool("gstatus", [], cwd=str(git_repo), console=console) == 0
    assert output(console) == first + first


def test_gstatus_from_a_subdirectory(git_repo, console):
    sub = git_repo / "pkg"
    sub.mkdir()
    (sub / "mod.py").write_text("x = 1\n")
    assert run_tool("gstatus", [], cwd=str(sub), console=console) == 0
    assert "Untracked (1)" in output(console)


def test_outside_repository(tmp_path, console):
    assert run_tool("gsave", [], cwd=str(tmp_path), console=console) == 1
    assert "Not a git repository" in output(console)


def test_stash_and_pop_round_trip(git_repo, git, console):
    (git_repo / "README.md").write_text("# work in progress\n")
    assert run_tool("gstash", ["halfway", "there"], cwd=str(git_repo), console=console) == 0
    assert git(git_repo, "status", "--porcelain").strip() == ""
    assert "halfway there" in git(git_repo, "stash", "list")

    assert run_tool("gpop", [], cwd=str(git_repo), console=console) == 0
    assert (git_repo / "README.md").read_text() == "# work in progress\n"
    assert git(git_repo, "stash", "list").strip() == ""


def test_gpop_without_stashes_is_a_no_op(git_repo, console):
    assert run_tool("gpop", [], cwd=str(git_repo), console=console) == 0
    assert "No stashes found" in output(console)


def test_branch_create_checkout_and_delete(git_repo, git, console):
    assert run_tool("gbranch", ["topic"], cwd=str(git_repo), console=console) == 0
    assert run_tool("gcheckout", ["topic"], cwd=str(git_repo), console=console) == 0
    assert git(git_repo, "branch", "--show-current").strip() == "topic"
    assert run_tool("gcheckout", ["main"], cwd=str(git_repo), console=console) == 0
    assert run_tool("gbranch", ["-d", "topic"], cwd=str(git_repo), console=console) == 0
    assert "topic" not in git(git_repo, "branch")


def test_gbranch_existing_name_reports_hint(git_repo, console):
    assert run_tool("gbranch", ["main"], cwd=str(git_repo), console=console) == 1
    assert "already exists" in output(console)


def test_gcommit_without_staged_changes_is_a_no_op(git_repo, git, console):
    (git_repo / "README.md").write_text("# edited\n")
    assert run_tool("gcommit", ["Edit readme"], cwd=str(git_repo), console=console) == 0
    assert "No staged changes" in output(console)
    assert git(git_repo, "log", "-1", "--pretty=%s").strip() == "Initial commit"


def test_gadd_then_gcommit(git_repo, git, console):
    (git_repo / "notes.txt").write_text("n\n")
    assert run_tool("gadd", ["notes.txt"], cwd=str(git_repo), console=console) == 0
    assert run_tool("gcommit", ["Add", "notes"], cwd=str(git_repo), console=console) == 0
    assert git(git_repo, "log", "-1", "--pretty=%s").strip() == "Add notes"


def test_greset_unstages_a_file(git_repo, git, console):
    (git_repo / "README.md").write_text("# staged\n")
    git(git_repo, "add", "README.md")
    assert run_tool("greset", ["README.md"], cwd=str(git_repo), console=console) == 0
    assert git(git_repo, "diff", "--cached", "--name-only").strip() == ""
    assert "Unstaged README.md" in output(console)


def test_gbackup_creates_backup_branch(git_repo, git, console):
    assert run_tool("gbackup", ["--name", "safe"], cwd=str(git_repo), console=console) == 0
    branches = git(git_repo, "branch", "--format=%(refname:short)").split()
    assert any(b.startswith("backup-safe-") for b in branches)
    assert run_tool("gbackup", ["--list"], cwd=str(git_repo), console=console) == 0
    assert "backup-safe-" in output(console)


def test_glog_lists_commits(git_repo, console):
    assert run_tool("glog", ["5"], cwd=str(git_repo), console=console) == 0
    assert "Initial commit" in output(console)


def test_gsave_wip_message(git_repo, git, console):
    git(git_repo, "checkout", "-q", "-b", "feature/login")
    (git_repo / "login.py").write_text("pass\n")
    assert run_tool("gsave", ["--wip"], cwd=str(git_repo), console=console) == 0
    assert git(git_repo, "log", "-1", "--pretty=%s").strip() == "WIP: feature/login - ongoing development"


def test_ginit_creates_then_reports_existing(tmp_path, console):
    target = tmp_path / "fresh"
    assert run_tool("ginit", [str(target)], cwd=str(tmp_path), console=console) == 0
    assert (target / ".git").is_dir()
    assert run_tool("ginit", [str(target)], cwd=str(tmp_path), console=console) == 0
    assert "already exists" in output(console)
