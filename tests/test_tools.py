import argparse
from datetime import datetime

import pytest

from galias.core.errors import UsageError
from galias.tools import all_tools, get_tool
from galias.tools.backup import backup_name, stale_backups
from galias.tools.branch import list_args
from galias.tools.clone import clone_args, expand_url, target_dir
from galias.tools.commit import validate_message
from galias.tools.dev import normalize_branch_name
from galias.tools.diff import build_args
from galias.tools.log import LogEntry, log_args, parse_log
from galias.tools.pop import stash_ref
from galias.tools.release import Version
from galias.tools.remote import parse_verbose
from galias.tools.save import backup_message, wip_message


def _opts(tool, argv):
    return get_tool(tool).parser().parse_intermixed_args(argv)


def test_registry_has_unique_names_and_help():
    names = [t.name for t in all_tools()]
    assert len(names) == len(set(names))
    assert {"gstatus", "gquick", "gsave", "gbackup", "gfresh", "glist", "gremote-remove"} <= set(names)
    with pytest.raises(KeyError):
        get_tool("gnope")


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("feature-login", "feature/login"),
        ("feat-login", "feature/login"),
        ("fix-crash", "bugfix/crash"),
        ("bugfix-crash", "bugfix/crash"),
        ("hotfix-prod", "hotfix/prod"),
        ("login", "feature/login"),
        ("release/1.0", "release/1.0"),
    ],
)
def test_normalize_branch_name(raw, expected):
    assert normalize_branch_name(raw) == expected


def test_clone_url_shorthand_and_target():
    assert expand_url("octocat/Hello-World") == "https://github.com/octocat/Hello-World.git"
    assert expand_url("git@github.com:a/b.git") == "git@github.com:a/b.git"
    assert target_dir("https://github.com/a/b.git", None) == "b"
    assert target_dir("git@host:b", None) == "b"
    assert target_dir("https://x/a/b.git", "custom") == "custom"


def test_clone_args_forward_flags():
    opts = _opts("gclone", ["u/r", "dest", "--depth", "1", "--config", "a=b", "--config", "c=d", "--bare", "-b", "dev"])
    args = clone_args(opts, "https://github.com/u/r.git")
    assert args[:5] == ["clone", "--branch", "dev", "--depth", "1"]
    assert args.count("--config") == 2
    assert "--bare" in args
    assert args[-2:] == ["https://github.com/u/r.git", "dest"]


def test_commit_message_validation():
    assert validate_message("  Fix bug  ") == "Fix bug"
    with pytest.raises(UsageError):
        validate_message("")
    with pytest.raises(UsageError):
        validate_message("ab")
    with pytest.raises(UsageError):
        validate_message("x" * 101)
    assert validate_message("Subject\n\n" + "body " * 50).startswith("Subject")


def test_diff_args():
    assert build_args(_opts("gdiff", [])) == ["diff"]
    assert build_args(_opts("gdiff", ["--staged", "--stat"])) == ["diff", "--cached", "--stat"]
    assert build_args(_opts("gdiff", ["main"]), color=True) == ["diff", "--color=always", "main"]


def test_branch_list_args():
    assert list_args(_opts("gbranch", [])) == ["branch"]
    opts = _opts("gbranch", ["-a", "--merged", "--sort=-committerdate"])
    assert list_args(opts) == ["branch", "--all", "--merged", "--sort=-committerdate"]
    assert list_args(_opts("gbranch", ["--no-merged", "dev"])) == ["branch", "--no-merged", "dev"]


def test_log_args_and_parse():
    args = log_args(_opts("glog", ["20", "--author", "ann"]))
    assert args[:3] == ["log", "-n", "20"]
    assert "--author=ann" in args
    assert log_args(_opts("glog", ["--oneline"]))[:3] == ["log", "-n", "10"]
    entries = parse_log("abc\x1fAnn\x1f2 days ago\x1fFix it\x1fHEAD -> main\nnot a log line")
    assert entries == [LogEntry("abc", "Ann", "2 days ago", "Fix it", "HEAD -> main")]


def test_stash_ref():
    assert stash_ref(None) is None
    assert stash_ref("2") == "stash@{2}"
    assert stash_ref("stash@{1}") == "stash@{1}"


def test_versions():
    assert str(Version.parse("v1.2.3")) == "1.2.3"
    assert Version.parse("1.2.3-pre").bump("patch").tag == "v1.2.4"
    assert Version.parse("1.2.3").bump("minor") == Version(1, 3, 0)
    assert Version.parse("1.2.3").bump("major") == Version(2, 0, 0)
    with pytest.raises(UsageError):
        Version.parse("one.two")


def test_parse_verbose_remotes():
    text = "origin\tgit@a:x.git (fetch)\norigin\tgit@b:x.git (push)\nup\thttps://u (fetch)\nup\thttps://u (push)"
    remotes = parse_verbose(text)
    assert list(remotes) == ["origin", "up"]
    assert remotes["origin"] == {"fetch": "git@a:x.git", "push": "git@b:x.git"}


def test_backup_naming_and_staleness():
    assert backup_name("main", "2024-01-02T03-04-05") == "backup-main-2024-01-02T03-04-05"
    now = 1_000_000_000
    refs = [("backup-old", now - 31 * 86400), ("backup-new", now - 86400), ("backup-unknown", 0)]
    assert stale_backups(refs, now) == ["backup-old"]


def test_save_messages():
    assert wip_message("feature/x") == "WIP: feature/x - ongoing development"
    assert wip_message("bugfix/y") == "WIP: bugfix/y - bug fixing in progress"
    assert wip_message("main") == "WIP: work in progress on main"
    assert backup_message("main", 3, datetime(2024, 1, 1, 9, 5, 7)) == "Backup: main - 09:05:07 (3 files)"


def test_schema_defaults_are_namespaced():
    ns = _opts("gsave", [])
    assert isinstance(ns, argparse.Namespace)
    assert ns.message == [] and ns.wip is False and ns.staged is False
