from galias.core.status import ChangeSummary, Entry, auto_message, parse_status


def test_staged_modified_and_untracked():
    report = parse_status("M  file1.txt\n?? file2.txt")
    assert report.staged == [("file1.txt", "modified")]
    assert report.untracked == ["file2.txt"]
    assert report.modified == []
    assert not report.clean


def test_no_entries_is_clean_and_uncategorized():
    report = parse_status("## main...origin/main")
    assert report.clean
    assert report.branch == "main"
    assert report.upstream == "origin/main"
    assert report.staged == report.modified == report.untracked == []


def test_branch_line_with_tracking_counts():
    report = parse_status("## feature/x...origin/feature/x [ahead 2, behind 1]\n M app.py")
    assert report.branch == "feature/x"
    assert report.upstream == "origin/feature/x"
    assert (report.ahead, report.behind) == (2, 1)
    assert report.modified == ["app.py"]


def test_branch_without_upstream_and_unborn_branch():
    assert parse_status("## main").upstream is None
    report = parse_status("## No commits yet on main\n?? a.txt")
    assert report.branch == "main"
    assert report.untracked == ["a.txt"]


def test_detached_head():
    report = parse_status("## HEAD (no branch)")
    assert report.detached
    assert report.branch is None


def test_gone_upstream():
    report = parse_status("## main...origin/main [gone]")
    assert report.gone


def test_index_and_worktree_columns_are_both_read():
    report = parse_status("MM both.py\nA  new.py\nD  gone.py\n D removed.py\nT  mode.sh")
    assert ("both.py", "modified") in report.staged
    assert "both.py" in report.modified
    assert ("new.py", "added") in report.staged
    assert ("gone.py", "deleted") in report.staged
    assert report.deleted == ["removed.py"]
    assert ("mode.sh", "staged") in report.staged


def test_renames_and_conflicts():
    report = parse_status("R  old.py -> new.py\nUU merge.txt")
    assert report.renamed == ["old.py -> new.py"]
    assert report.conflicted == ["merge.txt"]
    assert report.entries[0].path == "new.py"
    assert report.has_staged


def test_quoted_paths_are_unquoted():
    report = parse_status('?? "weird \\"name\\".txt"')
    assert report.untracked == ['weird "name".txt']


def test_octal_escaped_paths_decode_to_utf8():
    report = parse_status('?? "caf\\303\\251.txt"\n M "tab\\there.md"')
    assert report.untracked == ["café.txt"]
    assert report.modified == ["tab\there.md"]
    assert auto_message(ChangeSummary.from_entries(report.entries[:1])) == "Add café.txt"


def test_ignored_entries_are_skipped():
    assert parse_status("!! build/").clean


def _summary(*lines):
    return ChangeSummary.from_entries(parse_status("\n".join(lines)).entries)


def test_single_added_file_message_uses_basename():
    assert auto_message(_summary("?? src/app.js")) == "Add app.js"
    assert auto_message(_summary("A  src/app.js")) == "Add app.js"


def test_single_file_verbs():
    assert auto_message(_summary(" M lib/util.py")) == "Update util.py"
    assert auto_message(_summary(" D docs/old.md")) == "Remove old.md"
    assert auto_message(_summary("R  a.txt -> b/c.txt")) == "Rename c.txt"


def test_multiple_files_counts_in_fixed_order():
    summary = _summary(" D z.txt", " M y.txt", "?? x.txt", "R  a -> b", " M w.txt")
    assert auto_message(summary) == "Update 5 files: 1 added, 2 modified, 1 deleted, 1 renamed"


def test_multiple_files_same_category_keep_its_verb():
    assert auto_message(_summary("?? a.txt", "?? b.txt")) == "Add 2 files: 2 added"
    assert auto_message(_summary(" M a.txt", " D b.txt", " M c.txt")) == "Update 3 files: 2 modified, 1 deleted"


def test_staged_only_summary_ignores_worktree_changes():
    entries = [Entry("M ", "a.py"), Entry(" M", "b.py"), Entry("??", "c.py")]
    summary = ChangeSummary.from_entries(entries, staged_only=True)
    assert summary.files == (("modified", "a.py"),)
