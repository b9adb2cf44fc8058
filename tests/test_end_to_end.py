"""End-to-end walks against real git repositories."""

import pytest

from region_undo.exceptions import HistoryExhaustedError, NoMappingError, QueryFailedError
from region_undo.session.browser import browse_history
from region_undo.session.buffer import LineBuffer
from region_undo.session.undo_session import UndoSession


def _walk(path, start, end):
    buffer = LineBuffer.from_file(path)
    session = UndoSession(buffer, path)
    texts = [session.start(start, end).text]
    while True:
        try:
            texts.append(session.step().text)
        except HistoryExhaustedError:
            return texts, buffer


def test_scenario_steps_back_to_previous_commit(scenario_file):
    buffer = LineBuffer.from_file(scenario_file)
    session = UndoSession(buffer, scenario_file)

    result = session.start(1, 2)

    assert result.patch.commit is not None
    assert buffer.text() == "foo\nbaz\n"


def test_full_walk_ends_before_file_existed(scenario_file):
    texts, buffer = _walk(scenario_file, 1, 2)
    assert texts == ["foo\nbaz\n", ""]
    assert buffer.text() == ""
    assert scenario_file.read_text() == "foo\nbar\n"


def test_walk_only_touches_selected_lines(commit_file):
    commit_file("code.txt", "head\na\nb\nc\ntail\n", "Add")
    path = commit_file("code.txt", "head\na\nB\nc\ntail\n", "Capitalise b")
    commit_file("code.txt", "HEAD\na\nB\nc\ntail\n", "Capitalise head")

    buffer = LineBuffer.from_file(path)
    session = UndoSession(buffer, path)
    session.start(3, 3)

    assert buffer.text() == "HEAD\na\nb\nc\ntail\n"


def test_uncommitted_edit_is_undone_first(commit_file):
    path = commit_file("notes.txt", "a\nb\nc\n", "Add")
    path.write_text("a\nX\nc\n")

    texts, _ = _walk(path, 1, 3)

    assert texts == ["a\nb\nc\n", ""]


def test_uncommitted_insert_shifts_history_range(commit_file):
    commit_file("notes.txt", "a\nb\nc\n", "Add")
    path = commit_file("notes.txt", "a\nB\nc\n", "Capitalise")
    path.write_text("new\na\nB\nc\n")

    buffer = LineBuffer.from_file(path)
    session = UndoSession(buffer, path)
    first = session.start(3, 3)

    assert first.patch.commit is not None
    assert buffer.text() == "new\na\nb\nc\n"


def test_selection_of_uncommitted_lines_has_no_mapping(scenario_file):
    scenario_file.write_text("brand new\nfoo\nbar\n")
    buffer = LineBuffer.from_file(scenario_file)
    with pytest.raises(NoMappingError):
        UndoSession(buffer, scenario_file).start(1, 1)


def test_untracked_file_has_no_history(scenario_file):
    path = scenario_file.parent / "draft.txt"
    path.write_text("draft\n")
    buffer = LineBuffer.from_file(path)
    session = UndoSession(buffer, path)

    assert session.start(1, 1).patch is None
    with pytest.raises(HistoryExhaustedError):
        session.step()
    assert buffer.text() == "draft\n"


def test_crlf_lines_are_preserved(commit_file):
    commit_file("win.txt", "a\r\nb\r\n", "Add")
    path = commit_file("win.txt", "a\r\nB\r\n", "Capitalise")

    buffer = LineBuffer.from_file(path)
    UndoSession(buffer, path).start(1, 2)

    assert buffer.text() == "a\r\nb\r\n"


def test_browse_history_lists_revisions(scenario_file):
    revisions = browse_history(scenario_file, 1, 2)

    assert [r.text for r in revisions] == ["foo\nbaz\n", ""]
    assert [r.position for r in revisions] == [0, 1]
    assert revisions[0].summary == "Rename baz to bar"
    assert "-baz" in revisions[0].diff_text
    assert "+bar" in revisions[0].diff_text
    assert "+foo" in revisions[1].diff_text
    assert revisions[0].diff_text.startswith(f"--- notes.txt@{revisions[0].commit[:12]}^\n")
    assert scenario_file.read_text() == "foo\nbar\n"


def test_browse_history_includes_uncommitted_step(scenario_file):
    scenario_file.write_text("foo\nqux\n")
    revisions = browse_history(scenario_file, 1, 2)
    assert revisions[0].commit is None
    assert revisions[0].diff_text.startswith(
        "--- notes.txt@HEAD\n+++ notes.txt (working copy)\n"
    )
    assert [r.text for r in revisions] == ["foo\nbar\n", "foo\nbaz\n", ""]


def test_carriage_return_inside_line_is_content(commit_file):
    commit_file("mixed.txt", "a\rx\nb\n", "Add")
    path = commit_file("mixed.txt", "a\rx\nB\n", "Capitalise")

    buffer = LineBuffer.from_file(path)
    result = UndoSession(buffer, path).start(1, 2)

    assert result.text == "a\rx\nb\n"
    assert buffer.text() == "a\rx\nb\n"


def test_file_outside_work_tree_reports_query_failure(outside_file):
    buffer = LineBuffer.from_file(outside_file)
    with pytest.raises(QueryFailedError):
        UndoSession(buffer, outside_file).start(1, 1)
    assert buffer.text() == "loose\n"
