import subprocess
from pathlib import Path

import pytest

# Two commits touching lines 1-2 of notes.txt: "foo\nbaz\n" then "foo\nbar\n"
SCENARIO_LOG = """\
commit 1111111111111111111111111111111111111111 Rename baz to bar

diff --git a/notes.txt b/notes.txt
--- a/notes.txt
+++ b/notes.txt
@@ -1,2 +1,2 @@
 foo
-baz
+bar

commit 2222222222222222222222222222222222222222 Add notes

diff --git a/notes.txt b/notes.txt
new file mode 100644
--- /dev/null
+++ b/notes.txt
@@ -0,0 +1,2 @@
+foo
+baz
"""

# Working copy of "foo\nbar\n" with one uncommitted line inserted on top
WORKING_DIFF_INSERT = """\
diff --git a/notes.txt b/notes.txt
index 3bd1f0e..a9c2b1f 100644
--- a/notes.txt
+++ b/notes.txt
@@ -1,2 +1,3 @@
+new
 foo
 bar
"""

# Working copy of "foo\nbar\n" with line 2 edited
WORKING_DIFF_EDIT = """\
diff --git a/notes.txt b/notes.txt
index 3bd1f0e..5e40c08 100644
--- a/notes.txt
+++ b/notes.txt
@@ -1,2 +1,2 @@
 foo
-bar
+BAR
"""


def run_git(repo: Path, *args: str) -> str:
    result = subprocess.run(
        ["git", *args],
        cwd=repo,
        capture_output=True,
        text=True,
        check=True,
    )
    return result.stdout


@pytest.fixture
def git_repo(tmp_path, monkeypatch):
    """An empty git repository isolated from the user's git config."""
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(tmp_path / "gitconfig"))
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    repo = tmp_path / "repo"
    repo.mkdir()
    run_git(repo, "init", "-q")
    run_git(repo, "config", "user.email", "test@example.com")
    run_git(repo, "config", "user.name", "Test User")
    run_git(repo, "config", "commit.gpgsign", "false")
    return repo


@pytest.fixture
def commit_file(git_repo):
    """Write a file into the repo and commit it; returns the file path."""

    def _commit(name: str, content: str, message: str) -> Path:
        path = git_repo / name
        path.write_bytes(content.encode("utf-8"))
        run_git(git_repo, "add", name)
        run_git(git_repo, "commit", "-q", "-m", message)
        return path

    return _commit


@pytest.fixture
def scenario_file(commit_file):
    """notes.txt committed as "foo\\nbaz\\n" and then as "foo\\nbar\\n"."""
    commit_file("notes.txt", "foo\nbaz\n", "Add notes")
    return commit_file("notes.txt", "foo\nbar\n", "Rename baz to bar")


@pytest.fixture
def outside_file(tmp_path, monkeypatch):
    """A file in a directory that is not inside any git work tree."""
    outside = tmp_path / "outside"
    outside.mkdir()
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    path = outside / "loose.txt"
    path.write_text("loose\n")
    return path
