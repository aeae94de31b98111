"""Shared test fixtures for differing tests."""

import os
import subprocess
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import pytest
from rich.console import Console

from differing.repository import DiffRepository

NOTES_V1 = "alpha\nbeta\ngamma\n"
NOTES_V2 = "alpha\nBETA\ngamma\n"
NOTES_WORKING = "alpha\nBETA\ngamma\ndelta\n"
README = "# Demo\n"
OTHER = "one\ntwo\n"


def run_git(cwd: Path, *args: str) -> str:
    """Run git in ``cwd`` and return its stripped standard output."""
    completed = subprocess.run(
        ["git", *args],
        cwd=str(cwd),
        capture_output=True,
        check=True,
        text=True,
    )
    return completed.stdout.strip()


def init_git_repo(path: Path) -> None:
    """Initialize an empty git repository on a ``main`` branch."""
    path.mkdir(parents=True, exist_ok=True)
    run_git(path, "init", "-q")
    run_git(path, "symbolic-ref", "HEAD", "refs/heads/main")


def commit_all(path: Path, message: str) -> str:
    """Stage everything in ``path``, commit it and return the new hash."""
    run_git(path, "add", "-A")
    run_git(path, "commit", "-q", "-m", message)
    return run_git(path, "rev-parse", "HEAD")


@dataclass(frozen=True, slots=True)
class GitRepo:
    """A test repository with three commits and an uncommitted edit.

    History:
        c1 "Initial commit": notes.txt (3 lines) and README.md
        c2 "Add other": other.txt (2 lines)
        c3 "Capitalize beta": notes.txt line 2 changed
        working tree: notes.txt gains a fourth line (not staged)
    """

    path: Path
    c1: str
    c2: str
    c3: str

    def git(self, *args: str) -> str:
        return run_git(self.path, *args)

    @property
    def head(self) -> str:
        return self.git("rev-parse", "HEAD")


@pytest.fixture(autouse=True)
def git_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Isolate git and differing from the user's configuration."""
    for key in list(os.environ):
        if key.startswith("DIFFERING_"):
            monkeypatch.delenv(key)

    global_config = tmp_path / ".gitconfig"
    global_config.touch()
    monkeypatch.setenv("GIT_CONFIG_NOSYSTEM", "1")
    monkeypatch.setenv("GIT_CONFIG_GLOBAL", str(global_config))
    monkeypatch.setenv("GIT_CEILING_DIRECTORIES", str(tmp_path))
    monkeypatch.setenv("GIT_AUTHOR_NAME", "Test User")
    monkeypatch.setenv("GIT_AUTHOR_EMAIL", "test@example.com")
    monkeypatch.setenv("GIT_COMMITTER_NAME", "Test User")
    monkeypatch.setenv("GIT_COMMITTER_EMAIL", "test@example.com")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


@pytest.fixture
def repo(tmp_path: Path) -> GitRepo:
    """Create the standard three-commit repository."""
    path = tmp_path / "repo"
    init_git_repo(path)

    (path / "notes.txt").write_text(NOTES_V1)
    (path / "README.md").write_text(README)
    c1 = commit_all(path, "Initial commit")

    (path / "other.txt").write_text(OTHER)
    c2 = commit_all(path, "Add other")

    (path / "notes.txt").write_text(NOTES_V2)
    c3 = commit_all(path, "Capitalize beta")

    (path / "notes.txt").write_text(NOTES_WORKING)
    return GitRepo(path=path.resolve(), c1=c1, c2=c2, c3=c3)


@pytest.fixture
def diff_repository(repo: GitRepo) -> Iterator[DiffRepository]:
    """Open the standard repository through the service facade."""
    with DiffRepository.open(repo.path) as diff_repo:
        yield diff_repo


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
