"""Integration tests for diff, file and commit listings."""

from datetime import UTC, datetime
from pathlib import Path

import pytest

from differing.exceptions import (
    GitCommandError,
    InvalidRevisionError,
    UnknownRevisionError,
)
from differing.repository import (
    DiffEnumerator,
    DiffRepository,
    FileStatus,
    RevisionResolver,
)
from tests.conftest import GitRepo, commit_all, init_git_repo, run_git

NOW = datetime(2025, 1, 1, tzinfo=UTC)


class TestListDiffs:
    def test_working_entry_first(self, diff_repository: DiffRepository) -> None:
        working = diff_repository.list_diffs()[0]

        assert working.id == "working"
        assert working.message == "Working Changes"
        assert working.author == ""
        assert working.files_count == 1
        assert working.additions == 1
        assert working.deletions == 0

    def test_commits_newest_first(
        self, repo: GitRepo, diff_repository: DiffRepository
    ) -> None:
        diffs = diff_repository.list_diffs()

        assert [d.id for d in diffs] == ["working", repo.c3, repo.c2, repo.c1]
        assert [d.message for d in diffs[1:]] == [
            "Capitalize beta",
            "Add other",
            "Initial commit",
        ]
        assert all(d.author == "Test User" for d in diffs[1:])

    def test_commit_stats_against_first_parent(
        self, diff_repository: DiffRepository
    ) -> None:
        _, c3, c2, c1 = diff_repository.list_diffs()

        assert (c3.files_count, c3.additions, c3.deletions) == (1, 1, 1)
        assert (c2.files_count, c2.additions, c2.deletions) == (1, 2, 0)
        # Root commit compares against the empty tree
        assert (c1.files_count, c1.additions, c1.deletions) == (2, 4, 0)

    def test_working_timestamp(self, diff_repository: DiffRepository) -> None:
        runner = diff_repository.runner
        enumerator = DiffEnumerator(runner, RevisionResolver(runner))

        working = enumerator.list_diffs(now=NOW)[0]

        assert working.timestamp == NOW

    def test_commit_timestamps_are_aware(self, diff_repository: DiffRepository) -> None:
        for summary in diff_repository.list_diffs():
            assert summary.timestamp.tzinfo is not None

    @pytest.mark.parametrize("subject", ["Fix\u2028thing", "a\x1cb", "Para\u2029graph"])
    def test_subject_with_line_separator_characters(
        self, repo: GitRepo, subject: str
    ) -> None:
        _ = repo.git("commit", "-q", "--allow-empty", "-m", subject)

        with DiffRepository.open(repo.path) as diff_repo:
            diffs = diff_repo.list_diffs()
            commits = diff_repo.list_commits("working")

        assert [d.id for d in diffs] == [
            "working",
            repo.head,
            repo.c3,
            repo.c2,
            repo.c1,
        ]
        assert diffs[1].message == subject
        assert commits[0].message == subject
        assert commits[0].is_head

    def test_clean_working_tree(self, repo: GitRepo) -> None:
        _ = repo.git("checkout", "--", "notes.txt")

        with DiffRepository.open(repo.path) as diff_repo:
            working = diff_repo.list_diffs()[0]

        assert (working.files_count, working.additions, working.deletions) == (0, 0, 0)

    def test_max_commits(self, repo: GitRepo) -> None:
        with DiffRepository.open(repo.path, max_commits=2) as diff_repo:
            ids = [d.id for d in diff_repo.list_diffs()]

        assert ids == ["working", repo.c3, repo.c2]

    def test_binary_file_counts_without_lines(self, repo: GitRepo) -> None:
        (repo.path / "image.bin").write_bytes(b"\x00\x01\x02\xff")
        _ = repo.git("add", "image.bin")
        _ = repo.git("commit", "-q", "-m", "Add binary")

        with DiffRepository.open(repo.path) as diff_repo:
            binary = diff_repo.list_diffs()[1]

        assert binary.message == "Add binary"
        assert (binary.files_count, binary.additions, binary.deletions) == (1, 0, 0)

    def test_unborn_head(self, tmp_path: Path) -> None:
        path = tmp_path / "fresh"
        init_git_repo(path)
        (path / "staged.txt").write_text("a\nb\n")
        _ = run_git(path, "add", "staged.txt")

        with DiffRepository.open(path) as diff_repo:
            diffs = diff_repo.list_diffs()
            files = diff_repo.list_files("working")
            commits = diff_repo.list_commits("working")

        assert [d.id for d in diffs] == ["working"]
        assert diffs[0].files_count == 1
        assert diffs[0].additions == 2
        assert [(f.path, f.status) for f in files] == [("staged.txt", FileStatus.ADDED)]
        assert commits == []

    def test_empty_repository(self, tmp_path: Path) -> None:
        path = tmp_path / "empty"
        init_git_repo(path)

        with DiffRepository.open(path) as diff_repo:
            diffs = diff_repo.list_diffs()

        assert len(diffs) == 1
        assert diffs[0].files_count == 0

    def test_git_failure_aborts(self, repo: GitRepo, tmp_path: Path) -> None:
        with DiffRepository.open(repo.path) as opened:
            root = opened.root
        broken = DiffRepository(root, executable=str(tmp_path / "no-such-git"))

        try:
            with pytest.raises(GitCommandError):
                _ = broken.list_diffs()
        finally:
            broken.close()


class TestListFiles:
    def test_working(self, diff_repository: DiffRepository) -> None:
        files = diff_repository.list_files("working")

        assert [(f.path, f.status, f.additions, f.deletions) for f in files] == [
            ("notes.txt", FileStatus.MODIFIED, 1, 0)
        ]

    def test_commit_is_cumulative_through_working_tree(
        self, repo: GitRepo, diff_repository: DiffRepository
    ) -> None:
        files = diff_repository.list_files(repo.c2)

        assert [(f.path, f.status, f.additions, f.deletions) for f in files] == [
            ("notes.txt", FileStatus.MODIFIED, 2, 1),
            ("other.txt", FileStatus.ADDED, 2, 0),
        ]

    def test_root_commit_lists_everything_as_added(
        self, repo: GitRepo, diff_repository: DiffRepository
    ) -> None:
        files = diff_repository.list_files(repo.c1)

        assert [(f.path, f.status) for f in files] == [
            ("README.md", FileStatus.ADDED),
            ("notes.txt", FileStatus.ADDED),
            ("other.txt", FileStatus.ADDED),
        ]
        assert files[1].additions == 4

    def test_abbreviated_and_uppercase_ids(
        self, repo: GitRepo, diff_repository: DiffRepository
    ) -> None:
        full = diff_repository.list_files(repo.c3)

        assert diff_repository.list_files(repo.c3[:10]) == full
        assert diff_repository.list_files(repo.c3.upper()) == full

    def test_deleted_file(self, repo: GitRepo) -> None:
        (repo.path / "README.md").unlink()

        with DiffRepository.open(repo.path) as diff_repo:
            files = diff_repo.list_files("working")

        readme = next(f for f in files if f.path == "README.md")
        assert readme.status is FileStatus.DELETED
        assert readme.deletions == 1

    def test_untracked_files_are_not_listed(self, repo: GitRepo) -> None:
        (repo.path / "scratch.txt").write_text("scratch\n")

        with DiffRepository.open(repo.path) as diff_repo:
            paths = [f.path for f in diff_repo.list_files("working")]

        assert "scratch.txt" not in paths

    def test_unusual_file_names(self, repo: GitRepo) -> None:
        names = ["with space.txt", "tab\there.txt", "ünï.txt"]
        for name in names:
            (repo.path / name).write_text("x\n")
        _ = commit_all(repo.path, "Odd names")
        for name in names:
            (repo.path / name).write_text("x\ny\n")

        with DiffRepository.open(repo.path) as diff_repo:
            paths = {f.path for f in diff_repo.list_files("working")}

        assert set(names) <= paths

    def test_rename_is_delete_plus_add(self, repo: GitRepo) -> None:
        _ = repo.git("mv", "other.txt", "moved.txt")

        with DiffRepository.open(repo.path) as diff_repo:
            files = {f.path: f.status for f in diff_repo.list_files("working")}

        assert files["other.txt"] is FileStatus.DELETED
        assert files["moved.txt"] is FileStatus.ADDED

    def test_unknown_commit(self, diff_repository: DiffRepository) -> None:
        with pytest.raises(UnknownRevisionError):
            _ = diff_repository.list_files("deadbeef")

    @pytest.mark.parametrize("diff_id", ["HEAD", "main", "HEAD~1", "--all", ""])
    def test_invalid_identifier(
        self, diff_repository: DiffRepository, diff_id: str
    ) -> None:
        with pytest.raises(InvalidRevisionError):
            _ = diff_repository.list_files(diff_id)


class TestListCommits:
    def test_working_window(
        self, repo: GitRepo, diff_repository: DiffRepository
    ) -> None:
        commits = diff_repository.list_commits("working")

        assert [c.id for c in commits] == [repo.c3, repo.c2, repo.c1]
        assert [c.is_head for c in commits] == [True, False, False]

    def test_range_includes_selected_commit(
        self, repo: GitRepo, diff_repository: DiffRepository
    ) -> None:
        commits = diff_repository.list_commits(repo.c2)

        assert [c.id for c in commits] == [repo.c3, repo.c2]
        assert commits[1].message == "Add other"

    def test_head_commit(self, repo: GitRepo, diff_repository: DiffRepository) -> None:
        commits = diff_repository.list_commits(repo.c3)

        assert [(c.id, c.is_head) for c in commits] == [(repo.c3, True)]

    def test_root_commit(self, repo: GitRepo, diff_repository: DiffRepository) -> None:
        commits = diff_repository.list_commits(repo.c1)

        assert [c.id for c in commits] == [repo.c3, repo.c2, repo.c1]

    def test_unknown_commit(self, diff_repository: DiffRepository) -> None:
        with pytest.raises(UnknownRevisionError):
            _ = diff_repository.list_commits("0" * 40)

    def test_single_commit_repository(self, tmp_path: Path) -> None:
        path = tmp_path / "single"
        init_git_repo(path)
        (path / "a.txt").write_text("a\n")
        only = commit_all(path, "Only commit")

        with DiffRepository.open(path) as diff_repo:
            commits = diff_repo.list_commits(only)
            diffs = diff_repo.list_diffs()

        assert [(c.id, c.is_head) for c in commits] == [(only, True)]
        assert (diffs[1].files_count, diffs[1].additions) == (1, 1)
