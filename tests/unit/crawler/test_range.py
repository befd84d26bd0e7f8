"""Tests for revision range resolution."""

import pytest

from fakes import InMemoryRepository, add_dir, add_file, delete, modify_file
from svn_crawler.crawler.range import NO_VALID_REVISION, resolve_end_revision


@pytest.fixture
def sub_history(repository: InMemoryRepository) -> InMemoryRepository:
    """``/sub`` created at revision 2 and deleted at revision 5, head at 10."""
    repository.commit(add_file("/other.txt", "x"))  # 1
    repository.commit(add_dir("/sub"), add_file("/sub/a.txt", "a"))  # 2
    repository.commit(modify_file("/sub/a.txt", "b"))  # 3
    repository.commit(add_file("/sub/b.txt", "c"))  # 4
    repository.commit(delete("/sub"))  # 5
    for i in range(6, 11):
        repository.commit(modify_file("/other.txt", str(i)))
    return repository


@pytest.mark.unit
class TestResolveEndRevision:
    """Tests for resolve_end_revision."""

    def test_root_returns_requested_end(self, repository: InMemoryRepository) -> None:
        repository.commit(add_file("/a.txt", "a"))
        assert resolve_end_revision(repository, "/", 0, 1) == 1
        assert repository.path_info_calls == []

    def test_root_latest(self, repository: InMemoryRepository) -> None:
        repository.commit(add_file("/a.txt", "a"))
        repository.commit(add_file("/b.txt", "b"))
        assert resolve_end_revision(repository, "/", 0, None) == 2

    def test_path_present_at_end(self, sub_history: InMemoryRepository) -> None:
        assert resolve_end_revision(sub_history, "/sub", 0, 4) == 4
        assert sub_history.path_info_calls == [("/sub", 4)]

    def test_path_deleted_inside_range(self, sub_history: InMemoryRepository) -> None:
        assert resolve_end_revision(sub_history, "/sub", 0, 10) == 4

    def test_path_deleted_with_latest_end(self, sub_history: InMemoryRepository) -> None:
        assert resolve_end_revision(sub_history, "/sub", 0, None) == 4

    def test_path_never_in_range(self, sub_history: InMemoryRepository) -> None:
        assert resolve_end_revision(sub_history, "/sub", 6, 10) == NO_VALID_REVISION

    def test_path_never_existed(self, sub_history: InMemoryRepository) -> None:
        assert resolve_end_revision(sub_history, "/missing", 0, 10) == NO_VALID_REVISION

    def test_start_not_before_end(self, sub_history: InMemoryRepository) -> None:
        assert resolve_end_revision(sub_history, "/sub", 7, 7) == NO_VALID_REVISION
        assert resolve_end_revision(sub_history, "/sub", 9, 7) == NO_VALID_REVISION

    def test_start_revision_is_inclusive(self, sub_history: InMemoryRepository) -> None:
        assert resolve_end_revision(sub_history, "/sub", 4, 8) == 4

    def test_recreated_path_returns_latest_presence(
        self, repository: InMemoryRepository
    ) -> None:
        repository.commit(add_file("/f.txt", "1"))  # 1
        repository.commit(delete("/f.txt"))  # 2
        repository.commit(add_file("/f.txt", "2"))  # 3
        repository.commit(delete("/f.txt"))  # 4
        repository.commit(add_file("/g.txt", "x"))  # 5
        assert resolve_end_revision(repository, "/f.txt", 0, 5) == 3
