from unittest.mock import MagicMock

import pytest

from git_tag_bump.errors import CollaboratorFailure
from git_tag_bump.git import Commit, Head, Repository
from git_tag_bump.summary import NOTHING_NEW, release_notes, summarize
from git_tag_bump.version import ZERO, Convention, parse

HISTORY = [
    Commit("c3", "Fix login redirect\n"),
    Commit("c2", "Add audit log\n\nWrites one line per request.\n"),
    Commit("c1", "Initial commit\n"),
]


@pytest.fixture
def repo() -> MagicMock:
    fake = MagicMock(spec=Repository)
    fake.log.return_value = iter(HISTORY)
    fake.resolve.return_value = "c1"
    return fake


class TestSummarize:
    """Tests for summarize()."""

    def test_bullets_until_stop(self) -> None:
        assert summarize(HISTORY, stop="c1") == (
            "* Fix login redirect\n"
            "* Add audit log\n\nWrites one line per request.\n"
        )

    def test_without_stop_lists_everything(self) -> None:
        assert summarize(HISTORY).count("* ") == 3

    def test_nothing_between_head_and_tag(self) -> None:
        assert summarize(HISTORY, stop="c3") == "Nothing new, just for tagging."

    def test_empty_log(self) -> None:
        assert summarize([]) == NOTHING_NEW


class TestReleaseNotes:
    """Tests for release_notes()."""

    def test_summarizes_since_previous_tag(self, repo: MagicMock) -> None:
        latest = parse("v1.2.3-4", Convention.LEGACY)
        notes = release_notes(repo, latest, Head("c3", "main"))
        repo.resolve.assert_called_once_with("v1.2.3-4")
        repo.log.assert_called_once_with("c3", "c1")
        assert notes.startswith("* Fix login redirect\n")
        assert "Initial commit" not in notes

    def test_without_previous_tag(self, repo: MagicMock) -> None:
        notes = release_notes(repo, ZERO, Head("c3", "main"))
        repo.resolve.assert_not_called()
        repo.log.assert_called_once_with("c3", None)
        assert "* Initial commit\n" in notes

    def test_collaborator_failure_degrades(self, repo: MagicMock,
                                           caplog: pytest.LogCaptureFixture) -> None:
        repo.resolve.side_effect = CollaboratorFailure(["git", "rev-parse"], "bad revision")
        notes = release_notes(repo, parse("v1.0.0"), Head("c3", "main"))
        assert notes.startswith("Failed to summarize commit messages <")
        assert "bad revision" in notes
        assert "could not summarize" in caplog.text
