"""Tests for session state and generation tokens."""

import pytest

from taxaoverlap.app import Action, OverlapSession, PoolSnapshot
from taxaoverlap.services.credentials import CredentialKind
from taxaoverlap.shared.models import MatchEntry, TitleSummary


class TestGenerationTokens:
    """Test per-action generation tokens."""

    def test_newer_run_makes_older_stale(self):
        """Test that only the latest token of an action is current."""
        session = OverlapSession()

        first = session.begin(Action.SEARCH)
        second = session.begin(Action.SEARCH)

        assert not session.is_current(Action.SEARCH, first)
        assert session.is_current(Action.SEARCH, second)

    def test_actions_are_independent(self):
        """Test that tokens of different actions do not interfere."""
        session = OverlapSession()

        search = session.begin(Action.SEARCH)
        session.begin(Action.CHECK)

        assert session.is_current(Action.SEARCH, search)

    def test_busy_flag(self):
        """Test that only the latest run clears the busy flag."""
        session = OverlapSession()
        first = session.begin(Action.POOL)
        second = session.begin(Action.POOL)

        session.finish(Action.POOL, first)
        assert session.is_busy(Action.POOL) is True

        session.finish(Action.POOL, second)
        assert session.is_busy(Action.POOL) is False


class TestPoolSnapshot:
    """Test the immutable pool snapshot."""

    def test_from_raw(self, taxa_pool):
        """Test that a snapshot indexes its raw payload."""
        snapshot = PoolSnapshot.from_raw(taxa_pool)

        assert snapshot.is_loaded
        assert snapshot.size == 3

    def test_index_is_read_only(self, taxa_pool):
        """Test that the index cannot be modified in place."""
        snapshot = PoolSnapshot.from_raw(taxa_pool)

        with pytest.raises(TypeError):
            snapshot.index[99] = snapshot.index[1]

    def test_empty(self):
        """Test the empty snapshot."""
        snapshot = PoolSnapshot()

        assert not snapshot.is_loaded
        assert snapshot.size == 0


class TestOverlapSession:
    """Test OverlapSession helpers."""

    def test_clear_results(self):
        """Test that results, selection and matches are cleared together."""
        session = OverlapSession(
            results=[TitleSummary(id=1, title="A")],
            selected=TitleSummary(id=1, title="A"),
            matches=[MatchEntry(person_id=1, name="A")],
        )

        session.clear_results()

        assert session.results == []
        assert session.selected is None
        assert session.match_kind is None
        assert session.matches == []

    def test_classified_credential(self):
        """Test that the credential is classified on access."""
        assert OverlapSession().classified_credential.kind is CredentialKind.NONE
        assert OverlapSession(credential="abc").classified_credential.kind is CredentialKind.API_KEY
