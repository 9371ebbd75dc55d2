"""Unit tests for the session-keyed account store."""

import pytest

from mock_broker.services.accounts import DEFAULT_SESSION_ID, AccountStore


class TestAccountStore:
    def test_lazy_creation(self, accounts):
        assert "alice" not in accounts

        session_id, account = accounts.get("alice")

        assert session_id == "alice"
        assert "alice" in accounts
        assert account.balance == 100000

    def test_same_session_returns_same_account(self, accounts):
        _, first = accounts.get("alice")
        _, second = accounts.get("alice")
        assert first is second

    def test_sessions_are_isolated(self, accounts):
        _, alice = accounts.get("alice")
        _, bob = accounts.get("bob")

        alice.balance = 1.0

        assert bob.balance == 100000
        assert len(accounts) == 2

    @pytest.mark.parametrize("missing", [None, "", "   "])
    def test_missing_session_uses_default(self, accounts, missing):
        session_id, account = accounts.get(missing)

        assert session_id == DEFAULT_SESSION_ID
        assert accounts.get(DEFAULT_SESSION_ID)[1] is account

    def test_reset_replaces_account(self, accounts):
        _, account = accounts.get("alice")
        account.balance = 5.0
        account.holdings.clear()

        fresh = accounts.reset("alice")

        assert fresh is not account
        assert fresh.balance == 100000
        assert len(fresh.holdings) == 3
        assert accounts.get("alice")[1] is fresh

    def test_reset_creates_missing_session(self, accounts):
        accounts.reset("carol")
        assert accounts.session_ids() == ["carol"]

    def test_custom_defaults(self):
        store = AccountStore(default_session_id="shared", starting_balance=250.0)

        session_id, account = store.get(None)

        assert session_id == "shared"
        assert account.balance == 250.0
