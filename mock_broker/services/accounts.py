"""
In-memory account store keyed by session identifier.
"""

import logging

from ..schemas.accounts import (
    DEFAULT_STARTING_BALANCE,
    Account,
    create_default_account,
)

logger = logging.getLogger(__name__)

DEFAULT_SESSION_ID = "demo-session"


class AccountStore:
    """Maps session IDs to accounts, creating seeded accounts lazily."""

    def __init__(
        self,
        default_session_id: str = DEFAULT_SESSION_ID,
        starting_balance: float = DEFAULT_STARTING_BALANCE,
    ) -> None:
        self.default_session_id = default_session_id
        self.starting_balance = starting_balance
        self._accounts: dict[str, Account] = {}

    def resolve_session_id(self, session_id: str | None) -> str:
        """Coerce a missing or blank session ID to the shared default."""
        if not session_id or not session_id.strip():
            return self.default_session_id
        return session_id

    def get(self, session_id: str | None) -> tuple[str, Account]:
        """Return the session's account, creating a seeded one if absent."""
        session_id = self.resolve_session_id(session_id)
        account = self._accounts.get(session_id)
        if account is None:
            logger.info("Creating new session: %s", session_id)
            account = create_default_account(self.starting_balance)
            self._accounts[session_id] = account
        return session_id, account

    def reset(self, session_id: str | None) -> Account:
        """Replace the session's account with a freshly seeded one."""
        session_id = self.resolve_session_id(session_id)
        logger.info("Resetting account for session: %s", session_id)
        account = create_default_account(self.starting_balance)
        self._accounts[session_id] = account
        return account

    def session_ids(self) -> list[str]:
        return list(self._accounts)

    def __contains__(self, session_id: object) -> bool:
        return session_id in self._accounts

    def __len__(self) -> int:
        return len(self._accounts)
