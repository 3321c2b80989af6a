"""
Account Registry - ordered list of accounts and the current selection.
"""

import logging
import time
from typing import Iterable, List, Optional

from worklog.domain.models import Account

logger = logging.getLogger(__name__)

DEFAULT_ACCOUNT_ID = "default"


class AccountRegistry:
    """
    Accounts in insertion order plus the "current account" selection.

    The registry is never empty: loading an empty list seeds a default
    account, and deleting the last remaining account is refused.
    """

    def __init__(self, accounts: Optional[Iterable[Account]] = None,
                 default_name: str = "Main Project"):
        self.default_name = default_name
        self._accounts: List[Account] = list(accounts or [])
        if not self._accounts:
            self._accounts.append(Account(id=DEFAULT_ACCOUNT_ID, name=default_name))
        self._current_id = self._accounts[0].id

    @classmethod
    def from_payload(cls, payload, default_name: str = "Main Project") -> 'AccountRegistry':
        """Build from stored wire data (list of {id, name})"""
        accounts = [Account.model_validate(item) for item in (payload or [])]
        return cls(accounts, default_name=default_name)

    @property
    def accounts(self) -> List[Account]:
        return list(self._accounts)

    @property
    def current_id(self) -> str:
        return self._current_id

    @property
    def current(self) -> Account:
        return self.get(self._current_id)

    def get(self, account_id: str) -> Optional[Account]:
        return next((a for a in self._accounts if a.id == account_id), None)

    def _generate_id(self) -> str:
        """Millisecond timestamp, bumped until unique"""
        candidate = int(time.time() * 1000)
        existing = {a.id for a in self._accounts}
        while str(candidate) in existing:
            candidate += 1
        return str(candidate)

    def create(self, name: str) -> Optional[Account]:
        """
        Add an account and make it current.

        Returns:
            The new account, or None if the name is blank
        """
        if not name or not name.strip():
            return None
        account = Account(id=self._generate_id(), name=name.strip())
        self._accounts.append(account)
        self._current_id = account.id
        logger.info(f"Account created: {account.name} ({account.id})")
        return account

    def delete(self, account_id: str) -> bool:
        """
        Remove an account.

        Returns:
            True if removed; False if unknown or the last remaining account
        """
        account = self.get(account_id)
        if account is None:
            return False
        if len(self._accounts) == 1:
            logger.warning(f"Refusing to delete the last account: {account.name} ({account.id})")
            return False

        self._accounts = [a for a in self._accounts if a.id != account_id]
        if self._current_id == account_id:
            self._current_id = self._accounts[0].id
        logger.info(f"Account deleted: {account.name} ({account.id})")
        return True

    def select(self, account_id: str) -> Account:
        """Make an existing account current"""
        account = self.get(account_id)
        if account is None:
            raise ValueError(f"Account {account_id} not found")
        self._current_id = account_id
        return account

    def replace_all(self, accounts: Iterable[Account]) -> None:
        """
        Replace the account list (durable tier reconcile).

        Keeps the current selection when it still exists, otherwise falls
        back to the first account.
        """
        accounts = list(accounts)
        if not accounts:
            return
        self._accounts = accounts
        if self.get(self._current_id) is None:
            self._current_id = self._accounts[0].id

    def to_payload(self) -> List[dict]:
        return [a.model_dump() for a in self._accounts]
