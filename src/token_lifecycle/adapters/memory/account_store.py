from __future__ import annotations

import uuid
from datetime import datetime
from typing import Dict

from ...domain.entities import Account
from ...domain.exceptions import AccountNotFoundError, ConflictError
from ...domain.ports import AccountStore


class InMemoryAccountStore(AccountStore):
    """Keyed-record account store, indexed by identifier."""

    def __init__(self) -> None:
        self._accounts: Dict[str, Account] = {}

    async def find_by_identifier(self, identifier: str) -> Account:
        try:
            return self._accounts[identifier]
        except KeyError:
            raise AccountNotFoundError(identifier) from None

    async def create(
            self,
            identifier: str,
            display_name: str,
            password_hash: str,
            created_at: datetime,
    ) -> Account:
        if identifier in self._accounts:
            raise ConflictError(f"Account {identifier!r} already exists")

        account = Account(
            user_id=uuid.uuid4().hex,
            identifier=identifier,
            display_name=display_name,
            password_hash=password_hash,
            created_at=created_at,
        )
        self._accounts[identifier] = account
        return account
