from __future__ import annotations

from dataclasses import dataclass

from ...domain.entities import Account
from ...domain.exceptions import AccountNotFoundError, InvalidCredentialsError
from ...domain.ports import AccountStore, PasswordHasher


@dataclass(slots=True)
class AuthenticateAccountUseCase:
    """
    Identifier + password -> Account.

    Unknown identifiers and wrong passwords fail identically so callers
    cannot probe which accounts exist.
    """

    accounts: AccountStore
    hasher: PasswordHasher

    async def execute(self, identifier: str, password: str) -> Account:
        try:
            account = await self.accounts.find_by_identifier(identifier)
        except AccountNotFoundError as exc:
            raise InvalidCredentialsError("identifier or password invalid") from exc

        if not self.hasher.verify(account.password_hash, password):
            raise InvalidCredentialsError("identifier or password invalid")
        return account
