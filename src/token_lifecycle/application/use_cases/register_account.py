from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone

from ...domain.entities import Account
from ...domain.exceptions import InvalidInputError
from ...domain.ports import AccountStore, PasswordHasher
from ...logging import get_logger

logger = get_logger(__name__)

MIN_PASSWORD_LENGTH = 6


@dataclass(slots=True)
class RegisterAccountUseCase:
    """
    Application use case:
    - Validate registration input
    - Hash the password and create the account

    Raises ConflictError (from the store) if the identifier is taken.
    """

    accounts: AccountStore
    hasher: PasswordHasher

    async def execute(self, identifier: str, display_name: str, password: str) -> Account:
        identifier = (identifier or "").strip()
        display_name = (display_name or "").strip()

        if not identifier:
            raise InvalidInputError("identifier is required")
        if not display_name:
            raise InvalidInputError("display name is required")
        if len(password or "") < MIN_PASSWORD_LENGTH:
            raise InvalidInputError(
                f"password must be at least {MIN_PASSWORD_LENGTH} characters"
            )

        account = await self.accounts.create(
            identifier,
            display_name,
            self.hasher.hash(password),
            datetime.now(timezone.utc),
        )
        logger.info("account_registered", user_id=account.user_id)
        return account
