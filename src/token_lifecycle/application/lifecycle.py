from __future__ import annotations

import asyncio
from typing import Awaitable, Optional, TypeVar

from ..domain.constants import TokenClass
from ..domain.entities import SessionInput, TokenDetail, TokenPair
from ..domain.exceptions import OperationTimeoutError
from ..domain.ports import LivenessStore, TokenCodec
from ..domain.value_objects import Secret
from ..settings import TokenSettings
from .use_cases.issue import IssueTokenPairUseCase
from .use_cases.logout import LogoutUseCase
from .use_cases.refresh import RefreshTokenPairUseCase
from .use_cases.validate import ValidateTokenUseCase

T = TypeVar("T")


class TokenLifecycleManager:
    """
    Issue, validate, refresh and revoke access/refresh token pairs.

    Each operation runs under a deadline: the `timeout` argument when
    given, otherwise `settings.operation_timeout_seconds`. When the
    deadline passes the in-flight store call is cancelled and
    OperationTimeoutError is raised. Nothing is retried.
    """

    def __init__(
        self,
        settings: TokenSettings,
        codec: TokenCodec,
        store: LivenessStore,
        *,
        issue_use_case: Optional[IssueTokenPairUseCase] = None,
    ) -> None:
        self.settings = settings
        self.codec = codec
        self.store = store

        self._issue = issue_use_case or IssueTokenPairUseCase(
            codec=codec,
            store=store,
            settings=settings,
        )
        self._validate = ValidateTokenUseCase(codec=codec, store=store)
        self._refresh = RefreshTokenPairUseCase(
            validate=self._validate,
            issue=self._issue,
            store=store,
            refresh_secret=settings.refresh_secret,
        )
        self._logout = LogoutUseCase(
            validate=self._validate,
            store=store,
            access_secret=settings.access_secret,
            refresh_secret=settings.refresh_secret,
        )

    # ------------------------------------------------------------------ #
    # Operations
    # ------------------------------------------------------------------ #

    async def issue(self, user_id: str, *, timeout: Optional[float] = None) -> TokenPair:
        return await self._bounded(self._issue.execute(user_id), timeout)

    async def validate(
        self,
        token: str,
        secret: Secret,
        *,
        timeout: Optional[float] = None,
    ) -> TokenDetail:
        return await self._bounded(self._validate.execute(token, secret), timeout)

    async def validate_access(
        self, token: str, *, timeout: Optional[float] = None
    ) -> TokenDetail:
        return await self.validate(
            token, self.settings.secret_for(TokenClass.ACCESS), timeout=timeout
        )

    async def validate_refresh(
        self, token: str, *, timeout: Optional[float] = None
    ) -> TokenDetail:
        return await self.validate(
            token, self.settings.secret_for(TokenClass.REFRESH), timeout=timeout
        )

    async def refresh(
        self, refresh_token: str, *, timeout: Optional[float] = None
    ) -> TokenPair:
        return await self._bounded(self._refresh.execute(refresh_token), timeout)

    async def logout(
        self, session: SessionInput, *, timeout: Optional[float] = None
    ) -> TokenDetail:
        return await self._bounded(self._logout.execute(session), timeout)

    async def ping(self, *, timeout: Optional[float] = None) -> bool:
        return await self._bounded(self.store.ping(), timeout)

    async def close(self) -> None:
        await self.store.close()

    # ------------------------------------------------------------------ #
    # Internal helpers
    # ------------------------------------------------------------------ #

    async def _bounded(self, operation: Awaitable[T], timeout: Optional[float]) -> T:
        limit = self.settings.operation_timeout_seconds if timeout is None else timeout
        try:
            return await asyncio.wait_for(operation, timeout=limit)
        except asyncio.TimeoutError as exc:
            raise OperationTimeoutError(
                f"Operation did not complete within {limit:g}s"
            ) from exc
