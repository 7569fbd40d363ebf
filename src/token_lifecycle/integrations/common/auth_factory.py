from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Tuple

from ...adapters.argon2.password_hasher import Argon2PasswordHasher
from ...adapters.jwt.codec import JWTTokenCodec
from ...adapters.memory.account_store import InMemoryAccountStore
from ...adapters.memory.liveness_store import InMemoryLivenessStore
from ...adapters.redis.liveness_store import RedisLivenessStore
from ...application.lifecycle import TokenLifecycleManager
from ...application.use_cases.authenticate_account import AuthenticateAccountUseCase
from ...application.use_cases.register_account import RegisterAccountUseCase
from ...domain.entities import Account, SessionInput, TokenDetail, TokenPair
from ...domain.ports import AccountStore, LivenessStore, PasswordHasher
from ...settings import TokenSettings


@dataclass(slots=True)
class AuthDependencies:
    """
    Framework-agnostic auth facade.

    Integrations (FastAPI, Strawberry, the admin CLI) adapt this to their
    own dependency / decorator / command systems.
    """

    tokens: TokenLifecycleManager
    register_use_case: RegisterAccountUseCase
    authenticate_use_case: AuthenticateAccountUseCase

    # --- Account operations -----------------------------------------------

    async def register(self, identifier: str, display_name: str, password: str) -> Account:
        return await self.register_use_case.execute(identifier, display_name, password)

    async def login(self, identifier: str, password: str) -> Tuple[Account, TokenPair]:
        """Check credentials, then issue a fresh token pair."""
        account = await self.authenticate_use_case.execute(identifier, password)
        pair = await self.tokens.issue(account.user_id)
        return account, pair

    # --- Token operations -------------------------------------------------

    async def authenticate(self, access_token: str) -> TokenDetail:
        """Access token -> TokenDetail (or raise auth exceptions)."""
        return await self.tokens.validate_access(access_token)

    async def refresh(self, refresh_token: str) -> TokenPair:
        return await self.tokens.refresh(refresh_token)

    async def logout(self, session: SessionInput) -> TokenDetail:
        return await self.tokens.logout(session)


def create_auth_dependencies(
        *,
        settings: TokenSettings,
        store: Optional[LivenessStore] = None,
        accounts: Optional[AccountStore] = None,
        hasher: Optional[PasswordHasher] = None,
) -> AuthDependencies:
    """
    High-level factory: settings (+ optional adapters) -> AuthDependencies.

    - builds a JWTTokenCodec bound to the configured issuer
    - wires the TokenLifecycleManager over the given liveness store
      (process-local when omitted)
    - wires the account use cases over the given account store
    """
    codec = JWTTokenCodec(issuer=settings.issuer)
    manager = TokenLifecycleManager(
        settings=settings,
        codec=codec,
        store=store or InMemoryLivenessStore(),
    )

    account_store = accounts or InMemoryAccountStore()
    password_hasher = hasher or Argon2PasswordHasher()

    return AuthDependencies(
        tokens=manager,
        register_use_case=RegisterAccountUseCase(
            accounts=account_store,
            hasher=password_hasher,
        ),
        authenticate_use_case=AuthenticateAccountUseCase(
            accounts=account_store,
            hasher=password_hasher,
        ),
    )


def create_auth_dependencies_from_redis(
        *,
        settings: TokenSettings,
        redis_url: str,
        key_prefix: str = "token:",
        accounts: Optional[AccountStore] = None,
) -> AuthDependencies:
    """Same as `create_auth_dependencies`, with a Redis liveness store."""
    store = RedisLivenessStore.from_url(
        redis_url,
        key_prefix=key_prefix,
        socket_timeout=settings.operation_timeout_seconds,
    )
    return create_auth_dependencies(settings=settings, store=store, accounts=accounts)
