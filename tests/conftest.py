import pytest

from token_lifecycle.adapters.jwt.codec import JWTTokenCodec
from token_lifecycle.adapters.memory.liveness_store import InMemoryLivenessStore
from token_lifecycle.application.lifecycle import TokenLifecycleManager
from token_lifecycle.domain.value_objects import Secret
from token_lifecycle.settings import TokenSettings

ACCESS_SECRET = b"access-secret-for-tests-0123456789abcdef"
REFRESH_SECRET = b"refresh-secret-for-tests-0123456789abcdef"
ISSUER = "https://auth.example.test"


class FakeClock:
    """Monotonic clock the tests can move forward by hand."""

    def __init__(self, start: float = 1_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def settings() -> TokenSettings:
    return TokenSettings(
        access_secret=ACCESS_SECRET,
        refresh_secret=REFRESH_SECRET,
        issuer=ISSUER,
        access_ttl_seconds=900,
        refresh_ttl_seconds=86_400,
        operation_timeout_seconds=2.0,
    )


@pytest.fixture
def access_secret() -> Secret:
    return Secret(ACCESS_SECRET)


@pytest.fixture
def refresh_secret() -> Secret:
    return Secret(REFRESH_SECRET)


@pytest.fixture
def codec() -> JWTTokenCodec:
    return JWTTokenCodec(issuer=ISSUER)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def store(clock) -> InMemoryLivenessStore:
    return InMemoryLivenessStore(clock=clock)


@pytest.fixture
def manager(settings, codec, store) -> TokenLifecycleManager:
    return TokenLifecycleManager(settings=settings, codec=codec, store=store)
