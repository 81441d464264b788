"""Shared fixtures: in-memory collaborators wired into a SessionStore."""

import asyncio

import pytest

from foodingo.core.config import get_settings
from foodingo.core.exceptions import ApiConnectionError
from foodingo.schemas import ActionResponse
from foodingo.services.api import DemoBackend, MockApiClient, reset_api_client
from foodingo.services.notifications import MockNotifier, reset_notifier
from foodingo.services.storage import TOKEN_KEY, MemoryStorage, reset_storage
from foodingo.store import SessionStore

TEST_TOKEN = "test-token"


class ControlledApiClient(MockApiClient):
    """
    Mock client whose increment/decrement calls wait until the test
    releases them with an outcome. Every other call answers immediately.
    """

    def __init__(self, backend: DemoBackend):
        super().__init__(backend=backend, failure_rate=0.0, min_latency=0.0, max_latency=0.0)
        self.pending: list[asyncio.Future] = []

    async def _controlled(self, operation: str, product_id: str) -> ActionResponse:
        self.calls.append(operation)
        outcome = asyncio.get_running_loop().create_future()
        self.pending.append(outcome)
        ok = await outcome
        if not ok:
            raise ApiConnectionError(f"Simulated network failure ({operation})")
        apply = self.backend.increment if operation == "increment" else self.backend.decrement
        return ActionResponse(success=apply(product_id))

    async def increment_cart_item(self, product_id: str) -> ActionResponse:
        return await self._controlled("increment", product_id)

    async def decrement_cart_item(self, product_id: str) -> ActionResponse:
        return await self._controlled("decrement", product_id)

    def release(self, index: int, ok: bool = True) -> None:
        self.pending[index].set_result(ok)


async def _settle(rounds: int = 5) -> None:
    """Let scheduled tasks run up to their next suspension point."""
    for _ in range(rounds):
        await asyncio.sleep(0)


@pytest.fixture(autouse=True)
def clear_factory_caches():
    yield
    reset_api_client()
    reset_storage()
    reset_notifier()
    get_settings.cache_clear()


@pytest.fixture
def backend() -> DemoBackend:
    return DemoBackend()


@pytest.fixture
def storage() -> MemoryStorage:
    """Storage holding a logged-in session."""
    return MemoryStorage({TOKEN_KEY: TEST_TOKEN})


@pytest.fixture
def notifier() -> MockNotifier:
    return MockNotifier()


@pytest.fixture
def api(backend) -> MockApiClient:
    """Mock client that never fails and never sleeps."""
    return MockApiClient(backend=backend, failure_rate=0.0, min_latency=0.0, max_latency=0.0)


@pytest.fixture
def controlled_api(backend) -> ControlledApiClient:
    return ControlledApiClient(backend)


@pytest.fixture
def store(api, storage, notifier) -> SessionStore:
    return SessionStore(api=api, storage=storage, notifier=notifier)


@pytest.fixture
def controlled_store(controlled_api, storage, notifier) -> SessionStore:
    return SessionStore(api=controlled_api, storage=storage, notifier=notifier)


@pytest.fixture
def settle():
    return _settle
