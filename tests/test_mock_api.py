"""Tests for MockApiClient, the demo backend and the service factories."""

import pytest

from foodingo.core.config import EnvironmentMode, Settings, get_settings
from foodingo.core.exceptions import ApiConnectionError
from foodingo.schemas import OrderCreate
from foodingo.services.api import DemoBackend, HttpApiClient, MockApiClient, get_api_client
from foodingo.services.notifications import ConsoleNotifier, get_notifier
from foodingo.services.storage import FileStorage, get_storage


class TestMockApiClient:

    @pytest.mark.asyncio
    async def test_forced_failure(self, api):
        api.fail_operations = {"increment"}

        with pytest.raises(ApiConnectionError):
            await api.increment_cart_item("prod-margherita")
        assert api.calls == ["increment"]

    @pytest.mark.asyncio
    async def test_full_failure_rate(self, backend):
        api = MockApiClient(backend=backend, failure_rate=1.0, min_latency=0.0, max_latency=0.0)

        with pytest.raises(ApiConnectionError):
            await api.fetch_categories()

    @pytest.mark.asyncio
    async def test_order_empties_cart(self, api, backend):
        backend.add_to_cart("prod-margherita", 1)
        order = OrderCreate.model_validate({
            "items": [{"itemId": "prod-margherita", "quantity": 1, "price": 199}],
            "deliveryAddress": "Somewhere",
            "phone": "123",
            "subtotal": 199,
            "deliveryFee": 40,
            "tax": 9.95,
            "total": 248.95,
        })

        response = await api.create_order(order)

        assert response.success
        assert response.order_id
        assert await api.fetch_cart() == []
        orders = await api.list_user_orders()
        assert orders[0].restaurant_name == "Slice Society"
        assert orders[0].status == "Preparing"


class TestDemoBackend:

    def test_decrement_removes_line_at_zero(self):
        backend = DemoBackend()
        backend.add_to_cart("prod-margherita", 1)

        assert backend.decrement("prod-margherita")
        assert backend.cart == {}
        assert not backend.decrement("prod-margherita")

    def test_reset(self):
        backend = DemoBackend()
        backend.add_to_cart("prod-margherita", 1)
        backend.create_restaurant({"name": "X", "location": "Y"})

        backend.reset()

        assert backend.cart == {}
        assert len(backend.restaurants) == 2


class TestFactories:

    def test_development_uses_in_memory_services(self, monkeypatch):
        monkeypatch.setenv("ENV_MODE", "development")

        assert isinstance(get_api_client(), MockApiClient)
        assert get_api_client() is get_api_client()
        assert get_storage().provider_name == "memory"
        assert get_notifier().provider_name == "mock"

    def test_production_uses_real_services(self, monkeypatch, tmp_path):
        monkeypatch.setenv("ENV_MODE", "production")
        monkeypatch.setenv("STORAGE_DIRECTORY", str(tmp_path))

        assert isinstance(get_api_client(), HttpApiClient)
        assert isinstance(get_storage(), FileStorage)
        assert isinstance(get_notifier(), ConsoleNotifier)
        assert get_settings().storage_path.parent == tmp_path


class TestSettings:

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("ENV_MODE", raising=False)
        settings = Settings()

        assert settings.env_mode == EnvironmentMode.DEVELOPMENT
        assert settings.delivery_fee == 40
        assert settings.tax_rate == 0.05
        assert settings.api_timeout_seconds == 15
        assert settings.format_amount(302.5) == "₹302.50"

    def test_invalid_env_mode(self, monkeypatch):
        monkeypatch.setenv("ENV_MODE", "qa")

        with pytest.raises(ValueError):
            Settings()
