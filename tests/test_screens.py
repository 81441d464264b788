"""Tests for the screen models."""

import asyncio

import pytest

from foodingo.screens import (
    FILTER_OPTIONS,
    AddRestaurantScreen,
    CheckoutScreen,
    HomeScreen,
    MyOrdersScreen,
)
from foodingo.services.storage import TOKEN_KEY, MemoryStorage
from foodingo.store import SessionStore

PIZZA = "prod-margherita"


async def logged_in_with_cart(store, backend, **quantities):
    for product_id, quantity in quantities.items():
        backend.add_to_cart(product_id, quantity)
    await store.check_session()
    await store.fetch_user()


# =============================================================================
# Home
# =============================================================================


class TestHomeScreen:

    @pytest.mark.asyncio
    async def test_boot_loads_everything(self, store, api):
        home = HomeScreen(store)

        await home.boot()

        assert not home.loading
        assert len(home.offers) == 2
        assert len(home.restaurants) == 2
        assert len(home.categories) == 4
        assert home.greeting == "Hi Asha"
        assert api.calls == ["offers", "restaurants", "user", "categories"]

    @pytest.mark.asyncio
    async def test_failures_do_not_stop_boot(self, store, api, notifier):
        api.fail_operations = {"offers", "restaurants", "user"}
        home = HomeScreen(store)

        await home.boot()

        assert not home.loading
        assert home.offers == []
        assert home.restaurants == []
        assert len(home.categories) == 4
        assert home.greeting == "Hi Guest"
        assert notifier.history == []

    @pytest.mark.asyncio
    async def test_results_after_unmount_are_dropped(self, store, api, monkeypatch):
        release = asyncio.Event()
        original = api.fetch_offers

        async def slow_offers():
            await release.wait()
            return await original()

        monkeypatch.setattr(api, "fetch_offers", slow_offers)
        home = HomeScreen(store)
        boot = asyncio.create_task(home.boot())
        await asyncio.sleep(0)

        home.unmount()
        release.set()
        await boot

        assert home.offers == []
        assert home.restaurants == []
        assert home.loading is True

    @pytest.mark.asyncio
    async def test_unmount_stops_store_notifications(self, store, backend):
        home = HomeScreen(store)
        await logged_in_with_cart(store, backend, **{PIZZA: 1})
        renders = home.render_count

        home.unmount()
        await store.increase_quantity(PIZZA)

        assert renders > 0
        assert home.render_count == renders

    @pytest.mark.asyncio
    async def test_item_card_actions(self, store, backend):
        home = HomeScreen(store)
        await store.check_session()

        assert await home.add(PIZZA) is True
        assert await home.increase(PIZZA) is True
        assert home.cart_item(PIZZA).quantity == 2
        assert home.cart_count == 2

        assert await home.decrease(PIZZA) is True
        assert await home.decrease(PIZZA) is True
        assert home.cart_item(PIZZA) is None


# =============================================================================
# Checkout
# =============================================================================


class TestCheckoutScreen:

    @pytest.mark.asyncio
    async def test_prefills_address_and_phone(self, store, backend):
        await logged_in_with_cart(store, backend, **{PIZZA: 2})

        checkout = CheckoutScreen(store)

        assert checkout.address == "12 Residency Road, Bengaluru"
        assert checkout.phone == "9876543210"

    @pytest.mark.asyncio
    async def test_totals_follow_cart(self, store, backend):
        await logged_in_with_cart(store, backend, **{PIZZA: 2})

        totals = CheckoutScreen(store).totals

        assert totals.subtotal == 398
        assert totals.delivery_fee == 40
        assert totals.tax == 19.9
        assert totals.total == 457.9

    @pytest.mark.asyncio
    async def test_missing_address_blocks_locally(self, store, api, backend, notifier):
        await logged_in_with_cart(store, backend, **{PIZZA: 1})
        checkout = CheckoutScreen(store)
        checkout.address = "   "

        result = await checkout.place_order()

        assert not result.success
        assert result.error == "address"
        assert notifier.last.title == "Address Required"
        assert notifier.last.message == "Please enter your delivery address"
        assert "create_order" not in api.calls

    @pytest.mark.asyncio
    async def test_missing_phone_blocks_locally(self, store, api, backend, notifier):
        await logged_in_with_cart(store, backend, **{PIZZA: 1})
        checkout = CheckoutScreen(store)
        checkout.phone = ""

        result = await checkout.place_order()

        assert result.error == "phone"
        assert notifier.last.title == "Phone Required"
        assert notifier.last.message == "Please enter your phone number"
        assert "create_order" not in api.calls

    @pytest.mark.asyncio
    async def test_places_order_and_refreshes_cart(self, store, api, backend, notifier):
        await logged_in_with_cart(store, backend, **{PIZZA: 2})
        checkout = CheckoutScreen(store)

        result = await checkout.place_order()

        assert result.success
        assert result.order_id == backend.orders[0]["orderId"]
        assert checkout.order_id == result.order_id
        assert not checkout.loading
        assert notifier.last.title == "Order Placed!"
        assert notifier.last.message == "Your order has been confirmed"
        assert backend.orders[0]["total"] == 457.9
        assert store.cart_lines == []

    @pytest.mark.asyncio
    async def test_failed_order_notifies(self, store, api, backend, notifier):
        await logged_in_with_cart(store, backend, **{PIZZA: 1})
        api.fail_operations = {"create_order"}
        checkout = CheckoutScreen(store)

        result = await checkout.place_order()

        assert not result.success
        assert not checkout.loading
        assert notifier.last.title == "Order Failed"
        assert notifier.last.message == "Something went wrong"
        assert store.cart_count == 1

    @pytest.mark.asyncio
    async def test_requires_login(self, store, api, storage, backend, notifier):
        await logged_in_with_cart(store, backend, **{PIZZA: 1})
        checkout = CheckoutScreen(store)
        # Token expired after the cart was loaded
        await storage.remove_item(TOKEN_KEY)

        result = await checkout.place_order()

        assert result.requires_login
        assert notifier.last.message == "Please login again"
        assert "create_order" not in api.calls


# =============================================================================
# My Orders
# =============================================================================


class TestMyOrdersScreen:

    @pytest.mark.asyncio
    async def test_fetch_and_filter(self, store, backend):
        await logged_in_with_cart(store, backend, **{PIZZA: 1})
        await CheckoutScreen(store).place_order()
        backend.orders[0]["status"] = "Delivered"
        orders = MyOrdersScreen(store)

        assert await orders.fetch_orders() is True

        assert not orders.loading
        assert len(orders.orders) == 1
        assert orders.orders[0].item_names == ["Margherita"]
        orders.set_filter("Preparing")
        assert orders.filtered_orders == []
        orders.set_filter("Delivered")
        assert len(orders.filtered_orders) == 1

    def test_filter_options(self, store):
        assert FILTER_OPTIONS == ["All", "Preparing", "On the way", "Delivered"]
        with pytest.raises(ValueError):
            MyOrdersScreen(store).set_filter("Cancelled")

    @pytest.mark.asyncio
    async def test_failure_notifies_and_stops_spinners(self, store, api, notifier):
        api.fail_operations = {"orders"}
        orders = MyOrdersScreen(store)

        assert await orders.refresh() is False

        assert not orders.loading
        assert not orders.refreshing
        assert notifier.last.title == "Failed to load orders"


# =============================================================================
# Add Restaurant
# =============================================================================


class TestAddRestaurantScreen:

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "values, message",
        [
            ({}, "Please enter restaurant name"),
            ({"name": "Dosa Corner"}, "Please enter restaurant location"),
            ({"name": "Dosa Corner", "location": "Jayanagar"}, "Please upload restaurant banner image"),
        ],
    )
    async def test_validation_messages(self, store, api, notifier, values, message):
        screen = AddRestaurantScreen(store)
        for name, value in values.items():
            screen.set_field(name, value)

        result = await screen.submit()

        assert result.error == "validation"
        assert notifier.last.title == "Validation Error"
        assert notifier.last.message == message
        assert "create_restaurant" not in api.calls

    @pytest.mark.asyncio
    async def test_requires_login(self, api, notifier):
        store = SessionStore(api=api, storage=MemoryStorage(), notifier=notifier)
        screen = AddRestaurantScreen(store)
        screen.set_field("name", "Dosa Corner")
        screen.set_field("location", "Jayanagar")
        screen.set_field("image", {"url": "https://img.test/dosa.png"})

        result = await screen.submit()

        assert result.requires_login
        assert notifier.last.title == "Authentication Error"

    @pytest.mark.asyncio
    async def test_creates_restaurant(self, store, backend, notifier):
        await store.fetch_user()
        screen = AddRestaurantScreen(store)
        screen.set_field("name", "  Dosa Corner ")
        screen.set_field("location", "Jayanagar")
        screen.set_field("image", {"url": "https://img.test/dosa.png"})

        result = await screen.submit()

        assert result.success
        assert notifier.last.title == "Restaurant Created Successfully"
        created = backend.restaurants[-1]
        assert created["name"] == "Dosa Corner"
        assert created["owner"] == "user-demo"
        assert created["image"] == {"url": "https://img.test/dosa.png"}
        assert not screen.form.is_submitting

    @pytest.mark.asyncio
    async def test_submit_finishing_after_unmount_leaves_form_alone(
        self, store, api, notifier, monkeypatch
    ):
        release = asyncio.get_running_loop().create_future()
        original = api.create_restaurant

        async def gated_create(restaurant):
            await release
            return await original(restaurant)

        monkeypatch.setattr(api, "create_restaurant", gated_create)
        screen = AddRestaurantScreen(store)
        screen.set_field("name", "Dosa Corner")
        screen.set_field("location", "Jayanagar")
        screen.set_field("image", {"url": "https://img.test/dosa.png"})

        submit = asyncio.create_task(screen.submit())
        for _ in range(5):
            await asyncio.sleep(0)
        assert screen.form.is_submitting

        screen.unmount()
        release.set_result(None)
        result = await submit

        assert result.success
        assert screen.form.is_submitting
