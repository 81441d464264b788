"""
Screen Models

UI-agnostic state and actions for each screen, built on the session store.
"""

from foodingo.screens.base import ScreenModel, ScreenResult
from foodingo.screens.checkout import CheckoutResult, CheckoutScreen
from foodingo.screens.home import HomeScreen
from foodingo.screens.orders import FILTER_OPTIONS, MyOrdersScreen
from foodingo.screens.restaurant_form import RESTAURANT_FIELDS, AddRestaurantScreen

__all__ = [
    "ScreenModel",
    "ScreenResult",
    "HomeScreen",
    "CheckoutScreen",
    "CheckoutResult",
    "MyOrdersScreen",
    "FILTER_OPTIONS",
    "AddRestaurantScreen",
    "RESTAURANT_FIELDS",
]
