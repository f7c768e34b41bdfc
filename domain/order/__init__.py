"""Order domain exports."""
from .currency import CurrencyCode, ZERO_DECIMAL_CURRENCIES
from .entity import Customer, Order
from .repository import CustomerRepository, OrderRepository

__all__ = [
    "CurrencyCode",
    "ZERO_DECIMAL_CURRENCIES",
    "Customer",
    "Order",
    "CustomerRepository",
    "OrderRepository",
]
