"""Infrastructure models package exports."""
from .base import Base, metadata
from .customer import CustomerModel
from .order import OrderModel

__all__ = [
    "Base",
    "metadata",
    "CustomerModel",
    "OrderModel",
]
