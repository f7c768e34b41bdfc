"""
订单与客户领域实体

Orders and customers are owned by the surrounding commerce system; the
payments integration only reads them and caches the Stripe customer id.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from domain.order.currency import CurrencyCode


@dataclass
class Customer:
    """客户实体"""

    id: Optional[int]
    email_address: str
    first_name: str = ""
    last_name: str = ""
    stripe_customer_id: Optional[str] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


@dataclass
class Order:
    """订单实体

    ``total_with_tax`` is stored in minor units scaled by 100 regardless of
    the currency, so ¥1000 is stored as 100000.
    """

    id: Optional[int]
    code: str
    currency_code: CurrencyCode
    total_with_tax: int
    customer_id: Optional[int] = None
    customer: Optional[Customer] = None
