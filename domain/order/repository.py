"""
订单/客户仓储接口 - 定义数据访问的抽象接口
"""
from abc import ABC, abstractmethod
from typing import Optional

from .entity import Customer, Order


class OrderRepository(ABC):
    """订单仓储抽象接口"""

    @abstractmethod
    async def get_by_id(self, order_id: int) -> Optional[Order]:
        """根据ID获取订单（不加载客户）"""
        pass

    @abstractmethod
    async def get_with_customer(self, order_id: int) -> Optional[Order]:
        """根据ID获取订单，并预加载客户关系"""
        pass


class CustomerRepository(ABC):
    """客户仓储抽象接口"""

    @abstractmethod
    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        """根据ID获取客户"""
        pass

    @abstractmethod
    async def set_stripe_customer_id(self, customer_id: int, stripe_customer_id: str) -> Optional[str]:
        """缓存 Stripe 客户ID（不覆盖已有值，不重新加载实体）

        Returns the id stored after the write, which is the existing value
        when one was already present, or None if the customer is missing.
        """
        pass
