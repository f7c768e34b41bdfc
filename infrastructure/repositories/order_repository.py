"""
订单仓储实现 - 使用SQLAlchemy实现数据访问
"""
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from domain.order.currency import CurrencyCode
from domain.order.entity import Order
from domain.order.repository import OrderRepository
from infrastructure.models.order import OrderModel
from infrastructure.repositories.customer_repository import customer_to_entity


class SQLAlchemyOrderRepository(OrderRepository):
    """订单仓储的SQLAlchemy实现"""

    def __init__(self, session: AsyncSession):
        self.session = session

    def _to_entity(self, model: OrderModel, *, with_customer: bool = False) -> Order:
        """将数据库模型转换为领域实体"""
        customer = None
        if with_customer and model.customer is not None:
            customer = customer_to_entity(model.customer)
        return Order(
            id=model.id,
            code=model.code,
            currency_code=CurrencyCode(model.currency_code),
            total_with_tax=model.total_with_tax,
            customer_id=model.customer_id,
            customer=customer,
        )

    async def get_by_id(self, order_id: int) -> Optional[Order]:
        """根据ID获取订单"""
        result = await self.session.execute(
            select(OrderModel).where(OrderModel.id == order_id)
        )
        db_order = result.scalar_one_or_none()
        return self._to_entity(db_order) if db_order else None

    async def get_with_customer(self, order_id: int) -> Optional[Order]:
        """根据ID获取订单并预加载客户（异步会话不支持懒加载）"""
        result = await self.session.execute(
            select(OrderModel)
            .options(selectinload(OrderModel.customer))
            .where(OrderModel.id == order_id)
        )
        db_order = result.scalar_one_or_none()
        return self._to_entity(db_order, with_customer=True) if db_order else None
