"""
客户仓储实现 - 使用SQLAlchemy实现数据访问
"""
from typing import Optional
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy import select, update

from domain.order.entity import Customer
from domain.order.repository import CustomerRepository
from infrastructure.models.customer import CustomerModel


def customer_to_entity(model: CustomerModel) -> Customer:
    """将数据库模型转换为领域实体"""
    return Customer(
        id=model.id,
        email_address=model.email_address,
        first_name=model.first_name or "",
        last_name=model.last_name or "",
        stripe_customer_id=model.stripe_customer_id,
    )


class SQLAlchemyCustomerRepository(CustomerRepository):
    """客户仓储的SQLAlchemy实现"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, customer_id: int) -> Optional[Customer]:
        """根据ID获取客户"""
        result = await self.session.execute(
            select(CustomerModel).where(CustomerModel.id == customer_id)
        )
        db_customer = result.scalar_one_or_none()
        return customer_to_entity(db_customer) if db_customer else None

    async def set_stripe_customer_id(self, customer_id: int, stripe_customer_id: str) -> Optional[str]:
        """条件更新：仅在尚未缓存时写入，不刷新 ORM 实体"""
        result = await self.session.execute(
            update(CustomerModel)
            .where(
                CustomerModel.id == customer_id,
                CustomerModel.stripe_customer_id.is_(None),
            )
            .values(stripe_customer_id=stripe_customer_id)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount:
            return stripe_customer_id

        stored = await self.session.execute(
            select(CustomerModel.stripe_customer_id).where(CustomerModel.id == customer_id)
        )
        return stored.scalar_one_or_none()
