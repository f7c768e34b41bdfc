"""
订单数据库模型 - SQLAlchemy ORM模型
注意：这是基础设施层的实现细节，不是领域模型
"""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from .base import Base


class OrderModel(Base):
    """
    订单数据库模型

    金额以最小单位 ×100 存储（与币种无关），例如 ¥1000 存为 100000
    """
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True)

    code = Column(String(100), unique=True, index=True, nullable=False, comment="订单号")
    currency_code = Column(String(3), nullable=False, comment="货币代码 ISO-4217")
    total_with_tax = Column(Integer, nullable=False, default=0, comment="含税总额（×100）")

    customer_id = Column(
        Integer,
        ForeignKey("customers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="关联客户ID"
    )

    created_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        nullable=False,
        comment="创建时间"
    )
    updated_at = Column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
        nullable=False,
        comment="更新时间"
    )

    customer = relationship("CustomerModel", back_populates="orders", lazy="select")

    def __repr__(self):
        return (
            f"<OrderModel(id={self.id}, code='{self.code}', "
            f"currency_code='{self.currency_code}', total_with_tax={self.total_with_tax})>"
        )
