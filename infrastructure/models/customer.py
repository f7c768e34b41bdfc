"""
客户数据库模型 - SQLAlchemy ORM模型
注意：这是基础设施层的实现细节，不是领域模型
"""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from datetime import datetime, timezone

from .base import Base


class CustomerModel(Base):
    """
    客户数据库模型

    同一邮箱的多个本地客户可共享同一 stripe_customer_id，故该列不设唯一约束
    """
    __tablename__ = "customers"

    id = Column(Integer, primary_key=True, index=True)

    email_address = Column(String(255), index=True, nullable=False, comment="邮箱")
    first_name = Column(String(100), nullable=False, default="", comment="名")
    last_name = Column(String(100), nullable=False, default="", comment="姓")

    stripe_customer_id = Column(
        String(255), index=True, nullable=True, comment="Stripe 客户ID（解析后缓存）"
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

    orders = relationship("OrderModel", back_populates="customer", lazy="select")

    def __repr__(self):
        return f"<CustomerModel(id={self.id}, email_address='{self.email_address}')>"
