from sqlalchemy import Boolean, Column, Integer, String, DateTime, Numeric
from datetime import datetime, timezone

from app.data.database import Base
from app.domain.order_status import OrderStatus


class OrderModel(Base):
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, autoincrement=True)
    order_date = Column(DateTime(timezone=True), nullable=False, default=lambda: datetime.now(timezone.utc))
    order_desc = Column(String, nullable=True)
    order_fee = Column(Numeric(12, 2), nullable=True)

    is_active = Column(Boolean, nullable=False, default=True, index=True)
    status = Column(String, nullable=False, default=OrderStatus.CREATED.value)  # CREATED, ORDERED, IN_PAYMENT, COMPLETED
    version = Column(Integer, nullable=False, default=1)

    # kopia koszyka z momentu zapisu (bez FK - usuniecie koszyka nie dotyka zamowien)
    cart_id = Column(Integer, nullable=False, index=True)
    cart_user_id = Column(Integer, nullable=False)
