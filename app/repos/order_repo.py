# app/repos/order_repo.py
from typing import Any, Dict, List

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from app.data.models.order import OrderModel


class OrderRepo:
    def __init__(self, db: Session):
        self.db = db

    def create_order(self, order: OrderModel) -> OrderModel:
        self.db.add(order)
        self.db.commit()
        self.db.refresh(order)
        return order

    def get_order(self, order_id: int) -> OrderModel | None:
        #rowniez nieaktywne (soft delete)
        return self.db.get(OrderModel, order_id)

    def get_active_order(self, order_id: int) -> OrderModel | None:
        return self.db.execute(
            select(OrderModel).where(
                OrderModel.id == order_id,
                OrderModel.is_active.is_(True),
            )
        ).scalar_one_or_none()

    def list_active_orders(self) -> List[OrderModel]:
        return list(
            self.db.execute(
                select(OrderModel)
                .where(OrderModel.is_active.is_(True))
                .order_by(OrderModel.id)
            ).scalars().all()
        )

    def update_order_version(
        self,
        order_id: int,
        old_version: int,
        new_data: Dict[str, Any],
    ) -> int:
        # Optimistic locking: update ... set version = old + 1 where id = ? and version = old
        result = self.db.execute(
            update(OrderModel)
            .where(
                OrderModel.id == order_id,
                OrderModel.version == old_version,
            )
            .values(version=old_version + 1, **new_data)
            .execution_options(synchronize_session=False)
        )
        return result.rowcount

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

    def refresh(self, order: OrderModel) -> OrderModel:
        self.db.refresh(order)
        return order
