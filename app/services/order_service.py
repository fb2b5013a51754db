# app/services/order_service.py
from datetime import datetime, timezone
from typing import Any, Dict, List

from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.data.models.order import OrderModel
from app.domain.errors import (
    CartNotFoundError,
    ConcurrencyConflictError,
    InvalidArgumentError,
    InvalidStateError,
    OrderNotFoundError,
)
from app.domain.order_status import INITIAL_STATUS, OrderStatus, ensure_deletable, next_status
from app.domain.schemas import CartRef, OrderIn, OrderOut
from app.repos.cart_repo import CartRepo
from app.repos.order_repo import OrderRepo
from app.utils.logging import get_logger

logger = get_logger(__name__)


class OrderService:
    """
    Serwis odpowiedzialny za domene zamowien.

    - zamowienie zawsze wskazuje istniejacy koszyk (sprawdzane przy zapisie)
    - koszyk jest kopiowany do zamowienia (cart_id + user_id), nie linkowany
    - status idzie tylko do przodu: CREATED -> ORDERED -> IN_PAYMENT
    - delete to soft delete, zabroniony w IN_PAYMENT
    - kazdy zapis po odczycie przechodzi przez optimistic locking na version
    """

    def __init__(self, db: Session):
        self.repo = OrderRepo(db)
        self.cart_repo = CartRepo(db)

    #query - odczyt
    def list_active_orders(self) -> List[OrderOut]:
        orders = self.repo.list_active_orders()
        logger.info(f"Fetching active orders ({len(orders)})")
        return [self._to_out(o) for o in orders]

    def get_order(self, order_id: int) -> OrderOut:
        logger.info(f"Fetching order {order_id}")
        return self._to_out(self._require_active_order(order_id))

    #commands
    def create_order(self, payload: OrderIn) -> OrderOut:
        """
        Use Case: Tworzenie zamowienia.

        1. Wymaga koszyka w payloadzie
        2. Weryfikuje, czy koszyk istnieje
        3. Wymusza status CREATED i is_active, ignoruje orderId/orderStatus
        """
        cart_id = self._require_cart_id(payload.cart_dto)
        cart = self._resolve_cart(cart_id)

        order = OrderModel(
            order_date=payload.order_date or datetime.now(timezone.utc),
            order_desc=payload.order_desc,
            order_fee=payload.order_fee,
            is_active=True,
            status=INITIAL_STATUS.value,
            version=1,
            cart_id=cart.id,
            cart_user_id=cart.user_id,
        )

        created = self.repo.create_order(order)
        logger.info(f"Order {created.id} created from cart {cart.id}")
        return self._to_out(created)

    def advance_status(self, order_id: int) -> OrderOut:
        order = self._require_active_order(order_id)
        current = OrderStatus(order.status)

        try:
            new_status = next_status(current)
        except InvalidStateError:
            logger.warning(f"Order {order_id}: status change rejected in {current.value}")
            raise

        self._write(order, {"status": new_status.value})
        logger.info(f"Order {order_id} status {current.value} -> {new_status.value}")
        return self._to_out(order)

    def update_order(self, order_id: int, payload: OrderIn) -> OrderOut:
        order = self._require_active_order(order_id)

        #orderId, status i is_active nigdy nie sa zmieniane ta sciezka
        new_data: Dict[str, Any] = {
            "order_desc": payload.order_desc,
            "order_fee": payload.order_fee,
        }
        #order_date jest NOT NULL - zmieniana tylko gdy podana
        if payload.order_date is not None:
            new_data["order_date"] = payload.order_date

        requested_cart_id = payload.cart_dto.cart_id if payload.cart_dto else None
        if requested_cart_id is not None and requested_cart_id != order.cart_id:
            cart = self._resolve_cart(requested_cart_id)
            new_data["cart_id"] = cart.id
            new_data["cart_user_id"] = cart.user_id
            logger.info(f"Order {order_id} moved from cart {order.cart_id} to cart {cart.id}")

        self._write(order, new_data)
        logger.info(f"Order {order_id} updated")
        return self._to_out(order)

    def delete_order(self, order_id: int) -> bool:
        order = self._require_active_order(order_id)

        try:
            ensure_deletable(order.status)
        except InvalidStateError:
            logger.warning(f"Order {order_id}: delete rejected in status {order.status}")
            raise

        self._write(order, {"is_active": False})
        logger.info(f"Order {order_id} deactivated (soft delete)")
        return True

    def _write(self, order: OrderModel, new_data: Dict[str, Any]) -> None:
        # Optimistic locking: zapis tylko jesli nikt nie zmienil wersji od odczytu
        rowcount = self.repo.update_order_version(
            order_id=order.id,
            old_version=order.version,
            new_data=new_data,
        )

        if rowcount == 0:
            self.repo.rollback()
            logger.warning(f"Order {order.id}: concurrent modification detected")
            raise ConcurrencyConflictError(
                "Konflikt wspolbieznosci - zamowienie zostalo zmodyfikowane przez inna operacje"
            )

        self.repo.commit()
        self.repo.refresh(order)

    def _require_active_order(self, order_id: int) -> OrderModel:
        order = self.repo.get_active_order(order_id)
        if not order:
            raise OrderNotFoundError(f"Zamowienie o id {order_id} nie istnieje")
        return order

    @staticmethod
    def _require_cart_id(cart_ref: CartRef | None) -> int:
        if cart_ref is None or cart_ref.cart_id is None:
            raise InvalidArgumentError("Zamowienie musi wskazywac koszyk")
        return cart_ref.cart_id

    def _resolve_cart(self, cart_id: int) -> CartModel:
        cart = self.cart_repo.get_cart(cart_id)
        if not cart:
            raise CartNotFoundError(f"Koszyk o id {cart_id} nie istnieje")
        return cart

    @staticmethod
    def _to_out(order: OrderModel) -> OrderOut:
        return OrderOut(
            order_id=order.id,
            order_date=order.order_date,
            order_desc=order.order_desc,
            order_fee=order.order_fee,
            order_status=OrderStatus(order.status),
            is_active=order.is_active,
            cart_dto=CartRef(cart_id=order.cart_id, user_id=order.cart_user_id),
        )
