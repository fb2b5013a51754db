"""Order lifecycle: cart reference check, status transitions and soft delete."""

from datetime import datetime
from decimal import Decimal
from unittest.mock import patch

import pytest

from app.data.models.order import OrderModel
from app.domain.errors import (
    CartNotFoundError,
    ConcurrencyConflictError,
    InvalidArgumentError,
    InvalidStateError,
    OrderNotFoundError,
)
from app.domain.order_status import OrderStatus
from app.domain.schemas import CartRef, OrderIn
from app.repos.order_repo import OrderRepo
from app.services.order_service import OrderService


@pytest.fixture()
def service(db):
    return OrderService(db)


@pytest.fixture()
def cart(make_cart):
    return make_cart(user_id=1)


@pytest.fixture()
def order(service, cart):
    return service.create_order(
        OrderIn(order_desc="A", order_fee=Decimal("100"), cart_dto=CartRef(cart_id=cart.id))
    )


def stored_orders(db):
    return db.query(OrderModel).all()


class TestCreateOrder:
    def test_creates_order_in_created_status(self, service, cart):
        result = service.create_order(
            OrderIn(order_desc="A", order_fee=Decimal("100"), cart_dto=CartRef(cart_id=cart.id))
        )

        assert result.order_id is not None
        assert result.order_status is OrderStatus.CREATED
        assert result.is_active is True
        assert result.order_date is not None
        assert result.order_fee == Decimal("100")
        assert result.cart_dto.cart_id == cart.id
        assert result.cart_dto.user_id == 1

    def test_ignores_caller_supplied_id_and_status(self, service, cart):
        result = service.create_order(
            OrderIn(
                order_id=77,
                order_status=OrderStatus.IN_PAYMENT,
                cart_dto=CartRef(cart_id=cart.id),
            )
        )

        assert result.order_id != 77
        assert result.order_status is OrderStatus.CREATED

    def test_keeps_supplied_order_date(self, service, cart):
        date = datetime(2024, 5, 1, 12, 30)

        result = service.create_order(OrderIn(order_date=date, cart_dto=CartRef(cart_id=cart.id)))

        assert result.order_date.replace(tzinfo=None) == date

    def test_snapshot_takes_user_from_stored_cart(self, service, cart):
        result = service.create_order(OrderIn(cart_dto=CartRef(cart_id=cart.id, user_id=99)))

        assert result.cart_dto.user_id == 1

    def test_missing_cart_is_invalid_argument(self, service, db):
        with patch.object(service.cart_repo, "get_cart") as get_cart:
            with pytest.raises(InvalidArgumentError):
                service.create_order(OrderIn(order_desc="no cart"))
            get_cart.assert_not_called()

        assert stored_orders(db) == []

    def test_cart_without_id_is_invalid_argument(self, service, db):
        with pytest.raises(InvalidArgumentError):
            service.create_order(OrderIn(cart_dto=CartRef(user_id=1)))

        assert stored_orders(db) == []

    def test_unknown_cart_is_not_found(self, service, db):
        with pytest.raises(CartNotFoundError):
            service.create_order(OrderIn(order_desc="A", cart_dto=CartRef(cart_id=999)))

        assert stored_orders(db) == []


class TestReadOrders:
    def test_get_active_order(self, service, order):
        result = service.get_order(order.order_id)

        assert result.order_id == order.order_id
        assert result.order_desc == "A"

    def test_get_unknown_order(self, service):
        with pytest.raises(OrderNotFoundError):
            service.get_order(999)

    def test_get_soft_deleted_order(self, service, order):
        service.delete_order(order.order_id)

        with pytest.raises(OrderNotFoundError):
            service.get_order(order.order_id)

    def test_list_only_active(self, service, cart, order):
        other = service.create_order(OrderIn(order_desc="B", cart_dto=CartRef(cart_id=cart.id)))
        service.delete_order(order.order_id)

        result = service.list_active_orders()

        assert [o.order_id for o in result] == [other.order_id]


class TestAdvanceStatus:
    def test_full_walk_to_in_payment(self, service, order):
        assert service.advance_status(order.order_id).order_status is OrderStatus.ORDERED
        assert service.advance_status(order.order_id).order_status is OrderStatus.IN_PAYMENT

        with pytest.raises(InvalidStateError):
            service.advance_status(order.order_id)

        assert service.get_order(order.order_id).order_status is OrderStatus.IN_PAYMENT

    def test_unknown_order(self, service):
        with pytest.raises(OrderNotFoundError):
            service.advance_status(999)

    def test_inactive_order(self, service, order):
        service.delete_order(order.order_id)

        with pytest.raises(OrderNotFoundError):
            service.advance_status(order.order_id)

    def test_bumps_version(self, service, order, db):
        service.advance_status(order.order_id)

        assert OrderRepo(db).get_order(order.order_id).version == 2

    def test_stale_writer_loses_to_concurrent_advance(self, session_factory, order):
        with session_factory() as stale, session_factory() as fresh:
            stale_service = OrderService(stale)
            stale_service.get_order(order.order_id)

            OrderService(fresh).advance_status(order.order_id)

            #stale widzi jeszcze version 1 i status CREATED
            with pytest.raises(ConcurrencyConflictError):
                stale_service.delete_order(order.order_id)

        with session_factory() as check:
            stored = check.get(OrderModel, order.order_id)
            assert stored.is_active is True
            assert stored.status == OrderStatus.ORDERED.value
            assert stored.version == 2

    def test_repo_compare_and_set_on_version(self, order, db):
        repo = OrderRepo(db)

        assert repo.update_order_version(order.order_id, 5, {"status": "ORDERED"}) == 0
        assert repo.update_order_version(order.order_id, 1, {"status": "ORDERED"}) == 1
        repo.commit()

        stored = repo.refresh(repo.get_order(order.order_id))
        assert stored.version == 2
        assert stored.status == OrderStatus.ORDERED.value


class TestUpdateOrder:
    def test_replaces_mutable_fields(self, service, order):
        result = service.update_order(
            order.order_id,
            OrderIn(order_desc="Updated", order_fee=Decimal("60")),
        )

        assert result.order_desc == "Updated"
        assert result.order_fee == Decimal("60")
        assert result.order_date == order.order_date
        assert result.cart_dto == order.cart_dto

    def test_identity_fields_are_untouched(self, service, order):
        service.advance_status(order.order_id)

        result = service.update_order(
            order.order_id,
            OrderIn(order_id=500, order_status=OrderStatus.CREATED, order_desc="x"),
        )

        assert result.order_id == order.order_id
        assert result.order_status is OrderStatus.ORDERED
        assert result.is_active is True

    def test_moves_order_to_other_existing_cart(self, service, order, make_cart):
        other = make_cart(user_id=8)

        result = service.update_order(
            order.order_id, OrderIn(order_desc="A", cart_dto=CartRef(cart_id=other.id))
        )

        assert result.cart_dto.cart_id == other.id
        assert result.cart_dto.user_id == 8

    def test_unknown_new_cart(self, service, order):
        with pytest.raises(CartNotFoundError):
            service.update_order(order.order_id, OrderIn(cart_dto=CartRef(cart_id=999)))

        assert service.get_order(order.order_id).cart_dto == order.cart_dto

    def test_snapshot_survives_cart_change(self, service, order, cart, db):
        cart.user_id = 55
        db.commit()

        result = service.update_order(order.order_id, OrderIn(order_desc="A"))

        assert result.cart_dto.user_id == 1

    def test_unknown_order(self, service):
        with pytest.raises(OrderNotFoundError):
            service.update_order(999, OrderIn(order_desc="x"))


class TestDeleteOrder:
    def test_soft_delete(self, service, order, db):
        assert service.delete_order(order.order_id) is True

        stored = OrderRepo(db).get_order(order.order_id)
        assert stored is not None
        assert stored.is_active is False

    def test_in_payment_cannot_be_deleted(self, service, order, db):
        service.advance_status(order.order_id)
        service.advance_status(order.order_id)

        with pytest.raises(InvalidStateError):
            service.delete_order(order.order_id)

        stored = OrderRepo(db).get_order(order.order_id)
        assert stored.is_active is True
        assert stored.status == OrderStatus.IN_PAYMENT.value
        assert stored.version == 3

    def test_unknown_order(self, service):
        with pytest.raises(OrderNotFoundError):
            service.delete_order(999)

    def test_delete_twice(self, service, order):
        service.delete_order(order.order_id)

        with pytest.raises(OrderNotFoundError):
            service.delete_order(order.order_id)

    def test_deleting_cart_keeps_orders(self, service, order, cart, db):
        db.delete(cart)
        db.commit()

        assert service.get_order(order.order_id).cart_dto.cart_id == cart.id
