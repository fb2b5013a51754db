# app/domain/order_status.py
from enum import Enum

from app.domain.errors import InvalidStateError


class OrderStatus(str, Enum):
    CREATED = "CREATED"
    ORDERED = "ORDERED"
    IN_PAYMENT = "IN_PAYMENT"
    # brak przejscia do COMPLETED w obecnym API
    COMPLETED = "COMPLETED"


INITIAL_STATUS = OrderStatus.CREATED

#jeden krok do przodu, brak wpisu = brak przejscia
_NEXT_STATUS = {
    OrderStatus.CREATED: OrderStatus.ORDERED,
    OrderStatus.ORDERED: OrderStatus.IN_PAYMENT,
}

#statusy w ktorych zamowienia nie wolno usunac (platnosc w toku)
UNDELETABLE_STATUSES = frozenset({OrderStatus.IN_PAYMENT})


def next_status(current: OrderStatus | str) -> OrderStatus:
    """
    Czysta funkcja przejscia: zwraca nastepny status albo rzuca InvalidStateError.
    """
    current = OrderStatus(current)
    try:
        return _NEXT_STATUS[current]
    except KeyError:
        raise InvalidStateError(
            f"Nie mozna zmienic statusu zamowienia ze statusu {current.value}"
        ) from None


def ensure_deletable(current: OrderStatus | str) -> None:
    current = OrderStatus(current)
    if current in UNDELETABLE_STATUSES:
        raise InvalidStateError(
            f"Nie mozna usunac zamowienia w statusie {current.value}"
        )
