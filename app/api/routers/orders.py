# app/api/routers/orders.py
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import (
    ConcurrencyConflictError,
    InvalidArgumentError,
    InvalidStateError,
    NotFoundError,
)
from app.domain.schemas import MAX_ID, CollectionOut, OrderIn, OrderOut
from app.services.order_service import OrderService

router = APIRouter(prefix="/api/orders", tags=["orders"])

OrderId = Annotated[int, Path(gt=0, le=MAX_ID)]


def get_service(db: Session = Depends(get_db)) -> OrderService:
    return OrderService(db)


@router.get("", response_model=CollectionOut[OrderOut])
def list_orders(svc: OrderService = Depends(get_service)):
    """
    Tylko aktywne zamowienia.
    """
    return CollectionOut[OrderOut](collection=svc.list_active_orders())


@router.get("/{order_id}", response_model=OrderOut)
def get_order(order_id: OrderId, svc: OrderService = Depends(get_service)):
    try:
        return svc.get_order(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=OrderOut)
def create_order(payload: OrderIn, svc: OrderService = Depends(get_service)):
    """
    Tworzy zamowienie dla istniejacego koszyka, status zawsze CREATED.
    """
    try:
        return svc.create_order(payload)
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.patch("/{order_id}/status", response_model=OrderOut)
def advance_status(order_id: OrderId, svc: OrderService = Depends(get_service)):
    """
    Przesuwa status o jeden krok: CREATED -> ORDERED -> IN_PAYMENT.
    """
    try:
        return svc.advance_status(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.put("/{order_id}", response_model=OrderOut)
def update_order(
    order_id: OrderId,
    payload: OrderIn,
    svc: OrderService = Depends(get_service),
):
    try:
        return svc.update_order(order_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))


@router.delete("/{order_id}", response_model=bool)
def delete_order(order_id: OrderId, svc: OrderService = Depends(get_service)):
    """
    Soft delete (is_active = false), niedozwolony w IN_PAYMENT.
    """
    try:
        return svc.delete_order(order_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidStateError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConcurrencyConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
