#app/api/routers/carts.py
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from sqlalchemy.orm import Session

from app.data.database import get_db
from app.domain.errors import InvalidArgumentError, NotFoundError
from app.domain.schemas import (
    MAX_ID,
    CartOut,
    CollectionOut,
    CreateCartIn,
    UpdateCartIn,
)
from app.services.cart_service import CartService
from app.services.user_client import UserClient

router = APIRouter(prefix="/api/carts", tags=["carts"])

CartId = Annotated[int, Path(gt=0, le=MAX_ID)]


def get_user_client() -> UserClient:
    return UserClient()


def get_service(
    db: Session = Depends(get_db),
    user_client: UserClient = Depends(get_user_client),
) -> CartService:
    return CartService(db=db, user_client=user_client)


@router.get("", response_model=CollectionOut[CartOut])
def list_carts(svc: CartService = Depends(get_service)):
    return CollectionOut[CartOut](collection=svc.list_carts())


@router.get("/{cart_id}", response_model=CartOut)
def get_cart(cart_id: CartId, svc: CartService = Depends(get_service)):
    try:
        return svc.get_cart(cart_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.post("", response_model=CartOut)
def create_cart(payload: CreateCartIn, svc: CartService = Depends(get_service)):
    return svc.create_cart(payload)


@router.put("", response_model=CartOut)
def update_cart(payload: UpdateCartIn, svc: CartService = Depends(get_service)):
    try:
        return svc.update_cart(payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except InvalidArgumentError as e:
        raise HTTPException(status_code=400, detail=str(e))


@router.put("/{cart_id}", response_model=CartOut)
def update_cart_by_id(
    cart_id: CartId,
    payload: UpdateCartIn,
    svc: CartService = Depends(get_service),
):
    try:
        return svc.update_cart_by_id(cart_id, payload)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@router.delete("/{cart_id}", response_model=bool)
def delete_cart(cart_id: CartId, svc: CartService = Depends(get_service)):
    try:
        return svc.delete_cart(cart_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
