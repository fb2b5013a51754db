# app/repos/cart_repo.py
from typing import List

from sqlalchemy import select, delete
from sqlalchemy.orm import Session

from app.data.models.cart import CartModel


class CartRepo:
    def __init__(self, db: Session):
        self.db = db

    def get_cart(self, cart_id: int) -> CartModel | None:
        return self.db.get(CartModel, cart_id)

    def list_carts(self) -> List[CartModel]:
        return list(
            self.db.execute(select(CartModel).order_by(CartModel.id)).scalars().all()
        )

    def save_cart(self, cart: CartModel) -> CartModel:
        #nowy koszyk albo zmieniony obiekt z tej samej sesji
        self.db.add(cart)
        self.db.commit()
        self.db.refresh(cart)
        return cart

    def delete_cart(self, cart_id: int) -> bool:
        result = self.db.execute(delete(CartModel).where(CartModel.id == cart_id))
        self.db.commit()
        return result.rowcount > 0
