# app/services/cart_service.py
from typing import List

from sqlalchemy.orm import Session

from app.data.models.cart import CartModel
from app.domain.errors import CartNotFoundError, InvalidArgumentError
from app.domain.schemas import CartOut, CreateCartIn, UpdateCartIn, UserProfile
from app.repos.cart_repo import CartRepo
from app.services.user_client import UserClient
from app.utils.logging import get_logger

logger = get_logger(__name__)


class CartService:
    """
    Use case'y dla domeny cart.
    Odczyty (get, list) wzbogacaja koszyk o profil z user-service,
    ale awaria user-service nigdy nie blokuje zwrocenia koszyka.
    """

    def __init__(self, db: Session, user_client: UserClient):
        self.repo = CartRepo(db)
        self.user_client = user_client

    #query - odczyt
    def list_carts(self) -> List[CartOut]:
        carts = self.repo.list_carts()
        logger.info(f"Fetching all carts ({len(carts)})")
        return [self._to_out(cart, self._fetch_profile(cart)) for cart in carts]

    def get_cart(self, cart_id: int) -> CartOut:
        cart = self._require_cart(cart_id)
        logger.info(f"Fetching cart {cart_id}")
        return self._to_out(cart, self._fetch_profile(cart))

    #commands
    def create_cart(self, payload: CreateCartIn) -> CartOut:
        created = self.repo.save_cart(CartModel(user_id=payload.user_id))
        logger.info(f"Utworzono koszyk {created.id} dla uzytkownika {created.user_id}")
        #bez wzbogacania, klient moze pobrac koszyk ponownie
        return self._to_out(created)

    def update_cart(self, payload: UpdateCartIn) -> CartOut:
        if payload.cart_id is None:
            raise InvalidArgumentError("Brak cartId w koszyku do aktualizacji")
        return self.update_cart_by_id(payload.cart_id, payload)

    def update_cart_by_id(self, cart_id: int, payload: UpdateCartIn) -> CartOut:
        cart = self._require_cart(cart_id)

        #identyfikator zawsze z istniejacego koszyka, user z payloadu jesli podany
        if payload.user_id is not None:
            cart.user_id = payload.user_id

        updated = self.repo.save_cart(cart)
        logger.info(f"Zaktualizowano koszyk {updated.id}, user {updated.user_id}")
        return self._to_out(updated)

    def delete_cart(self, cart_id: int) -> bool:
        if not self.repo.delete_cart(cart_id):
            raise CartNotFoundError(f"Koszyk o id {cart_id} nie istnieje")
        logger.info(f"Usunieto koszyk {cart_id}")
        return True

    def _require_cart(self, cart_id: int) -> CartModel:
        cart = self.repo.get_cart(cart_id)
        if not cart:
            raise CartNotFoundError(f"Koszyk o id {cart_id} nie istnieje")
        return cart

    def _fetch_profile(self, cart: CartModel) -> UserProfile | None:
        if cart.user_id is None:
            logger.warning(f"Cart {cart.id} has no user id, skipping user service call")
            return None

        try:
            lookup = self.user_client.fetch_user(cart.user_id)
        except Exception as e:
            # blad user-service tylko obniza jakosc odpowiedzi
            logger.warning(f"Failed to fetch user {cart.user_id} for cart {cart.id}: {e}")
            return None

        if lookup is None or not lookup.found:
            outcome = lookup.outcome.value if lookup is not None else "EMPTY"
            logger.warning(
                f"No user profile for user {cart.user_id} (cart {cart.id}): {outcome}"
            )
            return None

        return lookup.profile

    @staticmethod
    def _to_out(cart: CartModel, profile: UserProfile | None = None) -> CartOut:
        return CartOut(cart_id=cart.id, user_id=cart.user_id, user_dto=profile)
