# app/domain/schemas.py
from pydantic import BaseModel, Field, ConfigDict, field_serializer
from typing import Generic, List, TypeVar
from decimal import Decimal
from datetime import datetime

from app.domain.order_status import OrderStatus

T = TypeVar("T")

# kolumny id sa Integer (32 bit)
MAX_ID = 2**31 - 1


class WireModel(BaseModel):
    """camelCase na wejsciu i wyjsciu, snake_case tez akceptowany na wejsciu."""

    model_config = ConfigDict(populate_by_name=True, from_attributes=True)


class UserProfile(WireModel):
    """Profil uzytkownika z user-service (dane tylko do odczytu)."""

    user_id: int | None = Field(None, alias="userId")
    first_name: str | None = Field(None, alias="firstName")
    last_name: str | None = Field(None, alias="lastName")
    image_url: str | None = Field(None, alias="imageUrl")
    email: str | None = None
    phone: str | None = None


class CreateCartIn(WireModel):
    """Schema dla tworzenia koszyka."""

    user_id: int = Field(..., gt=0, le=MAX_ID, alias="userId", description="ID uzytkownika (musi byc > 0)")


class UpdateCartIn(WireModel):
    """Schema dla aktualizacji koszyka, cartId wymagany tylko bez ID w sciezce."""

    cart_id: int | None = Field(None, gt=0, le=MAX_ID, alias="cartId")
    user_id: int | None = Field(None, gt=0, le=MAX_ID, alias="userId")


class CartOut(WireModel):
    """Schema dla koszyka (response), userDto opcjonalne."""

    cart_id: int = Field(..., alias="cartId")
    user_id: int = Field(..., alias="userId")
    user_dto: UserProfile | None = Field(None, alias="userDto")


class CartRef(WireModel):
    """Koszyk zapisany w zamowieniu (kopia, nie relacja)."""

    cart_id: int | None = Field(None, gt=0, le=MAX_ID, alias="cartId")
    user_id: int | None = Field(None, gt=0, le=MAX_ID, alias="userId")


class OrderIn(WireModel):
    """
    Schema dla tworzenia i aktualizacji zamowienia.
    orderId i orderStatus sa ignorowane przez serwis.
    """

    order_id: int | None = Field(None, gt=0, le=MAX_ID, alias="orderId")
    order_date: datetime | None = Field(None, alias="orderDate")
    order_desc: str | None = Field(None, alias="orderDesc")
    order_fee: Decimal | None = Field(None, ge=0, max_digits=12, decimal_places=2, alias="orderFee")
    order_status: OrderStatus | None = Field(None, alias="orderStatus")
    cart_dto: CartRef | None = Field(None, alias="cartDto")


class OrderOut(WireModel):
    """Schema dla zamowienia (response)."""

    order_id: int = Field(..., alias="orderId")
    order_date: datetime = Field(..., alias="orderDate")
    order_desc: str | None = Field(None, alias="orderDesc")
    order_fee: Decimal | None = Field(None, alias="orderFee")
    order_status: OrderStatus = Field(..., alias="orderStatus")
    is_active: bool = Field(..., alias="isActive")
    cart_dto: CartRef = Field(..., alias="cartDto")

    @field_serializer("order_fee", when_used="json")
    def _fee_as_number(self, fee: Decimal | None) -> float | None:
        return float(fee) if fee is not None else None


class CollectionOut(BaseModel, Generic[T]):
    """Lista zasobow opakowana w {"collection": [...]}."""

    collection: List[T]
