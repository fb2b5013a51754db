#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.cart import CartModel
from app.data.models.order import OrderModel

__all__ = ["CartModel", "OrderModel"]
