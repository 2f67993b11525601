#import wszystkich modeli zeby SQLAlchemy je zarejestrowal w base metadata

from app.data.models.user import UserModel
from app.data.models.cart import CartModel
from app.data.models.cart_item import CartItemModel
from app.data.models.product import CategoryModel, ProductModel
from app.data.models.order import OrderModel, OrderStatus
from app.data.models.order_item import OrderItemModel
from app.data.models.address import ShippingAddressModel

__all__ = [
    "UserModel",
    "CartModel",
    "CartItemModel",
    "CategoryModel",
    "ProductModel",
    "OrderModel",
    "OrderStatus",
    "OrderItemModel",
    "ShippingAddressModel",
]
