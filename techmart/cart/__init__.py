"""Cart package: models, storage, pricing, rendering and the controller facade."""
from .catalog import ProductCard, extract_product_descriptor
from .models import Cart, LineItem, ProductDescriptor
from .notifications import NotificationChannel
from .page import CartPage
from .renderer import CartRenderer
from .service import CartAction, CartController, StaleCartIndexError, UnknownCartActionError
from .storage import CartRepository, CartStorageError, seed_cart

__all__ = [
    "Cart",
    "LineItem",
    "ProductDescriptor",
    "ProductCard",
    "extract_product_descriptor",
    "CartPage",
    "CartRenderer",
    "CartRepository",
    "CartStorageError",
    "seed_cart",
    "NotificationChannel",
    "CartAction",
    "CartController",
    "StaleCartIndexError",
    "UnknownCartActionError",
]
