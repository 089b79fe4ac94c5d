"""Cart persistence: whole-collection load/save against the key-value store."""
import json
from typing import Optional

from techmart.db import RedisKeys, Store, TTL
from techmart.logging import get_logger, sanitize_id_for_logging
from .models import Cart, LineItem

logger = get_logger(__name__)


SEED_ITEMS = (
    {
        "id": "1",
        "name": "OnePlus Nord CE 2 5G",
        "category": "Electronics",
        "price": 400,
        "image": "https://images.unsplash.com/photo-1592750475338-74b7b21085ab?auto=format&fit=crop&w=120&q=80",
        "quantity": 1,
    },
    {
        "id": "2",
        "name": "Red Printed T-Shirt",
        "category": "Fashion",
        "price": 50,
        "image": "https://images.unsplash.com/photo-1521572163474-6864f9cf17ab?auto=format&fit=crop&w=120&q=80",
        "quantity": 2,
    },
    {
        "id": "3",
        "name": "Redmi Note 11 Pro + 5G",
        "category": "Electronics",
        "price": 400,
        "image": "https://m.media-amazon.com/images/I/71lx0qz7rFL._UF1000,1000_QL80_.jpg",
        "quantity": 1,
    },
)


def seed_cart() -> Cart:
    """Fresh copy of the demo cart shown before anything is persisted."""
    return Cart(items=[LineItem.from_dict(dict(record)) for record in SEED_ITEMS])


class CartStorageError(Exception):
    """The store rejected or failed a cart write."""


class CartRepository:
    """
    Loads and saves one browser session's cart.

    Policy: every operation reloads before mutating and writes the full
    collection back. There is no caching between calls and no partial
    update. Two tabs sharing a session race on the same key; last writer wins.
    """

    def __init__(self, store: Store, session_id: str, ttl: Optional[int] = None):
        self.store = store
        self.session_id = session_id
        self.ttl = TTL.CART if ttl is None else ttl

    @property
    def key(self) -> str:
        return RedisKeys.cart_key(self.session_id)

    async def load(self) -> Cart:
        """
        Read the stored cart.

        Absent, unparseable or unreadable data yields the seed cart, which
        is not written back. Never raises.
        """
        try:
            data = await self.store.get(self.key)
        except Exception as e:
            logger.warning(
                f"Cart store unavailable for session {sanitize_id_for_logging(self.session_id)}: {e}"
            )
            return seed_cart()

        if not data:
            return seed_cart()

        try:
            decoded = json.loads(data)
            if not decoded:
                # Stored null/false/0 behave like a missing value; [] is a real empty cart
                return Cart() if decoded == [] else seed_cart()
            return Cart.from_list(decoded)
        except (json.JSONDecodeError, KeyError, TypeError, ValueError, RecursionError) as e:
            logger.warning(
                f"Corrupted cart data for session {sanitize_id_for_logging(self.session_id)}: {e}"
            )
            return seed_cart()

    async def save(self, cart: Cart) -> None:
        """Replace the stored cart with the full collection."""
        payload = json.dumps(cart.to_list())
        try:
            await self.store.set(self.key, payload, ex=self.ttl or None)
        except Exception as e:
            logger.error(
                f"Failed to save cart for session {sanitize_id_for_logging(self.session_id)}: {e}",
                exc_info=True,
            )
            raise CartStorageError(str(e)) from e
