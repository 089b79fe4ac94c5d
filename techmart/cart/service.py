"""Cart controller: read-mutate-persist-render for every user action."""
import inspect
import re
import time
from enum import Enum
from typing import Any, Awaitable, Callable, Optional, Union

from techmart.errors import ERROR_CART_UNAVAILABLE, MSG_ITEM_ADDED, MSG_ITEM_REMOVED
from techmart.logging import get_logger, sanitize_string_for_logging
from .badge import CountBadge
from .models import Cart, LineItem, ProductDescriptor
from .notifications import NotificationChannel
from .page import CartPage
from .pricing import CartTotals
from .renderer import CartRenderer
from .storage import CartRepository, CartStorageError

logger = get_logger(__name__)

Confirm = Callable[[str], Union[bool, Awaitable[bool]]]

_INT_PREFIX = re.compile(r"\s*([+-]?[0-9]+)")


class CartAction(str, Enum):
    INCREMENT = "increment"
    DECREMENT = "decrement"
    SET_QUANTITY = "set_quantity"
    REMOVE = "remove"


class StaleCartIndexError(IndexError):
    """The index does not address an item in the freshly loaded cart."""


class UnknownCartActionError(ValueError):
    pass


def parse_quantity(raw: Any) -> int:
    """
    Read a quantity the way a numeric input's text is read: optional sign
    and leading digits, anything after them ignored. Results below 1
    (including unparseable input) clamp to 1.
    """
    if isinstance(raw, bool):
        return 1
    if isinstance(raw, int):
        value = raw
    else:
        match = _INT_PREFIX.match(str(raw) if raw is not None else "")
        try:
            value = int(match.group(1)) if match else 1
        except ValueError:
            # Digit run past the interpreter's int conversion limit
            value = 1
    return max(value, 1)


def new_item_id(cart: Cart) -> str:
    """Millisecond timestamp token, bumped until unused in this cart."""
    taken = {item.id for item in cart.items}
    candidate = int(time.time() * 1000)
    while str(candidate) in taken:
        candidate += 1
    return str(candidate)


async def _ask(confirm: Confirm, message: str) -> bool:
    answer = confirm(message)
    if inspect.isawaitable(answer):
        answer = await answer
    return bool(answer)


class CartController:
    """
    Binds cart actions to state changes for one session and one page.

    Every operation reloads the cart, mutates it, writes the whole
    collection back and re-renders. Indices refer to the order of the
    most recent render and must never be cached across operations.
    """

    def __init__(
        self,
        repository: CartRepository,
        page: CartPage,
        notifications: NotificationChannel,
        confirm: Optional[Confirm] = None,
    ):
        self.repository = repository
        self.page = page
        self.notifications = notifications
        self.confirm: Confirm = confirm or (lambda message: False)
        self.renderer = CartRenderer(repository, page)
        self.badge = CountBadge(repository, page)

    async def _load_item(self, index: int) -> tuple[Cart, LineItem]:
        cart = await self.repository.load()
        if not isinstance(index, int) or isinstance(index, bool) or not 0 <= index < len(cart):
            logger.warning(f"Stale cart index {index} for cart of {len(cart)} items")
            raise StaleCartIndexError(index)
        return cart, cart.items[index]

    async def _commit(self, cart: Cart) -> bool:
        """Persist the cart; on write failure notify and keep the stored state."""
        try:
            await self.repository.save(cart)
            return True
        except CartStorageError:
            await self.notifications.notify(ERROR_CART_UNAVAILABLE, "error")
            return False

    async def add_item(self, product: ProductDescriptor) -> LineItem:
        """
        Add one unit of a product, merging with an existing line of the same
        name and price. Only the count badge is refreshed, since add is
        triggered from pages that do not show the cart table.
        """
        cart = await self.repository.load()
        item = cart.find(product)
        if item is not None:
            item.quantity += 1
        else:
            item = LineItem(
                id=new_item_id(cart),
                name=product.name,
                category=product.category,
                price=product.price,
                image=product.image,
                quantity=1,
            )
            cart.items.append(item)

        if await self._commit(cart):
            logger.info(f"Added {sanitize_string_for_logging(product.name)} to cart")
            await self.notifications.notify(MSG_ITEM_ADDED, "success")
        await self.badge.refresh()
        return item

    async def increment_quantity(self, index: int) -> None:
        cart, item = await self._load_item(index)
        item.quantity += 1
        await self._commit(cart)
        await self.renderer.render()

    async def decrement_quantity(self, index: int) -> None:
        """Decrease by one; a quantity of 1 stays 1 and nothing is written."""
        cart, item = await self._load_item(index)
        if item.quantity > 1:
            item.quantity -= 1
            await self._commit(cart)
        await self.renderer.render()

    async def set_quantity(self, index: int, raw_value: Any) -> None:
        cart, item = await self._load_item(index)
        item.quantity = parse_quantity(raw_value)
        await self._commit(cart)
        await self.renderer.render()

    async def remove_item(self, index: int) -> bool:
        """
        Remove the item after the user confirms. Declining changes nothing.

        Returns:
            True if the item was removed
        """
        cart, item = await self._load_item(index)
        if not await _ask(self.confirm, f"Remove {item.name} from cart?"):
            await self.renderer.render()
            return False

        del cart.items[index]
        removed = await self._commit(cart)
        await self.renderer.render()
        if removed:
            logger.info(f"Removed {sanitize_string_for_logging(item.name)} from cart")
            await self.notifications.notify(MSG_ITEM_REMOVED, "info")
        return removed

    async def apply_action(self, action: Union[CartAction, str], index: int, payload: Any = None) -> None:
        """Single dispatch entry for every row control."""
        try:
            action = CartAction(action)
        except ValueError:
            raise UnknownCartActionError(action)

        if action is CartAction.INCREMENT:
            await self.increment_quantity(index)
        elif action is CartAction.DECREMENT:
            await self.decrement_quantity(index)
        elif action is CartAction.SET_QUANTITY:
            await self.set_quantity(index, payload)
        elif action is CartAction.REMOVE:
            await self.remove_item(index)

    async def summary(self) -> dict:
        """Read-only cart snapshot for API consumers."""
        cart = await self.repository.load()
        totals = CartTotals.of(cart)
        return {
            "is_empty": cart.is_empty,
            "total_items": cart.total_items,
            "items": cart.to_list(),
            "subtotal": float(totals.subtotal),
            "tax": float(totals.tax),
            "total": float(totals.total),
            **{f"{key}_display": value for key, value in totals.formatted().items()},
        }
