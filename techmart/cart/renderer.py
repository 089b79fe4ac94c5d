"""Cart renderer: projects the persisted cart and its totals onto a CartPage."""
from techmart.logging import get_logger
from .badge import CountBadge
from .page import CartPage, CartRow
from .pricing import CartTotals, format_line_total, format_unit_price
from .storage import CartRepository

logger = get_logger(__name__)


class CartRenderer:
    """
    Full-replace renderer.

    Every call reloads the cart and rebuilds all rows; nothing is diffed
    against the previous render. Row indices are only valid until the next
    render.
    """

    def __init__(self, repository: CartRepository, page: CartPage):
        self.repository = repository
        self.page = page
        self.badge = CountBadge(repository, page)

    async def render(self) -> None:
        page = self.page
        if not page.has_cart_table:
            return

        cart = await self.repository.load()
        page.rows = []

        if cart.is_empty:
            page.table_wrapper.hide()
            page.summary.hide()
            page.empty_message.show()
            page.summary_rows = {"subtotal": "", "tax": "", "total": ""}
            await self.badge.refresh()
            return

        page.table_wrapper.show()
        page.summary.show()
        page.empty_message.hide()

        page.rows = [
            CartRow(
                index=index,
                item_id=item.id,
                name=item.name,
                category=item.category,
                image=item.image,
                unit_price=format_unit_price(item),
                quantity=item.quantity,
                line_total=format_line_total(item),
            )
            for index, item in enumerate(cart.items)
        ]
        page.summary_rows = CartTotals.of(cart).formatted()
        await self.badge.refresh()
        logger.debug(f"Rendered cart with {len(page.rows)} rows")
