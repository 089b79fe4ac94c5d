"""Count badge sync: mirror the total item quantity to every count indicator."""
from .page import CartPage
from .storage import CartRepository


class CountBadge:
    def __init__(self, repository: CartRepository, page: CartPage):
        self.repository = repository
        self.page = page

    async def refresh(self) -> int:
        cart = await self.repository.load()
        count = cart.total_items
        for element in self.page.counts:
            element.text = str(count)
        return count
