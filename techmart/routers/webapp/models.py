"""
WebApp API Pydantic Models
"""
from pydantic import BaseModel

from techmart.cart import CartAction, ProductCard


class CartActionRequest(BaseModel):
    action: CartAction
    index: int
    value: str | int | None = None  # set_quantity only, raw input text
    confirmed: bool = False  # remove only, answer from the browser prompt


class ProductCardRequest(BaseModel):
    """Displayed content of a product card, as painted on the catalog page."""
    name: str | None = None
    price: str | None = None
    image: str | None = None
    category: str | None = None

    def to_card(self) -> ProductCard:
        data = {"category": self.category} if self.category is not None else {}
        return ProductCard(
            heading=self.name,
            price_text=self.price,
            image_src=self.image,
            data=data,
        )
