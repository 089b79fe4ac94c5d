"""Catalog bridge: turn a product card's displayed content into an addable descriptor."""
import re
from dataclasses import dataclass, field
from typing import Dict, Optional

from .models import ProductDescriptor

_NON_DIGITS = re.compile(r"[^0-9]")


@dataclass
class ProductCard:
    """What a product card shows: heading text, price text, image src and data attributes."""
    heading: Optional[str] = None
    price_text: Optional[str] = None
    image_src: Optional[str] = None
    data: Dict[str, str] = field(default_factory=dict)


def parse_displayed_price(text: Optional[str]) -> int:
    """
    Strip every non-digit and read what is left as an integer.

    "₹1,299" -> 1299. Unparseable or missing text -> 0. The result is only
    as trustworthy as what the card painted.
    """
    digits = _NON_DIGITS.sub("", text or "")
    try:
        return int(digits) if digits else 0
    except ValueError:
        return 0


def extract_product_descriptor(card: ProductCard) -> ProductDescriptor:
    return ProductDescriptor(
        name=(card.heading or "").strip(),
        price=parse_displayed_price(card.price_text),
        image=card.image_src or "",
        category=card.data.get("category") or "",
    )
