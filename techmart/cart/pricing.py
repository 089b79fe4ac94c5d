"""Pure price derivations for a cart. No I/O, no rounding until display."""
from dataclasses import dataclass
from decimal import Decimal

from techmart.config import TAX_RATE
from techmart.services.money import add, format_amount, format_money, multiply
from .models import Cart, LineItem


def line_total(item: LineItem) -> Decimal:
    """price x quantity."""
    return multiply(item.price, item.quantity)


def subtotal(cart: Cart) -> Decimal:
    return sum((line_total(item) for item in cart.items), Decimal("0"))


def tax(cart: Cart) -> Decimal:
    return multiply(subtotal(cart), TAX_RATE)


def grand_total(cart: Cart) -> Decimal:
    return add(subtotal(cart), tax(cart))


@dataclass(frozen=True)
class CartTotals:
    """Exact summary amounts for one cart snapshot."""
    subtotal: Decimal
    tax: Decimal
    total: Decimal

    @classmethod
    def of(cls, cart: Cart) -> "CartTotals":
        sub = subtotal(cart)
        tax_amount = multiply(sub, TAX_RATE)
        return cls(subtotal=sub, tax=tax_amount, total=add(sub, tax_amount))

    def formatted(self) -> dict:
        """Display strings with exactly two fractional digits."""
        return {
            "subtotal": format_money(self.subtotal),
            "tax": format_money(self.tax),
            "total": format_money(self.total),
        }


def format_unit_price(item: LineItem) -> str:
    return format_amount(item.price)


def format_line_total(item: LineItem) -> str:
    return format_amount(line_total(item))
