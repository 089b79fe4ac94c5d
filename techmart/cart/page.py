"""
Cart page document.

Server-side stand-in for the cart page DOM: each element is addressed by
the same hook name the templates emit as its class/id, so the renderer and
badge sync write to named elements rather than to markup.
"""
from dataclasses import dataclass, field
from typing import List, Optional


# Element hooks shared with the templates
TABLE = "cart-table"
TABLE_WRAPPER = "cart-table-wrapper"
SUMMARY = "cart-summary"
EMPTY_MESSAGE = "empty-cart-message"
COUNT = "cart-count"
NOTIFICATION = "cart-notification"


@dataclass
class Element:
    """A hook-addressed element with visibility and text content."""
    hook: str
    visible: bool = True
    text: str = ""

    def show(self) -> None:
        self.visible = True

    def hide(self) -> None:
        self.visible = False

    def to_dict(self) -> dict:
        return {"hook": self.hook, "visible": self.visible, "text": self.text}


@dataclass(frozen=True)
class Control:
    """An interactive control; `index` addresses the row in the current render."""
    kind: str
    index: int
    label: str = ""
    value: Optional[int] = None
    min: Optional[int] = None

    def to_dict(self) -> dict:
        data = {"kind": self.kind, "index": self.index, "label": self.label}
        if self.value is not None:
            data["value"] = self.value
        if self.min is not None:
            data["min"] = self.min
        return data


@dataclass(frozen=True)
class CartRow:
    """One rendered line item."""
    index: int
    item_id: str
    name: str
    category: str
    image: str
    unit_price: str
    quantity: int
    line_total: str

    @property
    def remove_label(self) -> str:
        return f"Remove {self.name} from cart"

    @property
    def controls(self) -> List[Control]:
        return [
            Control("decrement", self.index, label="Decrease quantity"),
            Control("quantity", self.index, label="Quantity", value=self.quantity, min=1),
            Control("increment", self.index, label="Increase quantity"),
            Control("remove", self.index, label=self.remove_label),
        ]

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "id": self.item_id,
            "name": self.name,
            "category": self.category,
            "image": self.image,
            "unit_price": self.unit_price,
            "quantity": self.quantity,
            "line_total": self.line_total,
            "controls": [control.to_dict() for control in self.controls],
        }


@dataclass
class CartPage:
    """
    Everything the cart code reads or writes on a page.

    `has_cart_table` is False for pages that only carry the shell (count
    badges and the notification region), such as catalog pages.
    """
    has_cart_table: bool = True
    count_indicators: int = 1
    table_wrapper: Element = field(default_factory=lambda: Element(TABLE_WRAPPER))
    summary: Element = field(default_factory=lambda: Element(SUMMARY))
    empty_message: Element = field(default_factory=lambda: Element(EMPTY_MESSAGE, visible=False))
    notification: Element = field(default_factory=lambda: Element(NOTIFICATION, text=""))
    notification_severity: str = ""
    rows: List[CartRow] = field(default_factory=list)
    summary_rows: dict = field(default_factory=lambda: {"subtotal": "", "tax": "", "total": ""})
    counts: List[Element] = field(default_factory=list)

    def __post_init__(self):
        if not self.counts:
            self.counts = [Element(COUNT, text="0") for _ in range(self.count_indicators)]

    @property
    def count(self) -> str:
        return self.counts[0].text if self.counts else "0"

    def to_dict(self) -> dict:
        return {
            "has_cart_table": self.has_cart_table,
            "table_wrapper": self.table_wrapper.to_dict(),
            "summary": {**self.summary.to_dict(), "rows": dict(self.summary_rows)},
            "empty_message": self.empty_message.to_dict(),
            "rows": [row.to_dict() for row in self.rows],
            "count": self.count,
            "notification": {**self.notification.to_dict(), "severity": self.notification_severity},
        }
