"""Cart models with Decimal-based pricing.

Cart values are immutable: `add` and `remove` return a new Cart and leave the
receiver untouched, so a snapshot handed to storage can never change under it.
"""
from dataclasses import dataclass, field, replace
from decimal import Decimal
from typing import Any, Iterator, Optional, Protocol, Tuple

from storefront.errors import ERROR_CART_SNAPSHOT_CORRUPT, SnapshotError
from storefront.money import multiply, parse_price, round_money, sum_money


class Purchasable(Protocol):
    """Anything that can be put into the cart: a Product or an existing CartLine."""
    id: str
    title: str
    price: Decimal


@dataclass(frozen=True)
class CartLine:
    """Single line in the cart."""
    id: str
    title: str
    price: Decimal
    quantity: int = 1

    def __post_init__(self):
        if isinstance(self.quantity, bool) or not isinstance(self.quantity, int) or self.quantity < 1:
            raise ValueError("quantity must be a positive integer")
        object.__setattr__(self, "id", str(self.id))
        object.__setattr__(self, "price", parse_price(self.price))

    @property
    def line_total(self) -> Decimal:
        """Price for all units of this line, unrounded."""
        return multiply(self.price, self.quantity)

    def to_dict(self) -> dict:
        """Convert to dictionary for the snapshot."""
        return {
            "id": self.id,
            "title": self.title,
            "price": str(self.price),
            "quantity": self.quantity,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "CartLine":
        """Create from a snapshot entry. Extra keys are ignored."""
        title = data["title"]
        if not isinstance(title, str):
            raise ValueError(f"title must be a string, got {type(title).__name__}")
        return cls(
            id=str(data["id"]),
            title=title,
            price=parse_price(data["price"]),
            quantity=data["quantity"],
        )

    @classmethod
    def from_product(cls, product: Purchasable) -> "CartLine":
        return cls(id=str(product.id), title=product.title, price=product.price, quantity=1)


@dataclass(frozen=True)
class Cart:
    """Ordered collection of cart lines, at most one line per product id."""
    lines: Tuple[CartLine, ...] = field(default_factory=tuple)

    def __post_init__(self):
        lines = tuple(self.lines)
        ids = [line.id for line in lines]
        if len(ids) != len(set(ids)):
            raise ValueError("cart contains more than one line for the same product id")
        object.__setattr__(self, "lines", lines)

    def __iter__(self) -> Iterator[CartLine]:
        return iter(self.lines)

    def __len__(self) -> int:
        return len(self.lines)

    @property
    def is_empty(self) -> bool:
        return not self.lines

    @property
    def line_count(self) -> int:
        """Number of distinct products in the cart (the cart button counter)."""
        return len(self.lines)

    @property
    def total_items(self) -> int:
        """Total number of units across all lines."""
        return sum(line.quantity for line in self.lines)

    @property
    def total(self) -> Decimal:
        """Sum of price x quantity over all lines, rounded to cents."""
        return round_money(sum_money(line.line_total for line in self.lines))

    def get_line(self, product_id: str) -> Optional[CartLine]:
        product_id = str(product_id)
        return next((line for line in self.lines if line.id == product_id), None)

    def add(self, product: Purchasable) -> "Cart":
        """
        Add one unit of a product.

        An existing line for the same id gets quantity + 1 and keeps its
        position; otherwise a new line is appended at the end.
        """
        product_id = str(product.id)
        if self.get_line(product_id) is None:
            return Cart(lines=self.lines + (CartLine.from_product(product),))

        return Cart(lines=tuple(
            replace(line, quantity=line.quantity + 1) if line.id == product_id else line
            for line in self.lines
        ))

    def remove(self, product_id: str) -> "Cart":
        """
        Remove one unit of a product.

        A line that drops to zero is dropped entirely. Unknown ids leave the
        cart as it is.
        """
        product_id = str(product_id)
        lines = []
        for line in self.lines:
            if line.id != product_id:
                lines.append(line)
            elif line.quantity > 1:
                lines.append(replace(line, quantity=line.quantity - 1))
        return Cart(lines=tuple(lines))

    def to_snapshot(self) -> list:
        """Serializable list of lines, in display order."""
        return [line.to_dict() for line in self.lines]

    @classmethod
    def from_snapshot(cls, data: Any) -> "Cart":
        """
        Rebuild a cart from a decoded snapshot.

        Raises:
            SnapshotError: data is not a list of valid, unique cart lines
        """
        if not isinstance(data, list):
            raise SnapshotError(f"{ERROR_CART_SNAPSHOT_CORRUPT}: expected a list, got {type(data).__name__}")
        try:
            return cls(lines=tuple(CartLine.from_dict(entry) for entry in data))
        except (KeyError, TypeError, ValueError) as e:
            raise SnapshotError(f"{ERROR_CART_SNAPSHOT_CORRUPT}: {e}") from e
