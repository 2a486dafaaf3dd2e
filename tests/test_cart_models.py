"""
Tests for Cart and CartLine values
"""

from decimal import Decimal

import pytest

from storefront.cart import Cart, CartLine
from storefront.errors import SnapshotError


class TestCartLine:
    """Tests for CartLine dataclass."""

    def test_create_cart_line(self):
        line = CartLine(id="p1", title="Product One", price=Decimal("9.99"), quantity=2)

        assert line.id == "p1"
        assert line.quantity == 2
        assert line.line_total == Decimal("19.98")

    def test_price_from_float_keeps_cents(self):
        line = CartLine(id=1, title="Backpack", price=109.95)

        assert line.id == "1"
        assert line.price == Decimal("109.95")

    @pytest.mark.parametrize("quantity", [0, -1, 1.5, True])
    def test_rejects_invalid_quantity(self, quantity):
        with pytest.raises(ValueError):
            CartLine(id="p1", title="Product One", price=Decimal("1.00"), quantity=quantity)

    def test_rejects_negative_price(self):
        with pytest.raises(ValueError):
            CartLine(id="p1", title="Product One", price=Decimal("-1.00"))

    def test_from_product(self, product_p1):
        line = CartLine.from_product(product_p1)

        assert line == CartLine(id="p1", title="Product One", price=Decimal("10.00"), quantity=1)

    def test_to_dict(self):
        line = CartLine(id="p1", title="Product One", price=Decimal("9.99"), quantity=2)

        assert line.to_dict() == {"id": "p1", "title": "Product One", "price": "9.99", "quantity": 2}

    def test_from_dict_ignores_extra_fields(self):
        data = {
            "id": 7,
            "title": "Ring",
            "price": 9.99,
            "quantity": 3,
            "image": "https://catalog.test/img/7.jpg",
            "category": "jewelery",
        }

        line = CartLine.from_dict(data)

        assert line.id == "7"
        assert line.price == Decimal("9.99")
        assert line.quantity == 3


class TestAddToCart:
    """Tests for Cart.add."""

    def test_add_new_product_appends_line(self, product_p1):
        cart = Cart().add(product_p1)

        assert cart.line_count == 1
        assert cart.get_line("p1").quantity == 1

    def test_repeated_add_merges_quantity(self, product_p1):
        cart = Cart()
        for _ in range(5):
            cart = cart.add(product_p1)

        assert cart.line_count == 1
        assert cart.get_line("p1").quantity == 5

    def test_add_preserves_insertion_order(self, product_p1, product_p2):
        cart = Cart().add(product_p2).add(product_p1).add(product_p2)

        assert [line.id for line in cart] == ["p2", "p1"]
        assert cart.get_line("p2").quantity == 2

    def test_add_returns_new_cart(self, product_p1):
        empty = Cart()
        cart = empty.add(product_p1)

        assert empty.is_empty
        assert cart is not empty

    def test_add_existing_line_as_product(self, product_p1):
        """The "+" control adds the cart line itself."""
        cart = Cart().add(product_p1)
        cart = cart.add(cart.get_line("p1"))

        assert cart.get_line("p1").quantity == 2
        assert cart.line_count == 1

    def test_add_keeps_price_snapshot(self, product_p1):
        cart = Cart().add(product_p1)
        repriced = product_p1.model_copy(update={"price": Decimal("99.00")})

        cart = cart.add(repriced)

        assert cart.get_line("p1").price == Decimal("10.00")
        assert cart.get_line("p1").quantity == 2


class TestRemoveFromCart:
    """Tests for Cart.remove."""

    def test_remove_decrements(self, product_p1):
        cart = Cart().add(product_p1).add(product_p1).remove("p1")

        assert cart.get_line("p1").quantity == 1

    def test_remove_last_unit_drops_line(self, product_p1, product_p2):
        cart = Cart().add(product_p1).add(product_p2).remove("p1")

        assert cart.get_line("p1") is None
        assert [line.id for line in cart] == ["p2"]

    def test_remove_unknown_id_is_noop(self, product_p1):
        cart = Cart().add(product_p1)

        assert cart.remove("missing") == cart

    def test_remove_on_empty_cart(self):
        assert Cart().remove("p1") == Cart()

    def test_add_then_remove_restores_cart(self, product_p1, product_p2):
        before = Cart().add(product_p1).add(product_p2).add(product_p2)

        assert before.add(product_p1).remove("p1") == before
        assert before.add(product_p2).remove("p2") == before

    def test_add_then_remove_on_absent_product(self, product_p1, product_p2):
        before = Cart().add(product_p2)

        after = before.add(product_p1).remove("p1")

        assert after == before
        assert after.get_line("p1") is None

    def test_remove_keeps_order_of_other_lines(self, product_p1, product_p2):
        p3 = CartLine(id="p3", title="Product Three", price=Decimal("1.00"))
        cart = Cart().add(product_p1).add(product_p2).add(p3).remove("p2")

        assert [line.id for line in cart] == ["p1", "p3"]


class TestCartTotals:
    """Tests for derived cart values."""

    def test_empty_cart_total(self):
        assert Cart().total == Decimal("0.00")
        assert str(Cart().total) == "0.00"

    def test_total(self):
        cart = Cart(lines=(
            CartLine(id="a", title="A", price=Decimal("9.99"), quantity=2),
            CartLine(id="b", title="B", price=Decimal("5.00"), quantity=1),
        ))

        assert cart.total == Decimal("24.98")
        assert cart.total_items == 3
        assert cart.line_count == 2

    def test_total_rounds_half_to_even(self):
        cart = Cart(lines=(
            CartLine(id="a", title="A", price=Decimal("0.125"), quantity=1),
            CartLine(id="b", title="B", price=Decimal("0.135"), quantity=1),
        ))

        # 0.260 exactly; each half-cent price alone would round to even
        assert cart.total == Decimal("0.26")
        assert Cart(lines=(cart.lines[0],)).total == Decimal("0.12")
        assert Cart(lines=(cart.lines[1],)).total == Decimal("0.14")

    def test_scenario(self, product_p1, product_p2):
        cart = Cart().add(product_p1).add(product_p1).add(product_p2).remove("p1")

        assert list(cart) == [
            CartLine(id="p1", title="Product One", price=Decimal("10.00"), quantity=1),
            CartLine(id="p2", title="Product Two", price=Decimal("5.00"), quantity=1),
        ]
        assert cart.total == Decimal("15.00")

    def test_duplicate_lines_rejected(self):
        with pytest.raises(ValueError):
            Cart(lines=(
                CartLine(id="a", title="A", price=Decimal("1.00")),
                CartLine(id="a", title="A", price=Decimal("1.00")),
            ))


class TestCartSnapshot:
    """Tests for snapshot serialization."""

    def test_snapshot_round_trip(self, product_p1, product_p2):
        cart = Cart().add(product_p2).add(product_p1).add(product_p1)

        restored = Cart.from_snapshot(cart.to_snapshot())

        assert restored == cart
        assert [line.id for line in restored] == ["p2", "p1"]

    def test_empty_snapshot(self):
        assert Cart.from_snapshot([]) == Cart()

    @pytest.mark.parametrize("data", [
        {"id": "p1"},
        "cart",
        None,
        [{"id": "p1", "title": "A"}],
        [{"id": "p1", "title": "A", "price": "abc", "quantity": 1}],
        [{"id": "p1", "title": "A", "price": "1.00", "quantity": 0}],
        [{"id": "p1", "title": "A", "price": "1.00", "quantity": 1}, {"id": "p1", "title": "A", "price": "1.00", "quantity": 2}],
        ["not-a-line"],
        [{"id": "p1", "title": None, "price": "1.00", "quantity": 1}],
        [{"id": "p1", "title": 42, "price": "1.00", "quantity": 1}],
    ])
    def test_corrupt_snapshot(self, data):
        with pytest.raises(SnapshotError):
            Cart.from_snapshot(data)
