"""Tests for cart behaviour on the User aggregate."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from storefront.cart.events import CartCleared, CartItemAdded, CartItemDecremented, CartItemRemoved
from storefront.identity.user import CartItem, User


@pytest.fixture()
def user():
    user = User.register(name="Asha Rao", email="asha@example.com", password_hash="$2b$04$hash")
    user._events.clear()
    return user


def _add(user, product_id=1, quantity=1, size="M", price="10", name="Linen Shirt"):
    user.add_to_cart(
        product_id=product_id,
        name=name,
        price=price,
        quantity=quantity,
        size=size,
        images=[f"https://cdn.storefront.test/images/p{product_id}.jpg"],
    )


class TestAddToCart:
    def test_first_add_creates_item(self, user):
        _add(user, quantity=2)

        item = user.cart_item_for(1)
        assert item.quantity == 2
        assert item.name == "Linen Shirt"
        assert item.price == "10"
        assert item.size == "M"
        assert item.image_urls == ["https://cdn.storefront.test/images/p1.jpg"]
        assert item.added_at is not None

    def test_second_add_merges_quantities(self, user):
        _add(user, quantity=2)
        _add(user, quantity=1)

        assert len(user.cart_items) == 1
        assert user.cart_item_for(1).quantity == 3

    def test_merge_keeps_first_size(self, user):
        _add(user, size="M")
        _add(user, size="XL")

        assert user.cart_item_for(1).size == "M"

    def test_merge_keeps_first_price_snapshot(self, user):
        _add(user, price="10")
        _add(user, price="12")

        assert user.cart_item_for(1).price == "10"

    def test_different_products_are_separate_items(self, user):
        _add(user, product_id=1)
        _add(user, product_id=2)

        assert [item.product_id for item in user.cart] == [1, 2]

    def test_add_raises_event_with_running_quantity(self, user):
        _add(user, quantity=2)
        _add(user, quantity=1)

        event = user._events[-1]
        assert isinstance(event, CartItemAdded)
        assert event.quantity_added == 1
        assert event.quantity == 3

    def test_zero_quantity_rejected(self, user):
        with pytest.raises(ValidationError):
            _add(user, quantity=0)

    def test_cart_total(self, user):
        _add(user, product_id=1, quantity=2, price="10")
        _add(user, product_id=2, quantity=1, price="12.50")

        assert user.cart_total == pytest.approx(32.5)

    def test_snapshot(self, user):
        _add(user, quantity=2)
        assert user.cart_item_for(1).snapshot() == {
            "product_id": 1,
            "name": "Linen Shirt",
            "price": "10",
            "quantity": 2,
            "size": "M",
            "images": ["https://cdn.storefront.test/images/p1.jpg"],
        }


class TestRemoveFromCart:
    def test_remove_decrements(self, user):
        _add(user, quantity=3)

        user.remove_from_cart(1)

        assert user.cart_item_for(1).quantity == 2
        assert isinstance(user._events[-1], CartItemDecremented)

    def test_remove_last_unit_drops_item(self, user):
        _add(user, quantity=1)

        user.remove_from_cart(1)

        assert user.cart_item_for(1) is None
        assert user.cart == []
        assert isinstance(user._events[-1], CartItemRemoved)

    def test_remove_absent_product(self, user):
        with pytest.raises(ObjectNotFoundError) as exc_info:
            user.remove_from_cart(5)
        assert exc_info.value.args[0] == {"cart": ["Product not found in cart"]}

    def test_remove_leaves_other_items(self, user):
        _add(user, product_id=1)
        _add(user, product_id=2)

        user.remove_from_cart(1)

        assert [item.product_id for item in user.cart] == [2]


class TestClearCart:
    def test_clear_empties_cart(self, user):
        _add(user, product_id=1)
        _add(user, product_id=2)

        user.clear_cart(order_id="order-1")

        assert user.cart == []
        event = user._events[-1]
        assert isinstance(event, CartCleared)
        assert event.order_id == "order-1"


class TestCartItemEntity:
    def test_quantity_must_be_positive(self):
        with pytest.raises(ValidationError):
            CartItem(product_id=1, name="Linen Shirt", price="10", quantity=0)

    def test_images_default_to_empty(self):
        item = CartItem(product_id=1, name="Linen Shirt", price="10", quantity=1)
        assert item.image_urls == []
