"""Application tests for placing orders."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.cart.items import AddToCart
from storefront.cart.locks import process_for_user
from storefront.catalogue import listing
from storefront.domain import storefront
from storefront.identity.user import User
from storefront.ordering.order import Order
from storefront.ordering.placement import PlaceOrder
from storefront.ordering.view import order_for, order_view

ADDRESS = {
    "street": "12 MG Road",
    "pincode": "560001",
    "city": "Bengaluru",
    "state": "Karnataka",
    "phone_number": "+91-9876543210",
}


def _add(user_id, product_id, quantity=1, size=None):
    current_domain.process(
        AddToCart(user_id=user_id, product_id=product_id, quantity=quantity, size=size),
        asynchronous=False,
    )


def _place(user_id, total_value=0.0, checkout_id=None, **address):
    fields = {**ADDRESS, **address}
    return current_domain.process(
        PlaceOrder(user_id=user_id, total_value=total_value, checkout_id=checkout_id, **fields),
        asynchronous=False,
    )


@pytest.fixture()
def shopper(make_user, make_product):
    user = make_user()
    product = make_product(images=("front.jpg",))
    _add(str(user.id), product.product_id, quantity=2, size="M")
    _add(str(user.id), product.product_id, quantity=1)
    return user, product


class TestPlaceOrderHandler:
    def test_order_copies_cart(self, shopper):
        user, product = shopper

        order_id = _place(str(user.id), total_value=30.0)

        order = current_domain.repository_for(Order).get(order_id)
        assert order.user_email == "asha@example.com"
        assert order.total_value == 30.0
        assert len(order.lines) == 1
        line = order.ordered_lines[0]
        assert line.product_id == product.product_id
        assert line.quantity == 3
        assert line.price == "10"
        assert line.size == "M"
        assert line.image_urls == product.image_urls
        assert order.address.city == "Bengaluru"

    def test_cart_is_emptied(self, shopper):
        user, _ = shopper

        _place(str(user.id), total_value=30.0)

        assert current_domain.repository_for(User).get(user.id).cart == []

    def test_empty_cart_rejected(self, make_user):
        user = make_user()

        with pytest.raises(ValidationError) as exc_info:
            _place(str(user.id))

        assert "cart" in exc_info.value.messages
        assert current_domain.repository_for(Order)._dao.query.all().items == []

    def test_second_submit_without_key_is_rejected(self, shopper):
        user, _ = shopper
        _place(str(user.id), total_value=30.0)

        with pytest.raises(ValidationError):
            _place(str(user.id), total_value=30.0)

    def test_concurrent_submits_place_one_order(self, shopper):
        user, _ = shopper
        user_id = str(user.id)

        def place(_):
            with storefront.domain_context():
                try:
                    return process_for_user(user_id, PlaceOrder(user_id=user_id, total_value=30.0, **ADDRESS))
                except ValidationError:
                    return None

        with ThreadPoolExecutor(max_workers=6) as pool:
            results = list(pool.map(place, range(6)))

        placed = [order_id for order_id in results if order_id is not None]
        assert len(placed) == 1
        assert results.count(None) == 5
        orders = current_domain.repository_for(Order)._dao.query.all().items
        assert [str(order.id) for order in orders] == placed
        assert current_domain.repository_for(User).get(user.id).cart == []

    def test_same_idempotency_key_returns_same_order(self, shopper):
        user, _ = shopper

        first = _place(str(user.id), total_value=30.0, checkout_id="chk-1")
        second = _place(str(user.id), total_value=30.0, checkout_id="chk-1")

        assert first == second
        assert len(current_domain.repository_for(Order)._dao.query.all().items) == 1

    def test_mismatched_total_is_accepted(self, shopper):
        user, _ = shopper

        order_id = _place(str(user.id), total_value=12.0)

        assert current_domain.repository_for(Order).get(order_id).total_value == 12.0

    def test_incomplete_address_rejected(self, shopper):
        user, _ = shopper

        with pytest.raises(ValidationError):
            _place(str(user.id), total_value=30.0, city=None)

        assert len(current_domain.repository_for(User).get(user.id).cart) == 1

    def test_order_unchanged_by_later_product_edits(self, shopper):
        user, product = shopper
        order_id = _place(str(user.id), total_value=30.0)

        listing.edit_product(
            product.product_id,
            {
                "name": "Renamed",
                "category": "men",
                "description": "Changed",
                "new_price": "99",
                "old_price": "100",
                "sizes": "M",
            },
        )
        listing.remove_product(product.product_id)

        line = current_domain.repository_for(Order).get(order_id).ordered_lines[0]
        assert line.name == "Linen Shirt"
        assert line.price == "10"


class TestOrderView:
    def test_view_shape(self, shopper):
        user, product = shopper
        order_id = _place(str(user.id), total_value=30.0)

        view = order_view(order_for(str(user.id), order_id))

        assert view["orderId"] == order_id
        assert view["totalAmount"] == 30.0
        assert view["username"] == "Asha Rao"
        assert view["items"] == [
            {
                "productId": product.product_id,
                "name": "Linen Shirt",
                "quantity": 3,
                "price": "10",
                "size": "M",
                "images": product.image_urls,
            }
        ]
        assert view["address"]["phoneNumber"] == "+91-9876543210"

    def test_other_users_order_is_not_found(self, shopper, make_user):
        user, _ = shopper
        order_id = _place(str(user.id), total_value=30.0)
        other = make_user(name="Ben", email="ben@example.com")

        with pytest.raises(ObjectNotFoundError):
            order_for(str(other.id), order_id)
