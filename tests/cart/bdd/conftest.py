"""Shared BDD fixtures and step definitions for the cart."""

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from pytest_bdd import given, parsers, then
from storefront.cart.events import CartCleared, CartItemAdded, CartItemDecremented, CartItemRemoved
from storefront.identity.user import User

_CART_EVENT_CLASSES = {
    "CartItemAdded": CartItemAdded,
    "CartItemDecremented": CartItemDecremented,
    "CartItemRemoved": CartItemRemoved,
    "CartCleared": CartCleared,
}


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture()
def error():
    """Container for captured domain errors."""
    return {"exc": None}


def _add_to_cart(user, product_id, quantity, size="M"):
    user.add_to_cart(
        product_id=product_id,
        name=f"Product {product_id}",
        price="10",
        quantity=quantity,
        size=size,
        images=[],
    )


# ---------------------------------------------------------------------------
# Given steps
# ---------------------------------------------------------------------------
@given("a registered shopper", target_fixture="user")
def registered_shopper():
    user = User.register(name="Asha Rao", email="asha@example.com", password_hash="$2b$04$hash")
    user._events.clear()
    return user


@given(parsers.cfparse("the shopper has {quantity:d} of product {product_id:d} in the cart"), target_fixture="user")
def shopper_has_items(user, quantity, product_id):
    _add_to_cart(user, product_id, quantity)
    user._events.clear()
    return user


# ---------------------------------------------------------------------------
# Then steps (shared)
# ---------------------------------------------------------------------------
@then("the action fails with a validation error")
def action_fails_with_validation_error(error):
    assert error["exc"] is not None, "Expected a validation error but none was raised"
    assert isinstance(error["exc"], ValidationError)


@then("the action fails because the product is not in the cart")
def action_fails_not_in_cart(error):
    assert isinstance(error["exc"], ObjectNotFoundError)


@then(parsers.cfparse("a {event_type} event is raised"))
def cart_event_raised(user, event_type):
    event_cls = _CART_EVENT_CLASSES[event_type]
    assert any(
        isinstance(e, event_cls) for e in user._events
    ), f"No {event_type} event found. Events: {[type(e).__name__ for e in user._events]}"
