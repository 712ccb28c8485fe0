"""Checkout progress tracking.

Placing an order moves through a fixed sequence of stages inside one command:

    STARTED → CART_SNAPSHOTTED → ORDER_PERSISTED → CART_CLEARED

Because the whole sequence runs in a single Unit of Work, a failure at any
stage discards every write made by the earlier ones.
"""

from enum import Enum

from protean.exceptions import ValidationError

from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class CheckoutStage(Enum):
    STARTED = "Started"
    CART_SNAPSHOTTED = "Cart_Snapshotted"
    ORDER_PERSISTED = "Order_Persisted"
    CART_CLEARED = "Cart_Cleared"


_VALID_TRANSITIONS = {
    CheckoutStage.STARTED: {CheckoutStage.CART_SNAPSHOTTED},
    CheckoutStage.CART_SNAPSHOTTED: {CheckoutStage.ORDER_PERSISTED},
    CheckoutStage.ORDER_PERSISTED: {CheckoutStage.CART_CLEARED},
    CheckoutStage.CART_CLEARED: set(),
}


class Checkout:
    def __init__(self, user_id: str, checkout_id: str | None = None) -> None:
        self.user_id = user_id
        self.checkout_id = checkout_id
        self.stage = CheckoutStage.STARTED
        self.lines: list[dict] = []
        self.order_id: str | None = None

    @property
    def completed(self) -> bool:
        return self.stage == CheckoutStage.CART_CLEARED

    def _advance(self, target: CheckoutStage) -> None:
        if target not in _VALID_TRANSITIONS[self.stage]:
            raise ValidationError({"checkout": [f"Cannot move from {self.stage.value} to {target.value}"]})
        self.stage = target
        logger.debug("Checkout advanced", user_id=self.user_id, stage=target.value)

    def snapshot_cart(self, user) -> list[dict]:
        """Copy the user's cart; an empty cart stops the checkout."""
        if not user.cart_items:
            raise ValidationError({"cart": ["Cannot place an order with an empty cart"]})
        self.lines = [item.snapshot() for item in user.cart]
        self._advance(CheckoutStage.CART_SNAPSHOTTED)
        return self.lines

    def order_persisted(self, order_id: str) -> None:
        self.order_id = order_id
        self._advance(CheckoutStage.ORDER_PERSISTED)

    def cart_cleared(self) -> None:
        self._advance(CheckoutStage.CART_CLEARED)
