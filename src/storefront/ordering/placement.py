"""Order placement: command and handler.

Snapshots the cart into a new Order and empties the cart in the same Unit of
Work. An empty cart is rejected, so a repeated submit after a successful
placement cannot create a second, empty order. When the caller supplies an
idempotency key, a retry with the same key returns the order already placed.
"""

from protean import handle
from protean.fields import Float, Identifier, String
from protean.utils.globals import current_domain

from storefront.domain import storefront
from storefront.identity.user import User
from storefront.ordering.checkout import Checkout
from storefront.ordering.order import Order, ShippingAddress
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

# Totals closer than this are treated as equal
_TOTAL_TOLERANCE = 0.005


@storefront.command(part_of="Order")
class PlaceOrder:
    user_id = Identifier(required=True)
    street = String(required=True, max_length=255)
    pincode = String(required=True, max_length=20)
    city = String(required=True, max_length=100)
    state = String(required=True, max_length=100)
    phone_number = String(required=True, max_length=30)
    total_value = Float(required=True, min_value=0.0)
    checkout_id = String(max_length=255)


@storefront.command_handler(part_of=Order)
class PlaceOrderHandler:
    @handle(PlaceOrder)
    def place_order(self, command):
        user_repo = current_domain.repository_for(User)
        order_repo = current_domain.repository_for(Order)
        user = user_repo.get(command.user_id)

        if command.checkout_id:
            existing = order_repo.find_by_checkout(str(user.id), command.checkout_id)
            if existing is not None:
                logger.info(
                    "Checkout already completed, returning existing order",
                    user_id=str(user.id),
                    checkout_id=command.checkout_id,
                    order_id=str(existing.id),
                )
                return str(existing.id)

        checkout = Checkout(user_id=str(user.id), checkout_id=command.checkout_id)
        lines = checkout.snapshot_cart(user)

        cart_total = user.cart_total
        if abs(cart_total - command.total_value) > _TOTAL_TOLERANCE:
            logger.warning(
                "Submitted order total differs from cart total",
                user_id=str(user.id),
                submitted_total=command.total_value,
                cart_total=cart_total,
            )

        order = Order.place(
            user_id=str(user.id),
            user_email=user.email,
            name=user.name,
            lines=lines,
            address=ShippingAddress(
                street=command.street,
                pincode=command.pincode,
                city=command.city,
                state=command.state,
                phone_number=command.phone_number,
            ),
            total_value=command.total_value,
            checkout_id=command.checkout_id,
        )
        order_repo.add(order)
        checkout.order_persisted(str(order.id))

        user.clear_cart(order_id=str(order.id))
        user_repo.add(user)
        checkout.cart_cleared()

        logger.info("Order placed", user_id=str(user.id), order_id=str(order.id), lines=len(lines))
        return str(order.id)
