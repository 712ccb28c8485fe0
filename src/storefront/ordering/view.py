"""Read side for placed orders."""

from protean.exceptions import ObjectNotFoundError
from protean.utils.globals import current_domain

from storefront.ordering.order import Order


def order_for(user_id: str, order_id: str) -> Order:
    """Load an order placed by ``user_id``.

    Orders belonging to someone else are reported as missing rather than
    forbidden, so order ids cannot be probed.
    """
    order = current_domain.repository_for(Order).get(order_id)
    if str(order.user_id) != str(user_id):
        raise ObjectNotFoundError({"order": ["Order not found!"]})
    return order


def order_view(order: Order) -> dict:
    address = order.address
    return {
        "orderId": str(order.id),
        "totalAmount": order.total_value,
        "username": order.name,
        "date": order.created_at.isoformat() if order.created_at else None,
        "items": [
            {
                "productId": line.product_id,
                "name": line.name,
                "quantity": line.quantity,
                "price": line.price,
                "size": line.size,
                "images": line.image_urls,
            }
            for line in order.ordered_lines
        ],
        "address": {
            "street": address.street,
            "pincode": address.pincode,
            "city": address.city,
            "state": address.state,
            "phoneNumber": address.phone_number,
        },
    }
