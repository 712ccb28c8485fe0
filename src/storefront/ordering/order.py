"""Order aggregate with OrderLine entity and ShippingAddress value object.

An order is a frozen record of a checkout: its lines are copies of the cart
items at placement time, so later changes to products or to the cart never
alter it. There are no lifecycle transitions after placement.
"""

import json
from datetime import UTC, datetime

from protean.exceptions import ValidationError
from protean.fields import DateTime, Float, HasMany, Identifier, Integer, String, Text, ValueObject

from storefront.domain import storefront
from storefront.ordering.events import OrderPlaced


@storefront.value_object(part_of="Order")
class ShippingAddress:
    street: String(required=True, max_length=255)
    pincode: String(required=True, max_length=20)
    city: String(required=True, max_length=100)
    state: String(required=True, max_length=100)
    phone_number: String(required=True, max_length=30)


@storefront.entity(part_of="Order")
class OrderLine:
    product_id: Integer(required=True)
    name: String(required=True, max_length=255)
    price: String(required=True, max_length=50)
    quantity: Integer(required=True, min_value=1)
    size: String(max_length=50)
    images: Text()  # JSON array of image URLs
    position: Integer(default=0)

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []


@storefront.aggregate
class Order:
    user_id: Identifier(required=True)
    user_email: String(required=True, max_length=254)
    name: String(required=True, max_length=255)
    lines: HasMany(OrderLine)
    address: ValueObject(ShippingAddress, required=True)
    total_value: Float(required=True, min_value=0.0)
    checkout_id: String(max_length=255)
    created_at: DateTime()

    @classmethod
    def place(cls, user_id, user_email, name, lines, address, total_value, checkout_id=None):
        """Create an order from cart snapshots (dicts as produced by ``CartItem.snapshot``)."""
        if not lines:
            raise ValidationError({"cart": ["Cannot place an order with an empty cart"]})

        now = datetime.now(UTC)
        order = cls(
            user_id=user_id,
            user_email=user_email,
            name=name,
            lines=[
                OrderLine(
                    product_id=line["product_id"],
                    name=line["name"],
                    price=line["price"],
                    quantity=line["quantity"],
                    size=line.get("size"),
                    images=json.dumps(line.get("images") or []),
                    position=position,
                )
                for position, line in enumerate(lines)
            ],
            address=address,
            total_value=total_value,
            checkout_id=checkout_id,
            created_at=now,
        )

        order.raise_(
            OrderPlaced(
                order_id=str(order.id),
                user_id=str(user_id),
                line_count=len(lines),
                total_value=total_value,
                placed_at=now,
            )
        )
        return order

    @property
    def ordered_lines(self) -> list[OrderLine]:
        return sorted(self.lines, key=lambda line: line.position or 0)
