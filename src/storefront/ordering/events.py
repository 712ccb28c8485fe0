"""Domain events for the Order aggregate."""

from protean.fields import DateTime, Float, Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="Order")
class OrderPlaced:
    """A cart was turned into an order."""

    __version__ = "v1"

    order_id: Identifier(required=True)
    user_id: Identifier(required=True)
    line_count: Integer(required=True)
    total_value: Float(required=True)
    placed_at: DateTime(required=True)
