"""Domain events for the cart held by a User."""

from protean.fields import Identifier, Integer

from storefront.domain import storefront


@storefront.event(part_of="User")
class CartItemAdded:
    """Units of a product were put in the cart (new item or merged into an existing one)."""

    __version__ = "v1"

    user_id: Identifier(required=True)
    product_id: Integer(required=True)
    quantity_added: Integer(required=True)
    quantity: Integer(required=True)


@storefront.event(part_of="User")
class CartItemDecremented:
    """One unit of a product was taken out of the cart."""

    __version__ = "v1"

    user_id: Identifier(required=True)
    product_id: Integer(required=True)
    quantity: Integer(required=True)


@storefront.event(part_of="User")
class CartItemRemoved:
    """A product's last unit was taken out of the cart."""

    __version__ = "v1"

    user_id: Identifier(required=True)
    product_id: Integer(required=True)


@storefront.event(part_of="User")
class CartCleared:
    """The cart was emptied because its contents became an order."""

    __version__ = "v1"

    user_id: Identifier(required=True)
    order_id: Identifier()
