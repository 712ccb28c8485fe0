"""User aggregate root with CartItem entity.

The cart lives inside the User so that every cart mutation, and the clearing of
the cart when an order is placed, goes through one consistency boundary.

Cart items are snapshots: name, price and images are copied from the product
when the item is first added, and ``product_id`` is a weak reference. Items stay
in the cart even if the product is later edited or removed from the catalogue.
"""

import json
from datetime import UTC, datetime

from protean import invariant
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.fields import DateTime, HasMany, Integer, String, Text

from storefront.cart.events import CartCleared, CartItemAdded, CartItemDecremented, CartItemRemoved
from storefront.domain import storefront
from storefront.identity.events import UserLoggedIn, UserRegistered


@storefront.entity(part_of="User")
class CartItem:
    product_id = Integer(required=True)
    name = String(required=True, max_length=255)
    price = String(required=True, max_length=50)
    quantity = Integer(required=True, min_value=1)
    size = String(max_length=50)
    images = Text()  # JSON array of image URLs captured at add time
    added_at = DateTime()

    @property
    def image_urls(self) -> list[str]:
        return json.loads(self.images) if self.images else []

    def snapshot(self) -> dict:
        return {
            "product_id": self.product_id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "size": self.size,
            "images": self.image_urls,
        }


@storefront.aggregate
class User:
    name = String(required=True, max_length=255)
    email = String(required=True, max_length=254, unique=True)
    password_hash = String(required=True, max_length=255)
    cart_items = HasMany(CartItem)
    created_at = DateTime()
    last_login_at = DateTime()

    @invariant.post
    def cart_holds_one_item_per_product(self):
        product_ids = [item.product_id for item in self.cart_items]
        if len(product_ids) != len(set(product_ids)):
            raise ValidationError({"cart": ["A product can appear only once in the cart"]})

    # -------------------------------------------------------------------
    # Factory
    # -------------------------------------------------------------------
    @classmethod
    def register(cls, name, email, password_hash):
        now = datetime.now(UTC)
        user = cls(
            name=name,
            email=email.strip().lower(),
            password_hash=password_hash,
            created_at=now,
        )
        user.raise_(
            UserRegistered(
                user_id=str(user.id),
                name=user.name,
                email=user.email,
                registered_at=now,
            )
        )
        return user

    def record_login(self):
        now = datetime.now(UTC)
        self.last_login_at = now
        self.raise_(UserLoggedIn(user_id=str(self.id), logged_in_at=now))

    # -------------------------------------------------------------------
    # Cart
    # -------------------------------------------------------------------
    def cart_item_for(self, product_id) -> CartItem | None:
        return next((i for i in self.cart_items if i.product_id == int(product_id)), None)

    @property
    def cart(self) -> list[CartItem]:
        return sorted(self.cart_items, key=lambda item: (item.added_at is None, item.added_at))

    @property
    def cart_total(self) -> float:
        return sum(float(item.price) * item.quantity for item in self.cart_items)

    def add_to_cart(self, product_id, name, price, quantity, size=None, images=None):
        """Add ``quantity`` of a product, merging with an existing item for the same product.

        When merging, the size recorded by the first add is kept.
        """
        existing = self.cart_item_for(product_id)

        if existing:
            existing.quantity += quantity
            new_quantity = existing.quantity
        else:
            self.add_cart_items(
                CartItem(
                    product_id=product_id,
                    name=name,
                    price=price,
                    quantity=quantity,
                    size=size,
                    images=json.dumps(images or []),
                    added_at=datetime.now(UTC),
                )
            )
            new_quantity = quantity

        self.raise_(
            CartItemAdded(
                user_id=str(self.id),
                product_id=int(product_id),
                quantity_added=quantity,
                quantity=new_quantity,
            )
        )

    def remove_from_cart(self, product_id):
        """Take one unit of a product out of the cart, dropping the item at quantity one."""
        item = self.cart_item_for(product_id)
        if item is None:
            raise ObjectNotFoundError({"cart": ["Product not found in cart"]})

        if item.quantity > 1:
            item.quantity -= 1
            self.raise_(
                CartItemDecremented(
                    user_id=str(self.id),
                    product_id=item.product_id,
                    quantity=item.quantity,
                )
            )
        else:
            self.remove_cart_items(item)
            self.raise_(CartItemRemoved(user_id=str(self.id), product_id=item.product_id))

    def clear_cart(self, order_id=None):
        for item in list(self.cart_items):
            self.remove_cart_items(item)
        self.raise_(CartCleared(user_id=str(self.id), order_id=order_id))
