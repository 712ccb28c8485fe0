"""Cart item management: commands and handler."""

from protean import handle
from protean.fields import Identifier, Integer, String
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.identity.user import User


@storefront.command(part_of="User")
class AddToCart:
    user_id = Identifier(required=True)
    product_id = Integer(required=True)
    quantity = Integer(required=True, min_value=1)
    size = String(max_length=50)


@storefront.command(part_of="User")
class RemoveFromCart:
    user_id = Identifier(required=True)
    product_id = Integer(required=True)


@storefront.command_handler(part_of=User)
class ManageCartItemsHandler:
    @handle(AddToCart)
    def add_to_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        product = current_domain.repository_for(Product).get_by_number(command.product_id)

        user.add_to_cart(
            product_id=product.product_id,
            name=product.name,
            price=product.new_price,
            quantity=command.quantity,
            size=command.size,
            images=product.image_urls,
        )
        repo.add(user)

    @handle(RemoveFromCart)
    def remove_from_cart(self, command):
        repo = current_domain.repository_for(User)
        user = repo.get(command.user_id)
        user.remove_from_cart(command.product_id)
        repo.add(user)
