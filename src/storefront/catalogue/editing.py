"""Product editing: command and handler.

The handler returns the asset keys of any images it replaced. They are only
released after the Unit of Work has committed the new references, so a failed
edit never leaves the product pointing at deleted assets.
"""

import json

from protean import handle
from protean.fields import Boolean, Integer, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.command(part_of="Product")
class EditProduct:
    product_id: Integer(required=True)
    name: String(required=True, max_length=255)
    category: String(required=True, max_length=100)
    description: Text(required=True)
    new_price: String(required=True, max_length=50)
    old_price: String(required=True, max_length=50)
    sizes: String(required=True, max_length=500)
    available: Boolean()
    images: Text()  # JSON array of {"url", "key"}; absent keeps the current gallery


@storefront.command_handler(part_of=Product)
class EditProductHandler:
    @handle(EditProduct)
    def edit_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_by_number(command.product_id)

        product.edit(
            name=command.name,
            category=command.category,
            description=command.description,
            new_price=command.new_price,
            old_price=command.old_price,
            sizes=command.sizes,
            available=command.available,
        )

        replaced_keys = []
        if command.images:
            replaced_keys = product.replace_images(json.loads(command.images))

        repo.add(product)
        return replaced_keys
