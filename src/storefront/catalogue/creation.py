"""Product listing: command and handler."""

import json

from protean import handle
from protean.fields import Boolean, String, Text
from protean.utils.globals import current_domain

from storefront.catalogue.product import Product
from storefront.catalogue.sequence import next_product_number
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class AddProduct:
    name: String(required=True, max_length=255)
    category: String(required=True, max_length=100)
    description: Text(required=True)
    new_price: String(required=True, max_length=50)
    old_price: String(required=True, max_length=50)
    sizes: String(required=True, max_length=500)
    available: Boolean(default=True)
    images: Text()  # JSON array of {"url", "key"}


@storefront.command_handler(part_of=Product)
class AddProductHandler:
    @handle(AddProduct)
    def add_product(self, command):
        product = Product.create(
            product_id=next_product_number(),
            name=command.name,
            category=command.category,
            description=command.description,
            new_price=command.new_price,
            old_price=command.old_price,
            sizes=command.sizes,
            available=command.available,
            images=json.loads(command.images) if command.images else [],
        )
        current_domain.repository_for(Product).add(product)

        logger.info("Product added to catalogue", product_id=product.product_id, name=product.name)
        return product.product_id
