"""Product removal: command and handler.

Assets are released with the strict policy before the record is deleted: if
the store refuses any deletion the command fails and the product stays listed.
"""

from protean import handle
from protean.fields import Integer
from protean.utils.globals import current_domain

from storefront.assets.lifecycle import ReleasePolicy, release_assets
from storefront.catalogue.product import Product
from storefront.domain import storefront
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


@storefront.command(part_of="Product")
class RemoveProduct:
    product_id: Integer(required=True)


@storefront.command_handler(part_of=Product)
class RemoveProductHandler:
    @handle(RemoveProduct)
    def remove_product(self, command):
        repo = current_domain.repository_for(Product)
        product = repo.get_by_number(command.product_id)

        release_assets(product.asset_keys, ReleasePolicy.STRICT)
        repo._dao.delete(product)

        logger.info("Product removed from catalogue", product_id=product.product_id, name=product.name)
        return product.name
