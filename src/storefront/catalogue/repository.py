"""Repository for the Product aggregate."""

from protean.exceptions import ObjectNotFoundError

from storefront.catalogue.product import Product
from storefront.domain import storefront


@storefront.repository(part_of=Product)
class ProductRepository:
    """Looks products up by their catalogue number rather than storage identity."""

    def find_by_number(self, product_id: int) -> Product | None:
        return self._dao.query.filter(product_id=int(product_id)).all().first

    def get_by_number(self, product_id: int) -> Product:
        product = self.find_by_number(product_id)
        if product is None:
            raise ObjectNotFoundError({"product": ["Product not found!"]})
        return product

    def list_in_catalogue_order(self) -> list[Product]:
        return self._dao.query.order_by("product_id").all().items

    def highest_number(self) -> int:
        latest = self._dao.query.order_by("-product_id").limit(1).all().first
        return latest.product_id if latest else 0
