"""Domain events for the Product aggregate."""

from protean.fields import Boolean, DateTime, Integer, String, Text

from storefront.domain import storefront


@storefront.event(part_of="Product")
class ProductAdded:
    """A new product was listed in the catalogue."""

    __version__ = "v1"

    product_id: Integer(required=True)
    name: String(required=True)
    category: String(required=True)
    new_price: String(required=True)
    image_count: Integer(default=0)
    created_at: DateTime(required=True)


@storefront.event(part_of="Product")
class ProductEdited:
    """A product's details, prices or availability were changed."""

    __version__ = "v1"

    product_id: Integer(required=True)
    name: String(required=True)
    new_price: String(required=True)
    old_price: String(required=True)
    available: Boolean()


@storefront.event(part_of="Product")
class ProductImagesReplaced:
    """A product's gallery was replaced by a new set of images."""

    __version__ = "v1"

    product_id: Integer(required=True)
    previous_urls: Text()
    new_urls: Text()
