"""Product aggregate root with ProductImage entity.

A product carries two identities: the storage ``id`` Protean assigns, and the
catalogue ``product_id``, a small sequential integer that clients use to refer
to the product. Prices are kept as text so the display formatting supplied by
the merchant is preserved.
"""

import json
from datetime import UTC, datetime

from protean import atomic_change, invariant
from protean.exceptions import ValidationError
from protean.fields import Boolean, DateTime, HasMany, Integer, String, Text

from storefront.assets.keys import asset_key_from_url
from storefront.domain import storefront


def parse_sizes(sizes) -> list[str]:
    """Accept a comma separated string or a list and return trimmed, non-empty sizes."""
    if sizes is None:
        return []
    if isinstance(sizes, str):
        sizes = sizes.split(",")
    return [str(size).strip() for size in sizes if str(size).strip()]


def _utcnow() -> datetime:
    return datetime.now(UTC)


@storefront.entity(part_of="Product")
class ProductImage:
    """An image held by the asset store, in display order."""

    url: String(required=True, max_length=500)
    key: String(max_length=255)
    display_order: Integer(default=0)

    @property
    def asset_key(self) -> str:
        return self.key or asset_key_from_url(self.url)


@storefront.aggregate
class Product:
    product_id: Integer(required=True, unique=True, min_value=1)
    name: String(required=True, max_length=255)
    category: String(required=True, max_length=100)
    description: Text(required=True)
    new_price: String(required=True, max_length=50)
    old_price: String(required=True, max_length=50)
    sizes: Text()  # JSON array of size labels
    available: Boolean(default=True)
    images: HasMany(ProductImage)
    created_at: DateTime(default=_utcnow)
    updated_at: DateTime(default=_utcnow)

    @invariant.post
    def must_offer_at_least_one_size(self):
        if not self.size_list:
            raise ValidationError({"sizes": ["At least one size is required"]})

    @property
    def size_list(self) -> list[str]:
        return json.loads(self.sizes) if self.sizes else []

    @property
    def ordered_images(self) -> list[ProductImage]:
        return sorted(self.images, key=lambda image: image.display_order or 0)

    @property
    def image_urls(self) -> list[str]:
        return [image.url for image in self.ordered_images]

    @property
    def asset_keys(self) -> list[str]:
        return [image.asset_key for image in self.ordered_images]

    @classmethod
    def create(
        cls,
        product_id,
        name,
        category,
        description,
        new_price,
        old_price,
        sizes,
        available=True,
        images=None,
    ):
        from storefront.catalogue.events import ProductAdded

        now = datetime.now(UTC)
        product = cls(
            product_id=product_id,
            name=name,
            category=category,
            description=description,
            new_price=new_price,
            old_price=old_price,
            sizes=json.dumps(parse_sizes(sizes)),
            available=True if available is None else available,
            created_at=now,
            updated_at=now,
        )
        for position, image in enumerate(images or []):
            product.add_images(ProductImage(url=image["url"], key=image.get("key"), display_order=position))

        product.raise_(
            ProductAdded(
                product_id=product_id,
                name=name,
                category=category,
                new_price=new_price,
                image_count=len(product.images),
                created_at=now,
            )
        )
        return product

    def edit(self, name, category, description, new_price, old_price, sizes, available=None):
        from storefront.catalogue.events import ProductEdited

        with atomic_change(self):
            self.name = name
            self.category = category
            self.description = description
            self.new_price = new_price
            self.old_price = old_price
            self.sizes = json.dumps(parse_sizes(sizes))
            if available is not None:
                self.available = available

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductEdited(
                product_id=self.product_id,
                name=self.name,
                new_price=self.new_price,
                old_price=self.old_price,
                available=self.available,
            )
        )

    def replace_images(self, images) -> list[str]:
        """Swap the whole gallery for ``images`` and return the asset keys that were dropped."""
        from storefront.catalogue.events import ProductImagesReplaced

        previous = self.ordered_images
        released_keys = [image.asset_key for image in previous]

        for image in previous:
            self.remove_images(image)
        for position, image in enumerate(images):
            self.add_images(ProductImage(url=image["url"], key=image.get("key"), display_order=position))

        self.updated_at = datetime.now(UTC)

        self.raise_(
            ProductImagesReplaced(
                product_id=self.product_id,
                previous_urls=json.dumps([image.url for image in previous]),
                new_urls=json.dumps(self.image_urls),
            )
        )
        return released_keys

