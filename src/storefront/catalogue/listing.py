"""Catalogue workflows that wrap product commands with image uploads.

Image bytes never enter a command: they are uploaded first and only the
resulting references travel through the domain. Each workflow validates its
input before touching the asset store, and releases fresh uploads again when
the command that was meant to reference them fails.
"""

import json
from collections.abc import Sequence

from protean.utils.globals import current_domain

from storefront.assets.lifecycle import ReleasePolicy, release_assets, upload_images
from storefront.assets.port import ImageUpload, StoredAsset
from storefront.catalogue.creation import AddProduct
from storefront.catalogue.editing import EditProduct
from storefront.catalogue.product import Product
from storefront.catalogue.removal import RemoveProduct
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


def _images_payload(stored: Sequence[StoredAsset]) -> str:
    return json.dumps([{"url": asset.url, "key": asset.key} for asset in stored])


def _process_with_uploads(command_cls, fields: dict, uploads: Sequence[ImageUpload]):
    stored = upload_images(uploads)
    try:
        command = command_cls(**fields, images=_images_payload(stored) if stored else None)
        return current_domain.process(command, asynchronous=False)
    except Exception:
        release_assets([asset.key for asset in stored], ReleasePolicy.BEST_EFFORT)
        raise


def add_product(details: dict, uploads: Sequence[ImageUpload] = ()) -> Product:
    """List a new product with its images and return it."""
    AddProduct(**details)  # Reject missing fields before uploading anything

    product_number = _process_with_uploads(AddProduct, details, uploads)
    return current_domain.repository_for(Product).get_by_number(product_number)


def edit_product(product_id: int, details: dict, uploads: Sequence[ImageUpload] = ()) -> Product:
    """Update a product; new images, when given, replace the whole gallery."""
    fields = {"product_id": product_id, **details}
    EditProduct(**fields)
    repo = current_domain.repository_for(Product)
    repo.get_by_number(product_id)

    replaced_keys = _process_with_uploads(EditProduct, fields, uploads)

    orphaned = release_assets(replaced_keys, ReleasePolicy.BEST_EFFORT)
    if orphaned:
        logger.warning("Replaced images left orphaned", product_id=product_id, keys=orphaned)

    return repo.get_by_number(product_id)


def remove_product(product_id: int) -> str:
    """Delete a product and its assets, returning the removed product's name."""
    return current_domain.process(RemoveProduct(product_id=product_id), asynchronous=False)


def list_products() -> list[Product]:
    return current_domain.repository_for(Product).list_in_catalogue_order()


def get_product(product_id: int) -> Product:
    return current_domain.repository_for(Product).get_by_number(product_id)
