"""Application tests for adding, editing and removing catalogue products."""

from concurrent.futures import ThreadPoolExecutor

import pytest
from protean.exceptions import ObjectNotFoundError, ValidationError
from protean.utils.globals import current_domain
from storefront.assets.port import AssetDeletionError, AssetUploadError, ImageUpload
from storefront.catalogue import listing
from storefront.catalogue.product import Product
from storefront.domain import storefront


def _details(**overrides):
    details = {
        "name": "Linen Shirt",
        "category": "men",
        "description": "A breathable linen shirt.",
        "new_price": "10",
        "old_price": "15",
        "sizes": "S, M, L",
    }
    details.update(overrides)
    return details


def _images(*filenames):
    return [ImageUpload(filename=name, content=b"img", content_type="image/jpeg") for name in filenames]


class TestAddProduct:
    def test_first_product_is_number_one(self, make_product):
        product = make_product()
        assert product.product_id == 1

    def test_numbers_increase_by_one(self, make_product):
        first = make_product(name="First")
        second = make_product(name="Second")
        third = make_product(name="Third")
        assert [first.product_id, second.product_id, third.product_id] == [1, 2, 3]

    def test_number_follows_highest_after_restart(self, make_product):
        from storefront.catalogue.sequence import reset_product_numbers

        make_product(name="First")
        make_product(name="Second")
        reset_product_numbers()

        assert make_product(name="Third").product_id == 3

    def test_images_are_uploaded_and_referenced(self, make_product, asset_store):
        product = make_product(images=("front.jpg", "back.jpg"))

        assert len(product.image_urls) == 2
        assert all(url.startswith("https://cdn.storefront.test/images/") for url in product.image_urls)
        assert all(asset_store.has(key) for key in product.asset_keys)

    def test_missing_field_rejected_before_upload(self, asset_store):
        details = _details()
        del details["description"]

        with pytest.raises(ValidationError) as exc_info:
            listing.add_product(details, _images("front.jpg"))

        assert "description" in exc_info.value.messages
        assert asset_store.calls == []

    def test_upload_failure_stores_nothing(self, asset_store):
        asset_store.configure(failing_uploads={"back.jpg"})

        with pytest.raises(AssetUploadError):
            listing.add_product(_details(), _images("front.jpg", "back.jpg"))

        assert asset_store.assets == {}
        assert listing.list_products() == []

    def test_rejected_command_releases_uploads(self, asset_store):
        with pytest.raises(ValidationError):
            listing.add_product(_details(sizes=" , "), _images("front.jpg"))

        assert asset_store.assets == {}
        assert listing.list_products() == []

    def test_product_is_persisted(self, make_product):
        product = make_product()
        stored = current_domain.repository_for(Product).get(product.id)
        assert stored.name == "Linen Shirt"
        assert stored.size_list == ["S", "M", "L"]

    def test_concurrent_adds_get_distinct_numbers(self, asset_store):
        def add_one(index):
            with storefront.domain_context():
                return listing.add_product(_details(name=f"Shirt {index}"), _images(f"{index}.jpg")).product_id

        with ThreadPoolExecutor(max_workers=8) as pool:
            numbers = list(pool.map(add_one, range(40)))

        assert sorted(numbers) == list(range(1, 41))
        stored = current_domain.repository_for(Product)._dao.query.all().items
        assert sorted(product.product_id for product in stored) == list(range(1, 41))
        assert len(asset_store.assets) == 40


class TestEditProduct:
    def test_edit_updates_fields(self, make_product):
        product = make_product()

        edited = listing.edit_product(product.product_id, _details(name="Linen Shirt II", new_price="12"))

        assert edited.name == "Linen Shirt II"
        assert edited.new_price == "12"
        assert edited.product_id == product.product_id

    def test_edit_without_images_keeps_gallery(self, make_product):
        product = make_product(images=("front.jpg",))

        edited = listing.edit_product(product.product_id, _details(new_price="9"))

        assert edited.image_urls == product.image_urls

    def test_new_images_replace_gallery_and_release_old_assets(self, make_product, asset_store):
        product = make_product(images=("front.jpg", "back.jpg"))
        old_keys = product.asset_keys

        edited = listing.edit_product(product.product_id, _details(), _images("new.jpg"))

        assert len(edited.image_urls) == 1
        assert edited.image_urls[0] not in product.image_urls
        assert not any(asset_store.has(key) for key in old_keys)
        assert asset_store.has(edited.asset_keys[0])

    def test_failed_release_of_old_images_does_not_fail_edit(self, make_product, asset_store):
        product = make_product(images=("front.jpg",))
        asset_store.configure(failing_deletes=set(product.asset_keys))

        edited = listing.edit_product(product.product_id, _details(), _images("new.jpg"))

        assert len(edited.image_urls) == 1
        assert asset_store.has(product.asset_keys[0])

    def test_edit_unknown_product_uploads_nothing(self, asset_store):
        with pytest.raises(ObjectNotFoundError):
            listing.edit_product(99, _details(), _images("new.jpg"))

        assert asset_store.calls == []

    def test_edit_with_missing_field_rejected(self, make_product):
        product = make_product()
        details = _details()
        del details["old_price"]

        with pytest.raises(ValidationError):
            listing.edit_product(product.product_id, details)

    def test_edit_can_mark_unavailable(self, make_product):
        product = make_product()
        edited = listing.edit_product(product.product_id, _details(available=False))
        assert edited.available is False


class TestRemoveProduct:
    def test_remove_returns_name_and_deletes(self, make_product):
        product = make_product()

        assert listing.remove_product(product.product_id) == "Linen Shirt"

        with pytest.raises(ObjectNotFoundError):
            listing.get_product(product.product_id)

    def test_remove_releases_every_asset(self, make_product, asset_store):
        product = make_product(images=("front.jpg", "back.jpg"))

        listing.remove_product(product.product_id)

        assert not any(asset_store.has(key) for key in product.asset_keys)

    def test_asset_failure_keeps_product_listed(self, make_product, asset_store):
        product = make_product(images=("front.jpg",))
        asset_store.configure(should_delete=False)

        with pytest.raises(AssetDeletionError):
            listing.remove_product(product.product_id)

        assert listing.get_product(product.product_id).name == "Linen Shirt"

    def test_remove_unknown_product(self):
        with pytest.raises(ObjectNotFoundError):
            listing.remove_product(42)

    def test_numbers_are_not_reused_while_process_runs(self, make_product):
        make_product(name="First")
        second = make_product(name="Second")
        listing.remove_product(second.product_id)

        assert make_product(name="Third").product_id == 3


class TestListProducts:
    def test_lists_in_catalogue_order(self, make_product):
        make_product(name="First")
        make_product(name="Second")

        assert [product.name for product in listing.list_products()] == ["First", "Second"]

    def test_empty_catalogue(self):
        assert listing.list_products() == []
