"""Upload and release of product image assets.

Uploads run concurrently and are all-or-nothing: if one image fails, the ones
that did upload are released again before the failure is reported.

Releasing follows one of two policies:

- BEST_EFFORT: every key is attempted, failures are logged with the key for
  offline reconciliation and returned to the caller. Used when replacing the
  images of an edited product and when rolling back uploads.
- STRICT: the first failure is raised, aborting the caller. Used when a product
  is removed, so a product is never deleted while its assets remain.
"""

from collections.abc import Iterable, Sequence
from concurrent.futures import ThreadPoolExecutor, wait
from enum import Enum

from storefront.assets import get_asset_store
from storefront.assets.port import (
    AssetDeletionError,
    AssetStore,
    AssetUploadError,
    ImageUpload,
    StoredAsset,
)
from storefront.config import settings
from storefront.utils.logging import get_logger

logger = get_logger(__name__)


class ReleasePolicy(Enum):
    BEST_EFFORT = "best_effort"
    STRICT = "strict"


def upload_images(
    uploads: Sequence[ImageUpload],
    store: AssetStore | None = None,
    max_workers: int | None = None,
) -> list[StoredAsset]:
    """Upload every image, preserving input order in the result."""
    if not uploads:
        return []

    store = store or get_asset_store()
    workers = max(1, min(max_workers or settings.asset_upload_workers, len(uploads)))

    with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="asset-upload") as pool:
        futures = [pool.submit(store.upload, upload) for upload in uploads]
        wait(futures)

    stored = [f.result() for f in futures if f.exception() is None]
    failures = [(upload, f.exception()) for upload, f in zip(uploads, futures, strict=True) if f.exception()]

    if failures:
        for upload, exc in failures:
            logger.warning("Image upload failed", filename=upload.filename, error=str(exc))
        release_assets([asset.key for asset in stored], ReleasePolicy.BEST_EFFORT, store=store)
        first_upload, first_exc = failures[0]
        raise AssetUploadError(f"Could not upload {first_upload.filename}") from first_exc

    logger.info("Images uploaded", count=len(stored))
    return stored


def release_assets(
    keys: Iterable[str],
    policy: ReleasePolicy,
    store: AssetStore | None = None,
) -> list[str]:
    """Delete the assets stored under ``keys``.

    Returns the keys that could not be deleted (always empty under STRICT,
    which raises instead).
    """
    store = store or get_asset_store()
    failed: list[str] = []

    for key in keys:
        try:
            store.delete(key)
        except AssetDeletionError as exc:
            if policy is ReleasePolicy.STRICT:
                logger.error("Asset deletion failed, aborting", key=key, error=str(exc))
                raise
            logger.warning("Orphaned asset left in store", key=key, error=str(exc))
            failed.append(key)

    return failed
