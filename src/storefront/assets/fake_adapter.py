"""In-memory asset store for development and testing.

Keeps uploaded bytes in a dict and serves URLs under a fake CDN host. Uploads
and deletions can be made to fail, either for every call or only for specific
filenames/keys, so tests can drive the rollback and cleanup paths.
"""

import threading
from uuid import uuid4

from storefront.assets.port import (
    AssetDeletionError,
    AssetStore,
    AssetUploadError,
    ImageUpload,
    StoredAsset,
)

FAKE_CDN_URL = "https://cdn.storefront.test/images"


class FakeAssetStore(AssetStore):
    """Configurable fake asset store."""

    def __init__(self, base_url: str = FAKE_CDN_URL) -> None:
        self.base_url = base_url.rstrip("/")
        self.should_upload: bool = True
        self.should_delete: bool = True
        self.failing_uploads: set[str] = set()
        self.failing_deletes: set[str] = set()
        self.assets: dict[str, bytes] = {}
        self.calls: list[dict] = []
        self._lock = threading.Lock()

    def configure(
        self,
        should_upload: bool = True,
        should_delete: bool = True,
        failing_uploads: set[str] | None = None,
        failing_deletes: set[str] | None = None,
    ) -> None:
        """Configure store behavior at runtime."""
        self.should_upload = should_upload
        self.should_delete = should_delete
        self.failing_uploads = set(failing_uploads or ())
        self.failing_deletes = set(failing_deletes or ())

    def upload(self, upload: ImageUpload) -> StoredAsset:
        with self._lock:
            self.calls.append({"method": "upload", "filename": upload.filename})

            if not self.should_upload or upload.filename in self.failing_uploads:
                raise AssetUploadError(f"Upload of {upload.filename} rejected")

            extension = upload.filename.rsplit(".", 1)[-1] if "." in upload.filename else "bin"
            key = uuid4().hex[:20]
            self.assets[key] = upload.content
            return StoredAsset(key=key, url=f"{self.base_url}/{key}.{extension}")

    def delete(self, key: str) -> None:
        with self._lock:
            self.calls.append({"method": "delete", "key": key})

            if not self.should_delete or key in self.failing_deletes:
                raise AssetDeletionError(f"Deletion of {key} rejected", key=key)

            self.assets.pop(key, None)

    def has(self, key: str) -> bool:
        """Whether an asset is still resolvable under ``key``."""
        with self._lock:
            return key in self.assets
