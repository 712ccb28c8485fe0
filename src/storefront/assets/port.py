"""Asset store port (abstract interface).

Defines the contract every binary-asset backend implements so the catalogue
can upload and release product images without knowing where they live.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass


class AssetStoreError(Exception):
    """Base class for asset store failures."""

    def __init__(self, message: str, key: str | None = None) -> None:
        super().__init__(message)
        self.key = key


class AssetUploadError(AssetStoreError):
    """An asset could not be stored."""


class AssetDeletionError(AssetStoreError):
    """A stored asset could not be deleted."""


@dataclass(frozen=True)
class StoredAsset:
    """Reference to an asset held by the store."""

    key: str
    url: str


@dataclass(frozen=True)
class ImageUpload:
    """An image received from a client, waiting to be stored."""

    filename: str
    content: bytes
    content_type: str | None = None


class AssetStore(ABC):
    """Abstract asset store interface."""

    @abstractmethod
    def upload(self, upload: ImageUpload) -> StoredAsset:
        """Store the image and return its public reference.

        Raises AssetUploadError when the store rejects the upload or times out.
        """
        ...

    @abstractmethod
    def delete(self, key: str) -> None:
        """Delete the asset stored under ``key``.

        Raises AssetDeletionError when the store cannot confirm the deletion.
        """
        ...
