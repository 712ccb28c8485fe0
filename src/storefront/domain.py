"""Storefront bounded context: Catalogue, Identity, Cart and Ordering.

A single domain so that the user's cart and a newly placed order are written
in the same Unit of Work.
"""

from protean.domain import Domain

from storefront.utils.logging import configure_logging, get_logger

configure_logging(log_dir="logs", log_file_prefix="storefront")

logger = get_logger(__name__)

# Domain Composition Root
storefront = Domain(name="storefront")
