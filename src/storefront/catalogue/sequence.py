"""Catalogue number allocation.

Product numbers come from a process-wide sequence seeded once from the highest
persisted number and incremented under a lock, so concurrent AddProduct
commands never receive the same number. The unique constraint on
``Product.product_id`` stays as the second line of defence. Deployments running
several processes against one database need a database-side sequence instead.
"""

import threading
from collections.abc import Callable

from protean.utils.globals import current_domain

from storefront.catalogue.product import Product


def _highest_persisted_number() -> int:
    return current_domain.repository_for(Product).highest_number()


class ProductNumberSequence:
    def __init__(self, seed: Callable[[], int] = _highest_persisted_number) -> None:
        self._seed = seed
        self._last: int | None = None
        self._lock = threading.Lock()

    def next(self) -> int:
        with self._lock:
            if self._last is None:
                self._last = self._seed()
            self._last += 1
            return self._last

    def reset(self) -> None:
        """Forget the current position; the next allocation re-seeds from storage."""
        with self._lock:
            self._last = None


_sequence = ProductNumberSequence()


def next_product_number() -> int:
    return _sequence.next()


def reset_product_numbers() -> None:
    _sequence.reset()
