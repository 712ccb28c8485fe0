"""Repository for the Order aggregate."""

from storefront.domain import storefront
from storefront.ordering.order import Order


@storefront.repository(part_of=Order)
class OrderRepository:
    def find_by_checkout(self, user_id: str, checkout_id: str) -> Order | None:
        """Find the order a user already placed under an idempotency key."""
        return self._dao.query.filter(user_id=str(user_id), checkout_id=checkout_id).all().first
