"""Per-user state tracking for Locust load test scenarios.

Each Locust user instance maintains its own state; nothing is shared across users.
State tracks tokens and ids returned by earlier steps so follow-up
requests can reference them.
"""

from dataclasses import dataclass, field


@dataclass
class ShopperState:
    """Tracks state for a single simulated shopper session."""

    email: str | None = None
    password: str | None = None
    token: str | None = None
    cart: dict[int, int] = field(default_factory=dict)
    order_ids: list[str] = field(default_factory=list)

    @property
    def auth_headers(self) -> dict:
        return {"Authorization": f"Bearer {self.token}"} if self.token else {}


@dataclass
class MerchantState:
    """Tracks the products a simulated merchant has listed."""

    product_ids: list[int] = field(default_factory=list)
