"""Domain events for the User aggregate."""

from protean.fields import DateTime, Identifier, String

from storefront.domain import storefront


@storefront.event(part_of="User")
class UserRegistered:
    """A shopper signed up for an account."""

    __version__ = "v1"

    user_id: Identifier(required=True)
    name: String(required=True)
    email: String(required=True)
    registered_at: DateTime(required=True)


@storefront.event(part_of="User")
class UserLoggedIn:
    __version__ = "v1"

    user_id: Identifier(required=True)
    logged_in_at: DateTime(required=True)
