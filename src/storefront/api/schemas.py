"""Pydantic request/response schemas for the Storefront API.

These are external contracts (anti-corruption layer), separate from internal
Protean commands. Field names on the wire follow the storefront clients
(``productId``, ``totalValue``, ``phoneNumber``); Python attributes stay snake_case.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from storefront.catalogue.product import Product
from storefront.identity.user import CartItem


# ---------------------------------------------------------------------------
# Shared sub-models
# ---------------------------------------------------------------------------
class AddressSchema(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    street: str | None = None
    pincode: str | None = None
    city: str | None = None
    state: str | None = None
    phone_number: str | None = Field(None, alias="phoneNumber")


class SuccessResponse(BaseModel):
    success: bool = True
    message: str | None = None


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
class RemoveProductRequest(BaseModel):
    id: int

    model_config = {"json_schema_extra": {"examples": [{"id": 7}]}}


class ProductChangeResponse(BaseModel):
    success: bool = True
    id: int
    name: str


class ProductResponse(BaseModel):
    id: int
    name: str
    images: list[str]
    category: str
    description: str
    new_price: str
    old_price: str
    date: datetime | None = None
    available: bool
    sizes: list[str]

    @classmethod
    def from_product(cls, product: Product) -> "ProductResponse":
        return cls(
            id=product.product_id,
            name=product.name,
            images=product.image_urls,
            category=product.category,
            description=product.description,
            new_price=product.new_price,
            old_price=product.old_price,
            date=product.created_at,
            available=product.available,
            sizes=product.size_list,
        )


# ---------------------------------------------------------------------------
# Identity
# ---------------------------------------------------------------------------
class SignUpRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None

    model_config = {
        "json_schema_extra": {
            "examples": [
                {
                    "username": "Asha Rao",
                    "email": "asha@example.com",
                    "password": "correct horse battery staple",
                }
            ]
        }
    }


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class TokenResponse(BaseModel):
    success: bool = True
    token: str


class LoginResponse(TokenResponse):
    email: str
    name: str


class FailureResponse(BaseModel):
    success: bool = False
    errors: str


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
class AddToCartRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [{"email": "asha@example.com", "productId": 1, "quantity": 2, "size": "M"}],
        },
    )

    email: str | None = None
    product_id: int = Field(alias="productId")
    quantity: int = Field(1, ge=1)
    size: str | None = None


class RemoveFromCartRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    email: str | None = None
    product_id: int = Field(alias="productId")


class CartItemResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    product_id: int = Field(alias="productId")
    name: str
    price: str
    quantity: int
    size: str | None = None
    images: list[str]

    @classmethod
    def from_item(cls, item: CartItem) -> "CartItemResponse":
        return cls(
            product_id=item.product_id,
            name=item.name,
            price=item.price,
            quantity=item.quantity,
            size=item.size,
            images=item.image_urls,
        )


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
class PlaceOrderRequest(BaseModel):
    model_config = ConfigDict(
        populate_by_name=True,
        json_schema_extra={
            "examples": [
                {
                    "email": "asha@example.com",
                    "address": {
                        "street": "12 MG Road",
                        "pincode": "560001",
                        "city": "Bengaluru",
                        "state": "Karnataka",
                        "phoneNumber": "+91-9876543210",
                    },
                    "totalValue": 30.0,
                }
            ]
        },
    )

    email: str | None = None
    address: AddressSchema
    total_value: float = Field(alias="totalValue", ge=0)


class OrderPlacedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "Order placed successfully!"
    order_id: str = Field(alias="orderId")
