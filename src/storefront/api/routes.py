"""FastAPI routes for the Storefront: catalogue, accounts, cart and orders.

Each route translates between Pydantic schemas (external contract) and the
storefront's commands and workflows.

Catalogue, account, cart and order writes block on bcrypt, the asset store or
the per-user lock, so they run in the threadpool inside their own domain
context.
"""

from fastapi import APIRouter, Depends, File, Form, Header, Response, UploadFile
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from storefront.api.schemas import (
    AddToCartRequest,
    CartItemResponse,
    FailureResponse,
    LoginRequest,
    LoginResponse,
    OrderPlacedResponse,
    PlaceOrderRequest,
    ProductChangeResponse,
    ProductResponse,
    RemoveFromCartRequest,
    RemoveProductRequest,
    SignUpRequest,
    SuccessResponse,
    TokenResponse,
)
from storefront.api.security import acting_user, current_identity
from storefront.assets.port import ImageUpload
from storefront.cart.items import AddToCart, RemoveFromCart
from storefront.cart.locks import process_for_user
from storefront.catalogue import listing
from storefront.config import settings
from storefront.domain import storefront
from storefront.identity.credentials import Identity
from storefront.identity.login import log_in
from storefront.identity.registration import EmailAlreadyRegistered, sign_up
from storefront.ordering.placement import PlaceOrder
from storefront.ordering.view import order_for, order_view

product_router = APIRouter(tags=["products"])
user_router = APIRouter(tags=["users"])
cart_router = APIRouter(tags=["cart"])
order_router = APIRouter(tags=["orders"])


async def _off_loop(func, *args, **kwargs):
    def _call():
        with storefront.domain_context():
            return func(*args, **kwargs)

    return await run_in_threadpool(_call)


# ---------------------------------------------------------------------------
# Catalogue
# ---------------------------------------------------------------------------
def _parse_available(value: str | None) -> bool | None:
    if value is None or value == "":
        return None
    return value.strip().lower() not in ("false", "0", "no", "off")


def _product_details(name, category, new_price, old_price, description, sizes, available) -> dict:
    details = {
        "name": name,
        "category": category,
        "new_price": new_price,
        "old_price": old_price,
        "description": description,
        "sizes": sizes,
    }
    parsed = _parse_available(available)
    if parsed is not None:
        details["available"] = parsed
    return details


async def _read_uploads(images: list[UploadFile] | None) -> list[ImageUpload]:
    uploads = []
    for image in images or []:
        uploads.append(
            ImageUpload(
                filename=image.filename or "upload",
                content=await image.read(),
                content_type=image.content_type,
            )
        )
    return uploads


@product_router.post("/addproduct", response_model=ProductChangeResponse)
async def add_product(
    name: str | None = Form(None),
    category: str | None = Form(None),
    new_price: str | None = Form(None),
    old_price: str | None = Form(None),
    description: str | None = Form(None),
    sizes: str | None = Form(None),
    available: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
) -> ProductChangeResponse:
    details = _product_details(name, category, new_price, old_price, description, sizes, available)
    product = await _off_loop(listing.add_product, details, await _read_uploads(images))
    return ProductChangeResponse(id=product.product_id, name=product.name)


@product_router.put("/editproduct/{product_id}", response_model=ProductChangeResponse)
async def edit_product(
    product_id: int,
    name: str | None = Form(None),
    category: str | None = Form(None),
    new_price: str | None = Form(None),
    old_price: str | None = Form(None),
    description: str | None = Form(None),
    sizes: str | None = Form(None),
    available: str | None = Form(None),
    images: list[UploadFile] | None = File(None),
) -> ProductChangeResponse:
    details = _product_details(name, category, new_price, old_price, description, sizes, available)
    product = await _off_loop(listing.edit_product, product_id, details, await _read_uploads(images))
    return ProductChangeResponse(id=product.product_id, name=product.name)


@product_router.post("/removeproduct", response_model=ProductChangeResponse)
async def remove_product(body: RemoveProductRequest) -> ProductChangeResponse:
    name = await _off_loop(listing.remove_product, body.id)
    return ProductChangeResponse(id=body.id, name=name)


@product_router.get("/allproducts", response_model=list[ProductResponse])
async def all_products() -> list[ProductResponse]:
    return [ProductResponse.from_product(product) for product in listing.list_products()]


@product_router.get("/product/{product_id}", response_model=ProductResponse)
async def get_product(product_id: int) -> ProductResponse:
    return ProductResponse.from_product(listing.get_product(product_id))


# ---------------------------------------------------------------------------
# Accounts
# ---------------------------------------------------------------------------
@user_router.post("/signup", response_model=TokenResponse)
async def signup(body: SignUpRequest):
    try:
        token = await _off_loop(sign_up, name=body.username, email=body.email, password=body.password)
    except EmailAlreadyRegistered:
        return JSONResponse(
            status_code=400,
            content=FailureResponse(errors=EmailAlreadyRegistered.MESSAGE).model_dump(),
        )
    return TokenResponse(token=token)


@user_router.post("/login", response_model=LoginResponse | FailureResponse)
async def login(body: LoginRequest, response: Response):
    result = await _off_loop(log_in, body.email, body.password)
    if not result.success:
        return FailureResponse(errors=result.error)

    response.set_cookie(
        key="token",
        value=result.token,
        httponly=True,
        max_age=settings.jwt_ttl_seconds,
        samesite="lax",
    )
    return LoginResponse(token=result.token, email=result.email, name=result.name)


# ---------------------------------------------------------------------------
# Cart
# ---------------------------------------------------------------------------
@cart_router.post("/addtocart", response_model=SuccessResponse)
async def add_to_cart(body: AddToCartRequest, identity: Identity = Depends(current_identity)) -> SuccessResponse:
    user = acting_user(identity, body.email)
    await _off_loop(
        process_for_user,
        str(user.id),
        AddToCart(
            user_id=str(user.id),
            product_id=body.product_id,
            quantity=body.quantity,
            size=body.size,
        ),
    )
    return SuccessResponse(message="Product added to cart successfully!")


@cart_router.post("/removefromcart", response_model=SuccessResponse)
async def remove_from_cart(
    body: RemoveFromCartRequest, identity: Identity = Depends(current_identity)
) -> SuccessResponse:
    user = acting_user(identity, body.email)
    await _off_loop(process_for_user, str(user.id), RemoveFromCart(user_id=str(user.id), product_id=body.product_id))
    return SuccessResponse(message="Product removed from cart successfully!")


@cart_router.get("/cartdata", response_model=list[CartItemResponse])
async def cart_data(identity: Identity = Depends(current_identity)) -> list[CartItemResponse]:
    user = acting_user(identity)
    return [CartItemResponse.from_item(item) for item in user.cart]


# ---------------------------------------------------------------------------
# Orders
# ---------------------------------------------------------------------------
@order_router.post("/placeorder", response_model=OrderPlacedResponse)
async def place_order(
    body: PlaceOrderRequest,
    identity: Identity = Depends(current_identity),
    idempotency_key: str | None = Header(None, alias="Idempotency-Key"),
) -> OrderPlacedResponse:
    user = acting_user(identity, body.email)
    address = body.address
    order_id = await _off_loop(
        process_for_user,
        str(user.id),
        PlaceOrder(
            user_id=str(user.id),
            street=address.street,
            pincode=address.pincode,
            city=address.city,
            state=address.state,
            phone_number=address.phone_number,
            total_value=body.total_value,
            checkout_id=idempotency_key,
        ),
    )
    return OrderPlacedResponse(order_id=order_id)


@order_router.get("/orders/{order_id}")
async def get_order(order_id: str, identity: Identity = Depends(current_identity)) -> dict:
    return order_view(order_for(identity.user_id, order_id))
