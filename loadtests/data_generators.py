"""Faker-based data generators for Locust load test scenarios.

Each generator produces payloads that pass the storefront's validation rules
and match the exact field names the API expects (multipart form fields for
products, camelCase JSON for cart and orders).
"""

import random
import uuid

from faker import Faker

fake = Faker()

CATEGORIES = ["men", "women", "kid"]
SIZE_SETS = ["S, M, L", "S, M, L, XL", "XS, S, M", "Free Size"]

# JPEG start and end markers around filler bytes
IMAGE_BYTES = b"\xff\xd8\xff\xe0" + b"\x00" * 256 + b"\xff\xd9"


# ---------- Accounts ----------


def valid_email() -> str:
    """Generate a unique email so repeated sign-ups never collide."""
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:6]}@{fake.free_email_domain()}"


def signup_data() -> dict:
    """Generate a /signup body."""
    return {
        "username": fake.name()[:255],
        "email": valid_email(),
        "password": fake.password(length=14),
    }


# ---------- Catalogue ----------


def price_pair() -> tuple[str, str]:
    """Generate (new_price, old_price) with the new price below the old one."""
    old = random.randint(20, 300)
    new = random.randint(5, old)
    return str(new), str(old)


def product_form(**overrides) -> dict:
    """Generate /addproduct and /editproduct form fields."""
    new_price, old_price = price_pair()
    data = {
        "name": f"{fake.color_name()} {fake.word().capitalize()} {random.choice(['Shirt', 'Jacket', 'Dress', 'Tee'])}",
        "category": random.choice(CATEGORIES),
        "description": fake.paragraph(nb_sentences=3),
        "new_price": new_price,
        "old_price": old_price,
        "sizes": random.choice(SIZE_SETS),
    }
    data.update(overrides)
    return data


def image_files(count: int | None = None) -> list[tuple]:
    """Generate the multipart ``images`` parts for a product."""
    count = random.randint(1, 3) if count is None else count
    return [("images", (f"{uuid.uuid4().hex[:8]}.jpg", IMAGE_BYTES, "image/jpeg")) for _ in range(count)]


# ---------- Cart & Orders ----------


def cart_item(product_id: int, email: str | None = None) -> dict:
    """Generate an /addtocart body."""
    body = {
        "productId": product_id,
        "quantity": random.randint(1, 3),
        "size": random.choice(["S", "M", "L"]),
    }
    if email:
        body["email"] = email
    return body


def address_data() -> dict:
    """Generate a shipping address in the wire shape used by /placeorder."""
    return {
        "street": fake.street_address()[:255],
        "pincode": fake.postcode()[:20],
        "city": fake.city()[:100],
        "state": fake.state()[:100],
        "phoneNumber": f"+1-{random.randint(200, 999)}-{random.randint(200, 999)}-{random.randint(1000, 9999)}",
    }


def idempotency_key() -> str:
    return f"chk-{uuid.uuid4().hex}"
