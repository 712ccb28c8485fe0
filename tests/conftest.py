import os
from pathlib import Path

import pytest


def pytest_addoption(parser):
    parser.addoption(
        "--env",
        action="store",
        default="test",
        help="Config environment to run tests on",
    )


def pytest_sessionstart(session):
    """Pytest hook to run before collecting tests.

    Select the Protean config overlay and the in-memory asset store before any
    storefront module reads its settings.
    """
    os.environ["PROTEAN_ENV"] = session.config.option.env
    os.environ.setdefault("ASSET_STORE", "fake")
    os.environ.setdefault("BCRYPT_ROUNDS", "4")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their directory location."""
    for item in items:
        test_path = str(Path(item.fspath))

        if "/domain/" in test_path:
            item.add_marker(pytest.mark.domain)
        elif "/application/" in test_path:
            item.add_marker(pytest.mark.application)
        elif "/integration/" in test_path:
            item.add_marker(pytest.mark.integration)
            if not any(m.name == "fast" for m in item.iter_markers()):
                item.add_marker(pytest.mark.slow)


@pytest.fixture(scope="session")
def _storefront_domain():
    """Initialize the storefront domain once per session."""
    from storefront.domain import storefront

    storefront.init()
    return storefront


@pytest.fixture(scope="session", autouse=True)
def setup_db(_storefront_domain):
    from storefront.utils.db import drop_db, setup_db

    setup_db(_storefront_domain)

    yield

    drop_db(_storefront_domain)


@pytest.fixture()
def asset_store():
    """The fake asset store every test runs against."""
    from storefront.assets import get_asset_store

    return get_asset_store()


@pytest.fixture(autouse=True)
def run_around_tests(_storefront_domain):
    """Push domain context and a fresh asset store before each test, cleanup after."""
    from storefront.assets import reset_asset_store, set_asset_store
    from storefront.assets.fake_adapter import FakeAssetStore
    from storefront.catalogue.sequence import reset_product_numbers

    ctx = _storefront_domain.domain_context()
    ctx.push()
    set_asset_store(FakeAssetStore())
    reset_product_numbers()

    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()
    reset_asset_store()
    reset_product_numbers()
    ctx.pop()


@pytest.fixture()
def client():
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from storefront.api import cart_router, order_router, product_router, register_exception_handlers, user_router

    app = FastAPI()
    app.include_router(product_router)
    app.include_router(user_router)
    app.include_router(cart_router)
    app.include_router(order_router)
    register_exception_handlers(app)
    return TestClient(app)


@pytest.fixture()
def make_user():
    """Factory: register a user directly through the SignUp command."""
    from protean import current_domain
    from storefront.identity.credentials import hash_password
    from storefront.identity.registration import SignUp
    from storefront.identity.user import User

    def _make(name="Asha Rao", email="asha@example.com", password="s3cret-pass"):
        user_id = current_domain.process(
            SignUp(name=name, email=email, password_hash=hash_password(password)),
            asynchronous=False,
        )
        return current_domain.repository_for(User).get(user_id)

    return _make


@pytest.fixture()
def make_product():
    """Factory: list a product, optionally with images uploaded to the fake store."""
    from storefront.assets.port import ImageUpload
    from storefront.catalogue import listing

    def _make(name="Linen Shirt", new_price="10", old_price="15", sizes="S, M, L", images=(), **overrides):
        details = {
            "name": name,
            "category": "men",
            "description": "A breathable linen shirt.",
            "new_price": new_price,
            "old_price": old_price,
            "sizes": sizes,
        }
        details.update(overrides)
        uploads = [ImageUpload(filename=filename, content=b"img", content_type="image/jpeg") for filename in images]
        return listing.add_product(details, uploads)

    return _make
