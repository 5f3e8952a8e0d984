from decimal import Decimal

import pytest
from storefront.cart.cart import Cart
from storefront.cart.product import ProductReference
from storefront.cart.storage import CartStore, LocalStorage


@pytest.fixture(autouse=True)
def _ctx(storefront_bed):
    with storefront_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()


@pytest.fixture()
def shirt():
    return ProductReference(
        id=5,
        name="Classic Oxford Shirt",
        price=Decimal("999.00"),
        images=["https://cdn.example.com/oxford-front.jpg", "https://cdn.example.com/oxford-back.jpg"],
        stock=50,
        sizes=["S", "M", "L", "XL"],
        colors=["White", "Blue"],
    )


@pytest.fixture()
def linen_shirt():
    return ProductReference(id="linen-7", name="Linen Casual Shirt", price=Decimal("1499.00"), stock=2)


@pytest.fixture()
def cart():
    return Cart()


@pytest.fixture()
def storage(tmp_path):
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture()
def cart_store(storage):
    return CartStore(storage)
