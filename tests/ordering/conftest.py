import pytest
from ordering.payment import reset_gateway


@pytest.fixture(autouse=True)
def _ctx(ordering_bed):
    with ordering_bed.domain_context():
        yield

        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        for _, broker in current_domain.brokers.items():
            broker._data_reset()

        current_domain.event_store.store._data_reset()

    reset_gateway()


@pytest.fixture()
def shipping_address(shipping_form):
    return dict(shipping_form, address_line2=None)


@pytest.fixture()
def oxford():
    from ordering.product.product import Product
    from protean import current_domain

    product = Product.register(
        name="Classic Oxford Shirt",
        price=99900,
        stock=10,
        sizes=["S", "M", "L"],
        colors=["White", "Blue"],
        images=["https://cdn.example.com/oxford.jpg"],
    )
    current_domain.repository_for(Product).add(product)
    return product


@pytest.fixture()
def linen():
    from ordering.product.product import Product
    from protean import current_domain

    product = Product.register(name="Linen Casual Shirt", price=149900, stock=2, sizes=["M", "L"])
    current_domain.repository_for(Product).add(product)
    return product
