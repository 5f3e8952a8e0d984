"""Fixtures for cross-context tests.

The storefront client talks to the real order service app through a
TestClient. The app's middleware pushes the ordering context per request;
the test itself runs in the storefront context.
"""

import pytest
from ordering.payment import reset_gateway


@pytest.fixture(autouse=True)
def _ctx(ordering_bed, storefront_bed):
    with storefront_bed.domain_context():
        yield

    with ordering_bed.domain_context():
        from protean import current_domain

        for _, provider in current_domain.providers.items():
            provider._data_reset()

        current_domain.event_store.store._data_reset()

    reset_gateway()


@pytest.fixture()
def app(ordering_bed):
    from app import app as order_service

    return order_service


@pytest.fixture()
def catalogue(ordering_bed):
    """Demo shirts, keyed by name."""
    from ordering.product.registration import DEMO_CATALOGUE, seed_catalogue

    with ordering_bed.domain.domain_context():
        product_ids = seed_catalogue()
    return {entry["name"]: product_id for entry, product_id in zip(DEMO_CATALOGUE, product_ids, strict=True)}
