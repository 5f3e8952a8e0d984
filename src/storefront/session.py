"""Composition root for one shopper session."""

from storefront.cart.storage import CartStore, LocalStorage
from storefront.checkout.submission import CheckoutSubmission
from storefront.config import Settings
from storefront.orders.client import OrderServiceClient
from storefront.utils.logging import add_context, get_logger

logger = get_logger(__name__)


class StorefrontSession:
    """Wires the persisted cart, the order-service client and checkout together."""

    def __init__(self, cart_store, client):
        self.cart_store = cart_store
        self.cart = cart_store.open_cart()
        self.client = client
        self.checkout = CheckoutSubmission(self.cart, client)

    @classmethod
    def open(cls, settings=None, session=None) -> "StorefrontSession":
        settings = settings or Settings.from_env()
        if settings.customer_id:
            add_context(customer_id=settings.customer_id)

        store = CartStore(LocalStorage(settings.storage_path))
        client = OrderServiceClient.from_settings(settings, session=session)
        instance = cls(store, client)
        logger.debug(
            "Storefront session opened",
            api_url=settings.api_url,
            cart_lines=len(instance.cart),
        )
        return instance

    def add_product(self, product_id, quantity=1, size=None, color=None):
        """Look a product up and add it, bounded by what is in stock.

        The size and colour must be among those the product offers. Returns
        the resulting line, or None when the product is sold out.
        """
        product = self.client.get_product(product_id)
        product.check_variant(size, color)
        allowed = product.clamp(quantity)
        if allowed < 1:
            logger.info("Product out of stock", product_id=str(product.id))
            return None
        return self.cart.add_item(product, quantity=allowed, size=size, color=color)

    def place_order(self, shipping, payment_method="mock"):
        return self.checkout.submit(shipping, payment_method)
