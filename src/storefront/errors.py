"""Client-side error taxonomy.

Domain rule violations use Protean's ``ValidationError``; the classes here
cover what can go wrong talking to the order service or the local store.
"""


class StorefrontError(Exception):
    retryable = False

    def __init__(self, message, status_code=None, payload=None):
        super().__init__(message)
        self.status_code = status_code
        self.payload = payload


class TransientNetworkError(StorefrontError):
    """Connection failure, timeout or 5xx. The cart is untouched; retry is safe."""

    retryable = True


class ConflictError(StorefrontError):
    """The order service refused the request as it stands (e.g. not enough stock)."""


class OrderServiceError(StorefrontError):
    """Any other rejection by the order service, such as an unknown order."""


class CheckoutInProgressError(StorefrontError):
    """A checkout for this cart is already being submitted."""


class PersistenceError(StorefrontError):
    """The local store could not be read."""
