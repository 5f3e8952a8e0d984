"""HTTP client for the order service.

Wraps a ``requests.Session`` (or anything with the same ``request`` call)
and maps responses onto the storefront's error taxonomy:

    connection error, timeout, 5xx  -> TransientNetworkError (retryable)
    409                             -> ConflictError
    400, 422                        -> protean ValidationError
    any other 4xx                   -> OrderServiceError
    2xx that is not the expected JSON -> OrderServiceError
"""

import requests
from protean.exceptions import ValidationError
from pydantic import ValidationError as SchemaError

from storefront.cart.product import ProductReference
from storefront.config import DEFAULT_TIMEOUT
from storefront.errors import ConflictError, OrderServiceError, TransientNetworkError
from storefront.orders.models import Order, OrderAnalytics, OrderPage
from storefront.orders.status import OrderStatus
from storefront.utils.logging import get_logger

logger = get_logger(__name__)

CUSTOMER_HEADER = "X-Customer-Id"


def _error_body(response):
    try:
        body = response.json()
    except ValueError:
        return response.text
    if isinstance(body, dict) and "error" in body:
        return body["error"]
    return body


class OrderServiceClient:
    def __init__(self, base_url, session=None, timeout=DEFAULT_TIMEOUT, customer_id=None):
        self.base_url = base_url.rstrip("/")
        self.session = session if session is not None else requests.Session()
        self.timeout = timeout
        self.customer_id = customer_id

    @classmethod
    def from_settings(cls, settings, session=None) -> "OrderServiceClient":
        return cls(
            settings.api_url,
            session=session,
            timeout=settings.timeout,
            customer_id=settings.customer_id,
        )

    # -------------------------------------------------------------------
    # Transport
    # -------------------------------------------------------------------
    def _request(self, method, path, json=None, params=None):
        headers = {"Accept": "application/json"}
        if self.customer_id:
            headers[CUSTOMER_HEADER] = self.customer_id

        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(
                method,
                url,
                json=json,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            logger.warning("Order service unreachable", method=method, path=path, error=str(exc))
            raise TransientNetworkError(f"Order service unreachable: {exc}") from exc

        status = response.status_code
        if status < 400:
            try:
                return response.json()
            except ValueError as exc:
                logger.warning("Order service sent a non-JSON body", method=method, path=path, status=status)
                raise OrderServiceError(
                    f"Order service sent an unreadable response ({status})", status_code=status, payload=response.text
                ) from exc

        body = _error_body(response)
        logger.info("Order service rejected request", method=method, path=path, status=status)
        if status >= 500:
            raise TransientNetworkError(f"Order service error ({status})", status_code=status, payload=body)
        if status == 409:
            raise ConflictError(str(body), status_code=status, payload=body)
        if status in (400, 422):
            raise ValidationError(body if isinstance(body, dict) else {"request": [str(body)]})
        raise OrderServiceError(str(body), status_code=status, payload=body)

    def _parse(self, model, body):
        try:
            return model.model_validate(body)
        except SchemaError as exc:
            logger.warning("Order service response did not match", model=model.__name__, errors=exc.error_count())
            raise OrderServiceError(f"Unexpected {model.__name__} response from order service", payload=body) from exc

    # -------------------------------------------------------------------
    # Shopper
    # -------------------------------------------------------------------
    def checkout(self, request) -> Order:
        """Submit a CheckoutRequest; returns the created (PENDING) order."""
        return self._parse(Order, self._request("POST", "/checkout", json=request.to_payload()))

    def list_orders(self, page=0, size=10) -> OrderPage:
        return self._parse(OrderPage, self._request("GET", "/orders", params={"page": page, "size": size}))

    def get_order(self, order_id) -> Order:
        return self._parse(Order, self._request("GET", f"/orders/{order_id}"))

    def get_product(self, product_id) -> ProductReference:
        return self._parse(ProductReference, self._request("GET", f"/products/{product_id}"))

    # -------------------------------------------------------------------
    # Admin
    # -------------------------------------------------------------------
    def admin_list_orders(self, page=0, size=10) -> OrderPage:
        return self._parse(OrderPage, self._request("GET", "/admin/orders", params={"page": page, "size": size}))

    def update_order_status(self, order_id, status) -> Order:
        """Assign any status to an order. Unknown names fail before a request is sent."""
        if not isinstance(status, OrderStatus):
            try:
                status = OrderStatus(str(status).strip().upper())
            except ValueError:
                raise ValidationError({"status": [f"Unknown order status '{status}'"]}) from None

        body = self._request("PUT", f"/admin/orders/{order_id}/status", json={"status": status.value})
        return self._parse(Order, body)

    def admin_analytics(self) -> OrderAnalytics:
        """Paid revenue and order count over the service's trailing window."""
        return self._parse(OrderAnalytics, self._request("GET", "/admin/analytics"))
