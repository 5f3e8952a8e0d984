"""HTTP mapping for domain exceptions.

Every error body has the shape ``{"error": ...}``.
"""

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from protean.exceptions import InvalidStateError, ObjectNotFoundError, ValidationError
from protean.integrations.fastapi import register_exception_handlers

from ordering.payment.port import PaymentGatewayError
from ordering.utils.logging import get_logger

logger = get_logger(__name__)


async def _validation_error(request: Request, exc: ValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": exc.messages})


async def _request_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=422, content={"error": jsonable_encoder(exc.errors())})


async def _not_found(request: Request, exc: ObjectNotFoundError) -> JSONResponse:
    return JSONResponse(status_code=404, content={"error": str(exc)})


async def _conflict(request: Request, exc: InvalidStateError) -> JSONResponse:
    return JSONResponse(status_code=409, content={"error": str(exc)})


async def _payment_gateway_error(request: Request, exc: PaymentGatewayError) -> JSONResponse:
    logger.error("Payment gateway failure", path=request.url.path, error=str(exc))
    return JSONResponse(status_code=502, content={"error": str(exc)})


def register_error_handlers(app: FastAPI) -> None:
    """Install Protean's default handlers, then pin the storefront's contract on top."""
    register_exception_handlers(app)
    app.add_exception_handler(ValidationError, _validation_error)
    app.add_exception_handler(RequestValidationError, _request_validation_error)
    app.add_exception_handler(ObjectNotFoundError, _not_found)
    app.add_exception_handler(InvalidStateError, _conflict)
    app.add_exception_handler(PaymentGatewayError, _payment_gateway_error)
