"""
Error translation for the billing API.

Every failure leaves the API as an ``ErrorResponse`` body carrying a
machine-readable ``error_code``, a message and a recovery hint.
"""

import re
from collections.abc import Awaitable, Callable

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import Response

from src.application.dto.responses import ErrorResponse
from src.config import get_logger
from src.core.exceptions import (
    BillingError,
    ClientNotFoundError,
    DuplicateDocumentNumberError,
    InvoiceNotFoundError,
    PaymentNotFoundError,
    QuotationNotFoundError,
    SequenceError,
    SequenceNotFoundError,
    ValidationError,
)

logger = get_logger(__name__)

# Checked in order, so subclasses precede their bases
EXCEPTION_STATUS_MAP: dict[type[Exception], int] = {
    InvoiceNotFoundError: status.HTTP_404_NOT_FOUND,
    QuotationNotFoundError: status.HTTP_404_NOT_FOUND,
    PaymentNotFoundError: status.HTTP_404_NOT_FOUND,
    ClientNotFoundError: status.HTTP_404_NOT_FOUND,
    SequenceNotFoundError: status.HTTP_404_NOT_FOUND,
    DuplicateDocumentNumberError: status.HTTP_409_CONFLICT,
    ValidationError: status.HTTP_400_BAD_REQUEST,
    SequenceError: status.HTTP_503_SERVICE_UNAVAILABLE,
}

HINTS: dict[str, str] = {
    "INVOICE_NOT_FOUND": "List invoices with GET /api/invoices.",
    "QUOTATION_NOT_FOUND": "List quotations with GET /api/quotations.",
    "PAYMENT_NOT_FOUND": "List payments with GET /api/payments.",
    "CLIENT_NOT_FOUND": "List clients with GET /api/clients.",
    "SEQUENCE_NOT_FOUND": "The region has no invoice numbering. Apply migrations.",
    "SEQUENCE_ISSUE_FAILED": "No invoice number was consumed. Retry the request.",
    "DUPLICATE_DOCUMENT_NUMBER": "Use a document number that is not taken.",
    "INVALID_LINE_ITEM": "Check item serial numbers and sub-item parents.",
    "INVALID_PAYMENT": "Payment amounts must be greater than zero.",
    "VALIDATION_ERROR": "Compare the request body with the API schema.",
}

FALLBACK_HINTS: dict[int, str] = {
    400: "Check the request parameters and body.",
    404: "Verify the ID in the URL.",
    409: "The request conflicts with stored data.",
    500: "See the server log for this request ID.",
    503: "Retry later.",
}


def _hint(error_code: str, status_code: int) -> str | None:
    return HINTS.get(error_code) or FALLBACK_HINTS.get(status_code)


def _body(request: Request, status_code: int, **fields) -> JSONResponse:
    payload = ErrorResponse(path=request.url.path, **fields)
    return JSONResponse(status_code=status_code, content=payload.model_dump(mode="json"))


def status_for(exc: Exception) -> int:
    for exc_type, code in EXCEPTION_STATUS_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_500_INTERNAL_SERVER_ERROR


def error_json(request: Request, exc: Exception) -> JSONResponse:
    """Render any exception as an ``ErrorResponse``; unknown types become 500."""
    status_code = status_for(exc)
    if isinstance(exc, BillingError):
        error_code, message = exc.code, exc.message
    else:
        error_code, message = "INTERNAL_ERROR", "Internal server error"

    fields = {
        "request_id": getattr(request.state, "request_id", None),
        "path": request.url.path,
        "error_code": error_code,
    }
    if status_code >= 500:
        logger.exception("request_failed", **fields)
    else:
        logger.warning("request_rejected", message=message, **fields)

    return _body(
        request,
        status_code,
        error_code=error_code,
        message=message,
        hint=_hint(error_code, status_code),
    )


class ErrorHandlerMiddleware(BaseHTTPMiddleware):
    """Last line of defence for exceptions raised outside route handlers."""

    async def dispatch(
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        try:
            return await call_next(request)
        except Exception as e:
            return error_json(request, e)


def _http_error_code(exc: HTTPException) -> str:
    # "Invoice not found: 7" -> INVOICE_NOT_FOUND
    if exc.status_code == status.HTTP_404_NOT_FOUND and isinstance(exc.detail, str):
        subject = exc.detail.split(":", 1)[0].strip()
        if subject:
            return re.sub(r"\W+", "_", subject).upper()
    return f"HTTP_{exc.status_code}"


def setup_exception_handlers(app: FastAPI) -> None:
    """Register handlers for domain, validation and HTTP errors."""

    @app.exception_handler(BillingError)
    async def handle_billing_error(request: Request, exc: BillingError) -> JSONResponse:
        return error_json(request, exc)

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        problems = [
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in exc.errors()
        ]
        return _body(
            request,
            422,
            error_code="VALIDATION_ERROR",
            message="Request validation failed",
            hint=HINTS["VALIDATION_ERROR"],
            detail="; ".join(problems),
        )

    @app.exception_handler(HTTPException)
    async def handle_http_error(request: Request, exc: HTTPException) -> JSONResponse:
        error_code = _http_error_code(exc)
        return _body(
            request,
            exc.status_code,
            error_code=error_code,
            message=str(exc.detail),
            hint=_hint(error_code, exc.status_code),
        )
