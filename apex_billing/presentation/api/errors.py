"""Maps billing errors to HTTP responses."""

from __future__ import annotations

import logging
from typing import Dict, Type

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from ...domain.errors import (
    BillingError,
    ClientNotFound,
    InvalidTier,
    NoActiveSubscription,
    ProviderError,
    SignatureInvalid,
    StoreError,
    Unauthenticated,
    WebhookProcessingError,
)

logger = logging.getLogger(__name__)

STATUS_CODES: Dict[Type[BillingError], int] = {
    Unauthenticated: status.HTTP_401_UNAUTHORIZED,
    ClientNotFound: status.HTTP_404_NOT_FOUND,
    InvalidTier: status.HTTP_400_BAD_REQUEST,
    NoActiveSubscription: status.HTTP_404_NOT_FOUND,
    SignatureInvalid: status.HTTP_400_BAD_REQUEST,
    WebhookProcessingError: status.HTTP_400_BAD_REQUEST,
    ProviderError: status.HTTP_500_INTERNAL_SERVER_ERROR,
    StoreError: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def status_code_for(exc: BillingError) -> int:
    for cls in type(exc).__mro__:
        if cls in STATUS_CODES:
            return STATUS_CODES[cls]
    return status.HTTP_500_INTERNAL_SERVER_ERROR


async def billing_error_handler(request: Request, exc: BillingError) -> JSONResponse:
    status_code = status_code_for(exc)
    if status_code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": exc.code, "message": exc.message}},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(BillingError, billing_error_handler)
