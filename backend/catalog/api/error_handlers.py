"""Map catalog errors onto HTTP responses."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

from catalog.core.exceptions import InvalidSortField, ProductValidationError, StoreFailure

logger = logging.getLogger(__name__)


def register_error_handlers(app: FastAPI) -> None:
    """Register catalog error handlers on the FastAPI app."""

    @app.exception_handler(ProductValidationError)
    async def product_validation_handler(
        request: Request, exc: ProductValidationError
    ) -> JSONResponse:
        logger.warning(f"Validation error on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "detail": "Invalid product data",
                "errors": [e.as_dict() for e in exc.errors],
            },
        )

    @app.exception_handler(InvalidSortField)
    async def invalid_sort_handler(
        request: Request, exc: InvalidSortField
    ) -> JSONResponse:
        logger.warning(f"Invalid sort field on {request.url.path}: {exc.field}")
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"detail": str(exc), "allowed": exc.allowed},
        )

    @app.exception_handler(StoreFailure)
    async def store_failure_handler(request: Request, exc: StoreFailure) -> JSONResponse:
        # The store already logged the underlying driver error with its traceback
        logger.error(f"Store failure on {request.url.path}: {exc}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "A database error occurred"},
        )
