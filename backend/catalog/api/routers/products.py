"""CRUD, search and aggregate endpoints for the product catalog.

Catalog errors (validation, bad sort field, store failure) are mapped to
responses by the handlers in ``catalog.api.error_handlers``; routes only
turn missing products into 404s.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status

from catalog.api.dependencies.db import get_product_service
from catalog.api.schemas.product import (
    CategoryCount,
    ProductCreate,
    ProductPageResponse,
    ProductRead,
    ProductUpdate,
)
from catalog.core.config import Settings, get_settings
from catalog.services.product_service import ProductService
from catalog.services.query import Page, PageRequest
from catalog.services.records import ProductRecord

logger = logging.getLogger(__name__)

router = APIRouter()


def page_params(
    page: int = Query(0, ge=0, description="Page number (0-indexed)"),
    size: int | None = Query(None, ge=1, description="Items per page"),
    settings: Settings = Depends(get_settings),
) -> PageRequest:
    """Page descriptor without sorting; sizes above the configured maximum are capped."""
    size = min(size or settings.default_page_size, settings.max_page_size)
    return PageRequest(page=page, size=size)


def sorted_page_params(
    base: PageRequest = Depends(page_params),
    sort_by: str = Query("name", description="Field to sort by"),
    sort_dir: str = Query("asc", description="asc or desc"),
) -> PageRequest:
    return base.sorted_by(sort_by, sort_dir)


def to_response(result: Page[ProductRecord]) -> ProductPageResponse:
    return ProductPageResponse(
        items=[ProductRead.model_validate(p) for p in result.items],
        total=result.total,
        page=result.page,
        size=result.size,
        total_pages=result.total_pages,
    )


@router.get(
    "/",
    summary="List products with sorting and pagination",
    response_model=ProductPageResponse,
)
def list_products(
    request: PageRequest = Depends(sorted_page_params),
    service: ProductService = Depends(get_product_service),
) -> ProductPageResponse:
    """Return one page of the whole catalog.

    Equal sort values are ordered by ascending id, so repeated calls are stable.
    """
    return to_response(service.list_products(request))


@router.get(
    "/search",
    summary="Search products by name or description",
    response_model=ProductPageResponse,
)
def search_products(
    q: str = Query(..., description="Case-insensitive search term"),
    request: PageRequest = Depends(page_params),
    service: ProductService = Depends(get_product_service),
) -> ProductPageResponse:
    """Results are always ordered by name."""
    return to_response(service.search_products(q, request))


@router.get(
    "/categories",
    summary="List distinct categories",
    response_model=list[str],
)
def list_categories(
    service: ProductService = Depends(get_product_service),
) -> list[str]:
    """Return every non-null category once, in ascending order."""
    return service.list_categories()


@router.get(
    "/category/{category}",
    summary="List products in a category",
    response_model=ProductPageResponse,
)
def products_by_category(
    category: str,
    request: PageRequest = Depends(page_params),
    service: ProductService = Depends(get_product_service),
) -> ProductPageResponse:
    """Category match is case-insensitive; results are ordered by name."""
    return to_response(service.products_by_category(category, request))


@router.get(
    "/category/{category}/count",
    summary="Count products in a category",
    response_model=CategoryCount,
)
def count_by_category(
    category: str,
    service: ProductService = Depends(get_product_service),
) -> CategoryCount:
    """Count products whose category matches, ignoring case."""
    return CategoryCount(category=category, count=service.count_by_category(category))


@router.get(
    "/low-stock",
    summary="List products at or below a stock threshold",
    response_model=list[ProductRead],
)
def low_stock_products(
    threshold: int | None = Query(None, description="Defaults to the configured threshold"),
    service: ProductService = Depends(get_product_service),
) -> list[ProductRead]:
    """Unpaginated list of products with stock <= threshold, in id order."""
    return [ProductRead.model_validate(p) for p in service.low_stock_products(threshold)]


@router.get(
    "/price-range",
    summary="List products within an inclusive price range",
    response_model=ProductPageResponse,
)
def products_by_price_range(
    min_price: Decimal = Query(..., ge=0),
    max_price: Decimal = Query(..., ge=0),
    request: PageRequest = Depends(sorted_page_params),
    service: ProductService = Depends(get_product_service),
) -> ProductPageResponse:
    """Both bounds are inclusive; an inverted range is a 400."""
    return to_response(service.products_by_price_range(min_price, max_price, request))


@router.get(
    "/{product_id}",
    summary="Get a single product",
    response_model=ProductRead,
)
def get_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Return the product or 404 when the id is unknown."""
    product = service.get_product(product_id)
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductRead.model_validate(product)


@router.post(
    "/",
    summary="Create a product",
    status_code=status.HTTP_201_CREATED,
    response_model=ProductRead,
)
def create_product(
    payload: ProductCreate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Persist a new product; the id and both timestamps are server-assigned.

    Every violated field is reported in a single 400 response.
    """
    product = service.create_product(payload.model_dump())
    return ProductRead.model_validate(product)


@router.api_route(
    "/{product_id}",
    methods=["PUT", "PATCH"],
    summary="Update existing product",
    response_model=ProductRead,
)
def update_product(
    product_id: int,
    payload: ProductUpdate,
    service: ProductService = Depends(get_product_service),
) -> ProductRead:
    """Partial update: only fields present in the body are changed.

    Sending ``null`` clears description or category; it is rejected for
    name, price and stock.
    """
    product = service.update_product(product_id, payload.to_patch())
    if product is None:
        raise HTTPException(status_code=404, detail="Product not found")
    return ProductRead.model_validate(product)


@router.delete(
    "/{product_id}",
    summary="Delete product",
)
def delete_product(
    product_id: int,
    service: ProductService = Depends(get_product_service),
) -> Response:
    """Hard delete; a second delete of the same id is a 404."""
    if not service.delete_product(product_id):
        raise HTTPException(status_code=404, detail="Product not found")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
