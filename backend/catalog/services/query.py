"""Translate page descriptors into deterministic store queries."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Callable, Generic, TypeVar

from catalog.core.exceptions import FieldViolation, InvalidSortField, ProductValidationError
from catalog.db.models.product import Product
from catalog.services.filters import ProductFilter
from catalog.services.store import ProductStore, SortKey

T = TypeVar("T")
U = TypeVar("U")

SORTABLE_FIELDS = frozenset(
    {"name", "price", "category", "stock", "created_at", "updated_at"}
)
# camelCase spellings accepted from older clients
SORT_FIELD_ALIASES = {"createdAt": "created_at", "updatedAt": "updated_at"}

TIE_BREAKER = SortKey("id", "asc")


@dataclass(frozen=True)
class PageRequest:
    page: int = 0
    size: int = 10
    sort_by: str = "name"
    sort_dir: str = "asc"

    def __post_init__(self) -> None:
        errors = []
        if self.page < 0:
            errors.append(FieldViolation("page", "must be zero or greater"))
        if self.size < 1:
            errors.append(FieldViolation("size", "must be greater than zero"))
        if self.sort_dir.lower() not in ("asc", "desc"):
            errors.append(FieldViolation("sort_dir", "must be 'asc' or 'desc'"))
        if errors:
            raise ProductValidationError(errors)

    @property
    def offset(self) -> int:
        return self.page * self.size

    def sorted_by(self, sort_by: str, sort_dir: str = "asc") -> PageRequest:
        return PageRequest(self.page, self.size, sort_by, sort_dir)


@dataclass
class Page(Generic[T]):
    items: list[T]
    total: int
    page: int
    size: int
    total_pages: int = field(init=False)

    def __post_init__(self) -> None:
        self.total_pages = math.ceil(self.total / self.size) if self.total else 0

    def map(self, fn: Callable[[T], U]) -> Page[U]:
        return Page([fn(item) for item in self.items], self.total, self.page, self.size)


def resolve_sort(sort_by: str, sort_dir: str = "asc") -> tuple[SortKey, ...]:
    """Validate the sort field and append the ascending-id tie breaker."""
    field_name = SORT_FIELD_ALIASES.get(sort_by, sort_by)
    if field_name not in SORTABLE_FIELDS:
        raise InvalidSortField(sort_by, SORTABLE_FIELDS)
    direction = "desc" if sort_dir.lower() == "desc" else "asc"
    return (SortKey(field_name, direction), TIE_BREAKER)


def fetch_page(
    store: ProductStore,
    request: PageRequest,
    predicate: ProductFilter | None = None,
) -> Page[Product]:
    """Select the half-open range [page*size, page*size+size) of the sorted matches.

    Pages past the end come back empty with totals still populated.
    """
    sort = resolve_sort(request.sort_by, request.sort_dir)
    items, total = store.find_page(predicate, sort, request.offset, request.size)
    return Page(items=list(items), total=total, page=request.page, size=request.size)
