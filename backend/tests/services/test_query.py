"""Pagination and sort translation tests."""

from decimal import Decimal

import pytest

from catalog.core.exceptions import InvalidSortField, ProductValidationError
from catalog.services.filters import CategoryEquals
from catalog.services.query import Page, PageRequest, fetch_page, resolve_sort
from catalog.services.store import SortKey
from tests.fakes import make_product


@pytest.fixture
def seeded(service, store):
    names = ["Mug", "Anvil", "Mug", "Kite", "Bolt", "Mug", "Zither"]
    for i, name in enumerate(names):
        service.create_product(
            make_product(
                name=name,
                price=Decimal(10 + i),
                stock=i,
                category="Even" if i % 2 == 0 else "Odd",
            )
        )
    return store


class TestPageRequest:

    def test_offset(self):
        assert PageRequest(page=3, size=20).offset == 60

    @pytest.mark.parametrize(
        "kwargs, field",
        [
            ({"page": -1}, "page"),
            ({"size": 0}, "size"),
            ({"sort_dir": "sideways"}, "sort_dir"),
        ],
    )
    def test_rejects_bad_descriptor(self, kwargs, field):
        with pytest.raises(ProductValidationError) as exc_info:
            PageRequest(**kwargs)
        assert [e.field for e in exc_info.value.errors] == [field]

    def test_direction_is_case_insensitive(self):
        assert resolve_sort("price", "DESC")[0] == SortKey("price", "desc")


class TestResolveSort:

    def test_appends_id_tie_breaker(self):
        assert resolve_sort("stock", "desc") == (
            SortKey("stock", "desc"),
            SortKey("id", "asc"),
        )

    def test_accepts_camel_case_timestamps(self):
        assert resolve_sort("createdAt")[0] == SortKey("created_at", "asc")

    def test_unknown_field(self):
        with pytest.raises(InvalidSortField):
            resolve_sort("description")


class TestPage:

    def test_total_pages_rounds_up(self):
        assert Page(items=[], total=7, page=0, size=3).total_pages == 3

    def test_total_pages_zero_when_empty(self):
        assert Page(items=[], total=0, page=0, size=10).total_pages == 0


class TestFetchPage:

    def test_pages_partition_the_collection(self, seeded):
        everything = fetch_page(seeded, PageRequest(size=100)).items
        first = fetch_page(seeded, PageRequest(page=0, size=3))

        collected = []
        for page in range(first.total_pages):
            result = fetch_page(seeded, PageRequest(page=page, size=3))
            assert len(result.items) <= 3
            collected.extend(p.id for p in result.items)

        assert collected == [p.id for p in everything]
        assert len(set(collected)) == len(collected) == 7

    def test_page_past_the_end_is_empty(self, seeded):
        result = fetch_page(seeded, PageRequest(page=5, size=3))
        assert result.items == []
        assert result.total == 7
        assert result.total_pages == 3

    def test_ties_break_on_ascending_id(self, seeded):
        for direction in ("asc", "desc"):
            result = fetch_page(
                seeded, PageRequest(size=100, sort_by="name", sort_dir=direction)
            )
            mug_ids = [p.id for p in result.items if p.name == "Mug"]
            assert mug_ids == sorted(mug_ids)

    def test_descending_sort(self, seeded):
        result = fetch_page(seeded, PageRequest(size=100, sort_by="price", sort_dir="desc"))
        prices = [p.price for p in result.items]
        assert prices == sorted(prices, reverse=True)

    def test_repeated_calls_are_stable(self, seeded):
        request = PageRequest(page=1, size=2, sort_by="name")
        first = [p.id for p in fetch_page(seeded, request).items]
        second = [p.id for p in fetch_page(seeded, request).items]
        assert first == second

    def test_predicate_applies_before_pagination(self, seeded):
        result = fetch_page(seeded, PageRequest(size=2), CategoryEquals("odd"))
        assert result.total == 3
        assert result.total_pages == 2
        assert all(p.category == "Odd" for p in result.items)
