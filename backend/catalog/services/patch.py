"""Partial-update payload that keeps "absent" apart from "present but null"."""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Mapping


class _Unset:
    """Marker for a field the caller did not send."""

    _instance: _Unset | None = None

    def __new__(cls) -> _Unset:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "UNSET"


UNSET: Any = _Unset()


@dataclass(frozen=True)
class ProductPatch:
    name: str | None | _Unset = UNSET
    description: str | None | _Unset = UNSET
    price: Decimal | None | _Unset = UNSET
    category: str | None | _Unset = UNSET
    stock: int | None | _Unset = UNSET

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> ProductPatch:
        """Build a patch from the keys actually present in ``data``.

        Unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        return cls(**{key: value for key, value in data.items() if key in known})

    def provided(self) -> dict[str, Any]:
        """Return only the fields the caller supplied, nulls included."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name) is not UNSET
        }

    def is_empty(self) -> bool:
        return not self.provided()
