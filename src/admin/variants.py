"""
Draft-side colour variant list for the admin product form.

Every operation returns a new VariantStore; entries are never mutated in
place and out-of-range indexes are ignored.
"""

from dataclasses import dataclass, replace
from typing import Iterable

from src.catalog.models import ColorVariant

DEFAULT_COLOR_CODE = "#000000"

EDITABLE_FIELDS = ("color_name", "color_code")


@dataclass(frozen=True)
class VariantEntry:
    """One colour row in the form."""

    color_name: str = ""
    color_code: str = DEFAULT_COLOR_CODE

    def to_record(self, product_id: str) -> dict:
        """Store record for ``product_colors``."""
        return {
            "product_id": product_id,
            "color_name": self.color_name,
            "color_code": self.color_code,
        }


@dataclass(frozen=True)
class VariantStore:
    """Immutable, ordered list of colour entries."""

    entries: tuple[VariantEntry, ...] = ()

    @classmethod
    def from_variants(cls, variants: Iterable[ColorVariant]) -> "VariantStore":
        return cls(
            tuple(VariantEntry(v.color_name, v.color_code) for v in variants)
        )

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self):
        return iter(self.entries)

    def __getitem__(self, index: int) -> VariantEntry:
        return self.entries[index]

    def add(self) -> "VariantStore":
        """Append a blank entry."""
        return VariantStore(self.entries + (VariantEntry(),))

    def remove_at(self, index: int) -> "VariantStore":
        """Drop the entry at ``index``; no-op when out of range."""
        if not 0 <= index < len(self.entries):
            return self
        return VariantStore(self.entries[:index] + self.entries[index + 1 :])

    def set_field(self, index: int, field: str, value: str) -> "VariantStore":
        """Replace one field of one entry; no-op when out of range."""
        if field not in EDITABLE_FIELDS:
            raise ValueError(f"Unknown variant field: {field}")
        if not 0 <= index < len(self.entries):
            return self
        updated = replace(self.entries[index], **{field: value})
        return VariantStore(
            self.entries[:index] + (updated,) + self.entries[index + 1 :]
        )

    def to_records(self, product_id: str) -> list[dict]:
        return [e.to_record(product_id) for e in self.entries]
