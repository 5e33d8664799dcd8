"""Census - population counts per species, read off a field."""
from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from tick_ecology.field import Field


@dataclass(frozen=True)
class Census:
    counts: dict[str, int] = field(default_factory=dict)

    def count(self, species: str) -> int:
        return self.counts.get(species, 0)

    @property
    def total(self) -> int:
        return sum(self.counts.values())

    def is_viable(self) -> bool:
        """More than one species is still alive."""
        return sum(1 for n in self.counts.values() if n > 0) > 1

    def details(self) -> str:
        return "  ".join(f"{name}: {self.counts[name]}" for name in sorted(self.counts))


def census(field: Field) -> Census:
    counts: Counter[str] = Counter()
    for _, animal in field.occupants():
        if animal.is_alive():
            counts[animal.traits.name] += 1
    return Census(counts=dict(counts))
