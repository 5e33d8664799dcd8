"""Shared value types, protocols and errors for tick-ecology."""
from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

if TYPE_CHECKING:
    from tick_ecology.animal import Animal


@dataclass(frozen=True, slots=True, order=True)
class Location:
    row: int
    col: int

    def __str__(self) -> str:
        return f"{self.row},{self.col}"


class RandomSource(Protocol):
    """The subset of ``random.Random`` the simulation draws from."""

    def random(self) -> float: ...
    def randrange(self, stop: int) -> int: ...


class DeadAnimalError(KeyError):
    """Raised when reading the placement of an animal that is not alive."""

    def __init__(self, animal: Animal, message: str) -> None:
        self.animal = animal
        super().__init__(message)


class CellOccupiedError(ValueError):
    """Raised when an animal would be placed on a cell held by another live animal."""

    def __init__(self, location: Location, occupant: Any) -> None:
        self.location = location
        self.occupant = occupant
        super().__init__(f"Cell {location} is already occupied by {occupant!r}")


class SnapshotError(Exception):
    """Raised on restore failures (version mismatch, dimension mismatch, unknown species)."""
