"""Field - fixed-size grid holding at most one animal per cell."""
from __future__ import annotations

from typing import TYPE_CHECKING

from tick_ecology.types import Location, RandomSource

if TYPE_CHECKING:
    from tick_ecology.animal import Animal

# Row/col deltas, in the order neighbours are enumerated.
_DIRS = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)


class Field:
    def __init__(self, depth: int, width: int, rng: RandomSource | None = None) -> None:
        if depth <= 0 or width <= 0:
            raise ValueError(f"Field dimensions must be positive, got {depth}x{width}")
        self._depth = depth
        self._width = width
        self._rng = rng
        self._cells: dict[Location, Animal] = {}

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def width(self) -> int:
        return self._width

    def in_bounds(self, location: Location) -> bool:
        return 0 <= location.row < self._depth and 0 <= location.col < self._width

    def _check_bounds(self, location: Location) -> None:
        if not self.in_bounds(location):
            raise ValueError(
                f"({location.row}, {location.col}) out of bounds for "
                f"{self._depth}x{self._width} field"
            )

    def place(self, animal: Animal, location: Location) -> None:
        """Record *animal* at *location*, replacing whatever was recorded there.

        Moving animals must clear their previous cell first; the field does
        not track where an animal used to be.
        """
        self._check_bounds(location)
        self._cells[location] = animal

    def clear(self, location: Location) -> None:
        self._cells.pop(location, None)

    def clear_all(self) -> None:
        self._cells.clear()

    def occupant_at(self, location: Location) -> Animal | None:
        return self._cells.get(location)

    def is_free(self, location: Location) -> bool:
        return location not in self._cells

    def occupants(self) -> list[tuple[Location, Animal]]:
        return sorted(self._cells.items(), key=lambda item: item[0])

    def adjacent_locations(self, location: Location, rotate: bool = True) -> list[Location]:
        """Return the in-bounds neighbours of *location*.

        Neighbours keep a fixed relative order. When the field was given a
        random source and *rotate* is true, the sequence starts at a random
        offset into that order so repeated scans do not favour one direction.
        Borders clip; the grid does not wrap.
        """
        result: list[Location] = []
        for dr, dc in _DIRS:
            r, c = location.row + dr, location.col + dc
            if 0 <= r < self._depth and 0 <= c < self._width:
                result.append(Location(r, c))
        if rotate and self._rng is not None and len(result) > 1:
            offset = self._rng.randrange(len(result))
            result = result[offset:] + result[:offset]
        return result

    def free_adjacent_locations(self, location: Location) -> list[Location]:
        return [loc for loc in self.adjacent_locations(location) if loc not in self._cells]

    def free_adjacent_location(self, location: Location) -> Location | None:
        free = self.free_adjacent_locations(location)
        return free[0] if free else None

    def __len__(self) -> int:
        return len(self._cells)
