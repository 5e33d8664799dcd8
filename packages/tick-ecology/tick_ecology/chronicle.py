from __future__ import annotations

from collections import Counter, deque
from dataclasses import dataclass


@dataclass
class LifeEvent:
    step: int
    kind: str  # "birth" or "death"
    species: str
    cause: str | None = None


class Chronicle:
    """Recent births and deaths, plus running totals over everything recorded.

    ``query`` only sees the retained window; ``totals`` and ``causes`` count
    every event since the last ``clear``.
    """

    def __init__(self, max_entries: int = 0) -> None:
        maxlen = max_entries if max_entries > 0 else None
        self._events: deque[LifeEvent] = deque(maxlen=maxlen)
        self._births: Counter[str] = Counter()
        self._deaths: Counter[str] = Counter()
        self._causes: Counter[str] = Counter()

    def record_birth(self, step: int, species: str) -> None:
        self._events.append(LifeEvent(step=step, kind="birth", species=species))
        self._births[species] += 1

    def record_death(self, step: int, species: str, cause: str) -> None:
        self._events.append(LifeEvent(step=step, kind="death", species=species, cause=cause))
        self._deaths[species] += 1
        self._causes[cause] += 1

    def query(self, kind: str | None = None, species: str | None = None,
              cause: str | None = None, after: int | None = None,
              before: int | None = None) -> list[LifeEvent]:
        result: list[LifeEvent] = list(self._events)
        if kind is not None:
            result = [e for e in result if e.kind == kind]
        if species is not None:
            result = [e for e in result if e.species == species]
        if cause is not None:
            result = [e for e in result if e.cause == cause]
        if after is not None:
            result = [e for e in result if e.step > after]
        if before is not None:
            result = [e for e in result if e.step < before]
        return result

    def totals(self, kind: str) -> dict[str, int]:
        if kind == "birth":
            return dict(self._births)
        if kind == "death":
            return dict(self._deaths)
        raise ValueError(f"Unknown event kind: {kind!r}")

    def causes(self) -> dict[str, int]:
        return dict(self._causes)

    def clear(self) -> None:
        self._events.clear()
        self._births.clear()
        self._deaths.clear()
        self._causes.clear()

    def __len__(self) -> int:
        return len(self._events)
