"""Simulator - owns the field and the roster and runs the step loop."""
from __future__ import annotations

import os
import random
from typing import Any, Callable

from tick_ecology.animal import Animal, SpeciesTraits
from tick_ecology.census import Census, census
from tick_ecology.chronicle import Chronicle
from tick_ecology.config import (
    DEFAULT_CHRONICLE_CAPACITY,
    DEFAULT_DEPTH,
    DEFAULT_WIDTH,
    PopulationConfig,
)
from tick_ecology.field import Field
from tick_ecology.species import SPECIES
from tick_ecology.types import Location, SnapshotError

_SNAPSHOT_VERSION = 1

StepHook = Callable[["Simulator"], None]


class Simulator:
    def __init__(
        self,
        depth: int = DEFAULT_DEPTH,
        width: int = DEFAULT_WIDTH,
        seed: int | None = None,
        rng: random.Random | None = None,
        population: PopulationConfig | None = None,
        chronicle_capacity: int = DEFAULT_CHRONICLE_CAPACITY,
    ) -> None:
        if seed is None:
            seed = int.from_bytes(os.urandom(8))
        self._seed = seed
        self._owns_rng = rng is None
        self._rng = rng if rng is not None else random.Random(seed)
        self._population = population if population is not None else PopulationConfig()
        for name in self._population.creation_probabilities:
            if name not in SPECIES:
                raise ValueError(f"Unknown species in population config: {name!r}")
        self._field = Field(depth, width, self._rng)
        self._animals: list[Animal] = []
        self._step = 0
        self._chronicle = Chronicle(chronicle_capacity)
        self._step_hooks: list[StepHook] = []

    @property
    def field(self) -> Field:
        return self._field

    @property
    def rng(self) -> random.Random:
        return self._rng

    @property
    def seed(self) -> int:
        return self._seed

    @property
    def step_number(self) -> int:
        return self._step

    @property
    def animals(self) -> list[Animal]:
        return list(self._animals)

    @property
    def chronicle(self) -> Chronicle:
        return self._chronicle

    def on_step(self, hook: StepHook) -> None:
        self._step_hooks.append(hook)

    def census(self) -> Census:
        return census(self._field)

    # -- Population --

    def spawn(
        self,
        species: type[Animal],
        location: Location,
        random_age: bool = False,
        traits: SpeciesTraits | None = None,
    ) -> Animal:
        animal = species(self._field, location, self._rng, random_age=random_age, traits=traits)
        self._animals.append(animal)
        return animal

    def populate(self) -> None:
        """Scan every cell and maybe create one animal there, with random age."""
        probabilities = list(self._population.creation_probabilities.items())
        for row in range(self._field.depth):
            for col in range(self._field.width):
                location = Location(row, col)
                if not self._field.is_free(location):
                    continue
                for name, p in probabilities:
                    if self._rng.random() <= p:
                        self.spawn(SPECIES[name], location, random_age=True)
                        break

    def reset(self) -> None:
        self._step = 0
        self._animals.clear()
        self._field.clear_all()
        self._chronicle.clear()
        if self._owns_rng:
            self._rng.seed(self._seed)
        self.populate()

    # -- Stepping --

    def step(self) -> None:
        self._step += 1
        acting = [a for a in self._animals if a.is_alive()]
        newborns: list[Animal] = []
        for animal in acting:
            # Eaten earlier in this sweep.
            if not animal.is_alive():
                continue
            animal.act(newborns)

        for young in newborns:
            self._chronicle.record_birth(self._step, young.traits.name)
        for animal in acting + newborns:
            cause = animal.cause_of_death
            if cause is not None:
                self._chronicle.record_death(self._step, animal.traits.name, cause)

        self._animals = [a for a in self._animals + newborns if a.is_alive()]

        for hook in self._step_hooks:
            hook(self)

    def run(self, n: int) -> None:
        """Step up to *n* times, stopping early once fewer than two species remain."""
        for _ in range(n):
            if not self.census().is_viable():
                break
            self.step()

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        return {
            "version": _SNAPSHOT_VERSION,
            "step": self._step,
            "depth": self._field.depth,
            "width": self._field.width,
            "seed": self._seed,
            "rng_state": _serialize_rng_state(self._rng.getstate()),
            "animals": [a.snapshot() for a in self._animals if a.is_alive()],
        }

    def restore(self, data: dict[str, Any]) -> None:
        version = data.get("version")
        if version != _SNAPSHOT_VERSION:
            raise SnapshotError(
                f"Unsupported snapshot version {version!r}, expected {_SNAPSHOT_VERSION}"
            )

        dims = (data.get("depth"), data.get("width"))
        if dims != (self._field.depth, self._field.width):
            raise SnapshotError(
                f"Field mismatch: snapshot is {dims[0]}x{dims[1]}, "
                f"simulator is {self._field.depth}x{self._field.width}"
            )

        for entry in data["animals"]:
            if entry["species"] not in SPECIES:
                raise SnapshotError(f"Unknown species: {entry['species']!r}")

        # Rebuild off to the side; nothing is replaced until every entry loads.
        field = Field(self._field.depth, self._field.width, self._rng)
        try:
            animals = [
                SPECIES[entry["species"]].from_snapshot(field, self._rng, entry)
                for entry in data["animals"]
            ]
            step = int(data["step"])
            seed = data["seed"]
            self._rng.setstate(_deserialize_rng_state(data["rng_state"]))
        except (KeyError, TypeError, ValueError) as exc:
            raise SnapshotError(f"Malformed snapshot: {exc}") from exc

        self._field = field
        self._animals = animals
        self._step = step
        self._seed = seed
        self._chronicle.clear()


def _serialize_rng_state(state: tuple[Any, ...]) -> list[Any]:
    """Convert Random.getstate() tuple to JSON-compatible list.

    The state format (version, internalstate, gauss_next) is the
    CPython Mersenne Twister representation.
    """
    version, internalstate, gauss_next = state
    return [version, list(internalstate), gauss_next]


def _deserialize_rng_state(data: list[Any]) -> tuple[Any, ...]:
    version, internalstate, gauss_next = data
    return (version, tuple(internalstate), gauss_next)
