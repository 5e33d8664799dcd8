"""Animal - shared life-cycle state machine for every species.

An animal is either ``Alive`` (and then has a field and a location) or
``Dead`` (and then only remembers why). Species differ by their
``SpeciesTraits`` table and by ``act``.
"""
from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, ClassVar, Union, cast

from tick_ecology.field import Field
from tick_ecology.types import CellOccupiedError, DeadAnimalError, Location, RandomSource


@dataclass(frozen=True)
class SpeciesTraits:
    name: str
    breeding_age: int
    max_age: int
    breeding_probability: float
    max_litter_size: int
    # Prey species name -> food value gained by eating one.
    food_values: dict[str, int] = dataclasses.field(default_factory=dict)
    max_food_level: int = 0
    initial_food_level: int = 0


@dataclass(frozen=True, slots=True)
class Alive:
    field: Field
    location: Location


@dataclass(frozen=True, slots=True)
class Dead:
    cause: str  # "old_age", "starvation", "overcrowding" or "eaten"


LifeState = Union[Alive, Dead]


class Animal:
    default_traits: ClassVar[SpeciesTraits]

    def __init__(
        self,
        field: Field,
        location: Location,
        rng: RandomSource,
        random_age: bool = False,
        traits: SpeciesTraits | None = None,
    ) -> None:
        self.traits = traits if traits is not None else type(self).default_traits
        self.rng = rng
        self.age = rng.randrange(self.traits.max_age) if random_age else 0
        occupant = field.occupant_at(location)
        if occupant is not None and occupant.is_alive():
            raise CellOccupiedError(location, occupant)
        field.place(self, location)
        self._state: LifeState = Alive(field, location)

    def __repr__(self) -> str:
        if isinstance(self._state, Alive):
            where = f"at {self._state.location}"
        else:
            where = f"dead ({self._state.cause})"
        return f"<{type(self).__name__} age={self.age} {where}>"

    @property
    def state(self) -> LifeState:
        return self._state

    def is_alive(self) -> bool:
        return isinstance(self._state, Alive)

    @property
    def location(self) -> Location:
        if not isinstance(self._state, Alive):
            raise DeadAnimalError(self, f"{self!r} has no location")
        return self._state.location

    @property
    def field(self) -> Field:
        if not isinstance(self._state, Alive):
            raise DeadAnimalError(self, f"{self!r} is no longer in a field")
        return self._state.field

    @property
    def cause_of_death(self) -> str | None:
        if isinstance(self._state, Dead):
            return self._state.cause
        return None

    def act(self, newborns: list[Animal]) -> None:
        """Run one step of this animal's behaviour, appending any young to *newborns*.

        Each species overrides this.
        """
        raise NotImplementedError

    # -- Life cycle --

    def set_location(self, new_location: Location) -> None:
        """Move to *new_location*, which must be free or already ours."""
        field = self.field
        occupant = field.occupant_at(new_location)
        if occupant is not None and occupant is not self and occupant.is_alive():
            raise CellOccupiedError(new_location, occupant)
        field.clear(self.location)
        field.place(self, new_location)
        self._state = Alive(field, new_location)

    def set_dead(self, cause: str) -> None:
        state = self._state
        if not isinstance(state, Alive):
            return
        if state.field.occupant_at(state.location) is self:
            state.field.clear(state.location)
        self._state = Dead(cause)

    def increment_age(self) -> None:
        self.age += 1
        if self.age > self.traits.max_age:
            self.set_dead("old_age")

    def can_breed(self) -> bool:
        return self.age >= self.traits.breeding_age

    def breed(self) -> int:
        """Return the litter size for this step.

        Each of ``max_litter_size`` potential young is born independently
        with ``breeding_probability``.
        """
        if not self.can_breed():
            return 0
        p = self.traits.breeding_probability
        return sum(1 for _ in range(self.traits.max_litter_size) if self.rng.random() < p)

    def give_birth(self, newborns: list[Animal]) -> None:
        field = self.field
        free = field.free_adjacent_locations(self.location)
        births = self.breed()
        # Young that find no free cell are not born.
        for loc in free[:births]:
            newborns.append(self.make_young(field, loc))

    def make_young(self, field: Field, location: Location) -> Animal:
        return type(self)(field, location, self.rng, traits=self.traits)

    # -- Snapshot / restore --

    def snapshot(self) -> dict[str, Any]:
        loc = self.location
        return {
            "species": self.traits.name,
            "traits": dataclasses.asdict(self.traits),
            "age": self.age,
            "location": [loc.row, loc.col],
        }

    @classmethod
    def from_snapshot(
        cls, field: Field, rng: RandomSource, data: dict[str, Any]
    ) -> Animal:
        row, col = data["location"]
        animal = cls(field, Location(row, col), rng, traits=SpeciesTraits(**data["traits"]))
        animal.age = data["age"]
        return animal


class Predator(Animal):
    """An animal that starves unless it eats the species named in its ``food_values``."""

    def __init__(
        self,
        field: Field,
        location: Location,
        rng: RandomSource,
        random_age: bool = False,
        traits: SpeciesTraits | None = None,
    ) -> None:
        super().__init__(field, location, rng, random_age=random_age, traits=traits)
        if random_age:
            self.food_level = rng.randrange(max(self.traits.initial_food_level, 1))
        else:
            self.food_level = self.traits.initial_food_level

    def __repr__(self) -> str:
        return super().__repr__()[:-1] + f" food={self.food_level}>"

    def act(self, newborns: list[Animal]) -> None:
        if not self.is_alive():
            return
        self.increment_age()
        self.increment_hunger()
        if not self.is_alive():
            return
        self.give_birth(newborns)
        new_location = self.find_food()
        if new_location is None:
            new_location = self.field.free_adjacent_location(self.location)
        if new_location is not None:
            self.set_location(new_location)
        else:
            self.set_dead("overcrowding")

    def increment_hunger(self) -> None:
        if not self.is_alive():
            return
        self.food_level -= 1
        if self.food_level <= 0:
            self.set_dead("starvation")

    def feed(self, value: int) -> None:
        self.food_level = min(self.food_level + value, self.traits.max_food_level)

    def find_food(self) -> Location | None:
        """Eat the first live edible neighbour and return its cell, or None.

        Neighbours are scanned in the field's fixed order, without rotation.
        """
        field = self.field
        for where in field.adjacent_locations(self.location, rotate=False):
            prey = field.occupant_at(where)
            if prey is None or not prey.is_alive():
                continue
            value = self.traits.food_values.get(prey.traits.name)
            if value is None:
                continue
            prey.set_dead("eaten")
            self.feed(value)
            return where
        return None

    def snapshot(self) -> dict[str, Any]:
        data = super().snapshot()
        data["food_level"] = self.food_level
        return data

    @classmethod
    def from_snapshot(
        cls, field: Field, rng: RandomSource, data: dict[str, Any]
    ) -> Animal:
        animal = cast(Predator, super().from_snapshot(field, rng, data))
        animal.food_level = data["food_level"]
        return animal
