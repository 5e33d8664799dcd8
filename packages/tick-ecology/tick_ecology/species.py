"""Concrete species: rabbits are prey, foxes eat rabbits, bears eat both."""
from __future__ import annotations

from tick_ecology.animal import Animal, Predator, SpeciesTraits

RABBIT = SpeciesTraits(
    name="rabbit",
    breeding_age=5,
    max_age=40,
    breeding_probability=0.12,
    max_litter_size=4,
)

FOX = SpeciesTraits(
    name="fox",
    breeding_age=15,
    max_age=150,
    breeding_probability=0.08,
    max_litter_size=2,
    food_values={"rabbit": 9},
    max_food_level=18,
    initial_food_level=9,
)

# Food values are the number of steps a bear can go before it has to eat again.
BEAR = SpeciesTraits(
    name="bear",
    breeding_age=30,
    max_age=300,
    breeding_probability=0.05,
    max_litter_size=1,
    food_values={"fox": 5, "rabbit": 2},
    max_food_level=8,
    initial_food_level=5,
)


class Rabbit(Animal):
    default_traits = RABBIT

    def act(self, newborns: list[Animal]) -> None:
        if not self.is_alive():
            return
        self.increment_age()
        if not self.is_alive():
            return
        self.give_birth(newborns)
        new_location = self.field.free_adjacent_location(self.location)
        if new_location is not None:
            self.set_location(new_location)
        else:
            self.set_dead("overcrowding")


class Fox(Predator):
    default_traits = FOX


class Bear(Predator):
    default_traits = BEAR


SPECIES: dict[str, type[Animal]] = {
    RABBIT.name: Rabbit,
    FOX.name: Fox,
    BEAR.name: Bear,
}
