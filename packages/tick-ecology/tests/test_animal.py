"""Tests for the shared animal life cycle: aging, death, relocation and breeding."""

import dataclasses
import random

import pytest
from tick_ecology import (
    Alive,
    CellOccupiedError,
    Dead,
    DeadAnimalError,
    Field,
    Fox,
    FOX,
    Location,
    Rabbit,
    RABBIT,
)

STILL_RABBIT = dataclasses.replace(RABBIT, breeding_probability=0.0)
FERTILE_RABBIT = dataclasses.replace(
    RABBIT, breeding_age=0, breeding_probability=1.0, max_litter_size=3,
)


class TestLocation:
    def test_equality_and_hash_by_value(self):
        assert Location(2, 3) == Location(2, 3)
        assert Location(2, 3) != Location(3, 2)
        assert len({Location(1, 1), Location(1, 1)}) == 1

    def test_ordering_is_row_major(self):
        assert Location(0, 9) < Location(1, 0)
        assert Location(1, 0) < Location(1, 1)

    def test_immutable(self):
        loc = Location(1, 1)
        with pytest.raises(dataclasses.FrozenInstanceError):
            loc.row = 4  # type: ignore[misc]


class TestConstruction:
    def test_newborn_starts_at_age_zero(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))

        assert rabbit.age == 0
        assert rabbit.is_alive()
        assert rabbit.location == Location(1, 1)
        assert rabbit.field is field
        assert rabbit.traits is RABBIT
        assert field.occupant_at(Location(1, 1)) is rabbit

    def test_random_age_is_below_max_age(self):
        field = Field(depth=10, width=10)
        rng = random.Random(5)
        ages = [
            Rabbit(field, Location(r, c), rng, random_age=True).age
            for r in range(10) for c in range(10)
        ]
        assert all(0 <= age < RABBIT.max_age for age in ages)
        assert len(set(ages)) > 1

    def test_constructing_onto_live_occupant_raises(self):
        field = Field(depth=3, width=3)
        Rabbit(field, Location(0, 0), random.Random(1))

        with pytest.raises(CellOccupiedError):
            Rabbit(field, Location(0, 0), random.Random(1))

    def test_newborn_predator_has_initial_food(self):
        field = Field(depth=3, width=3)
        fox = Fox(field, Location(0, 0), random.Random(1))
        assert fox.food_level == FOX.initial_food_level

    def test_random_predator_food_below_initial(self):
        field = Field(depth=6, width=6)
        rng = random.Random(9)
        foods = [
            Fox(field, Location(r, c), rng, random_age=True).food_level
            for r in range(6) for c in range(6)
        ]
        assert all(0 <= f < FOX.initial_food_level for f in foods)


class TestAging:
    def test_survives_reaching_max_age(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        rabbit.age = RABBIT.max_age - 1

        rabbit.increment_age()

        assert rabbit.age == RABBIT.max_age
        assert rabbit.is_alive()

    def test_dies_when_exceeding_max_age(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        rabbit.age = RABBIT.max_age

        rabbit.increment_age()

        assert not rabbit.is_alive()
        assert rabbit.cause_of_death == "old_age"
        assert field.occupant_at(Location(1, 1)) is None


class TestDeath:
    def test_dead_state_is_explicit(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        assert isinstance(rabbit.state, Alive)

        rabbit.set_dead("eaten")

        assert rabbit.state == Dead("eaten")
        assert rabbit.cause_of_death == "eaten"

    def test_dead_animal_has_no_location_or_field(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        rabbit.set_dead("overcrowding")

        with pytest.raises(DeadAnimalError):
            rabbit.location
        with pytest.raises(DeadAnimalError):
            rabbit.field

    def test_dead_animal_error_is_key_error(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        rabbit.set_dead("eaten")

        with pytest.raises(KeyError) as excinfo:
            rabbit.location
        assert excinfo.value.animal is rabbit

    def test_set_dead_twice_keeps_first_cause(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))

        rabbit.set_dead("eaten")
        rabbit.set_dead("old_age")

        assert rabbit.cause_of_death == "eaten"

    def test_set_dead_does_not_clear_someone_elses_cell(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        other = Rabbit(field, Location(0, 0), random.Random(1))
        field.place(other, Location(1, 1))

        rabbit.set_dead("eaten")

        assert field.occupant_at(Location(1, 1)) is other

    def test_dead_animal_act_is_noop(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        rabbit.set_dead("eaten")
        newborns = []

        rabbit.act(newborns)

        assert newborns == []
        assert len(field) == 0


class TestRelocation:
    def test_set_location_moves_occupancy(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))

        rabbit.set_location(Location(0, 2))

        assert rabbit.location == Location(0, 2)
        assert field.occupant_at(Location(0, 2)) is rabbit
        assert field.occupant_at(Location(1, 1)) is None
        assert len(field) == 1

    def test_set_location_onto_live_animal_raises(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        Rabbit(field, Location(0, 0), random.Random(1))

        with pytest.raises(CellOccupiedError):
            rabbit.set_location(Location(0, 0))
        assert rabbit.location == Location(1, 1)

    def test_cell_occupied_error_is_value_error(self):
        assert issubclass(CellOccupiedError, ValueError)

    def test_set_location_on_dead_animal_raises(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        rabbit.set_dead("eaten")

        with pytest.raises(DeadAnimalError):
            rabbit.set_location(Location(0, 0))


class TestBreeding:
    def test_cannot_breed_below_breeding_age(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        rabbit.age = RABBIT.breeding_age - 1

        assert not rabbit.can_breed()
        assert rabbit.breed() == 0

    def test_can_breed_at_breeding_age(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1))
        rabbit.age = RABBIT.breeding_age
        assert rabbit.can_breed()

    def test_certain_breeding_yields_full_litter(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1), traits=FERTILE_RABBIT)
        assert rabbit.breed() == 3

    def test_zero_probability_yields_nothing(self):
        field = Field(depth=3, width=3)
        traits = dataclasses.replace(FERTILE_RABBIT, breeding_probability=0.0)
        rabbit = Rabbit(field, Location(1, 1), random.Random(1), traits=traits)
        assert all(rabbit.breed() == 0 for _ in range(50))

    def test_litter_is_independent_trials(self):
        field = Field(depth=3, width=3)
        traits = dataclasses.replace(FERTILE_RABBIT, breeding_probability=0.5, max_litter_size=4)
        rabbit = Rabbit(field, Location(1, 1), random.Random(2024), traits=traits)

        litters = {rabbit.breed() for _ in range(200)}

        # Independent trials produce intermediate litter sizes, not only 0 or 4.
        assert litters <= {0, 1, 2, 3, 4}
        assert {1, 2, 3} & litters

    def test_give_birth_fills_distinct_free_cells(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(0, 0), random.Random(1), traits=FERTILE_RABBIT)
        free_before = set(field.free_adjacent_locations(Location(0, 0)))
        newborns = []

        rabbit.give_birth(newborns)

        assert len(newborns) == 3
        placed = {young.location for young in newborns}
        assert placed == free_before
        assert rabbit.location == Location(0, 0)
        for young in newborns:
            assert field.occupant_at(young.location) is young
            assert young.age == 0
            assert young.traits is FERTILE_RABBIT

    def test_excess_births_are_dropped(self):
        field = Field(depth=3, width=3)
        rabbit = Rabbit(field, Location(0, 0), random.Random(1), traits=FERTILE_RABBIT)
        Rabbit(field, Location(0, 1), random.Random(1), traits=STILL_RABBIT)
        Rabbit(field, Location(1, 1), random.Random(1), traits=STILL_RABBIT)
        newborns = []

        rabbit.give_birth(newborns)

        assert len(newborns) == 1
        assert newborns[0].location == Location(1, 0)

    def test_act_breeds_then_moves(self):
        field = Field(depth=5, width=5)
        rabbit = Rabbit(field, Location(2, 2), random.Random(1), traits=FERTILE_RABBIT)
        newborns = []

        rabbit.act(newborns)

        assert len(newborns) == 3
        assert rabbit.is_alive()
        assert rabbit.location != Location(2, 2)
        assert rabbit.location in field.adjacent_locations(Location(2, 2), rotate=False)
        assert field.occupant_at(Location(2, 2)) is None
        assert len(field) == 4
        assert rabbit.location not in {young.location for young in newborns}


class TestSnapshot:
    def test_snapshot_is_plain_data(self):
        field = Field(depth=3, width=3)
        fox = Fox(field, Location(2, 1), random.Random(1))
        fox.age = 7
        fox.food_level = 4

        data = fox.snapshot()

        assert data["species"] == "fox"
        assert data["age"] == 7
        assert data["location"] == [2, 1]
        assert data["food_level"] == 4
        assert data["traits"]["food_values"] == {"rabbit": 9}

    def test_from_snapshot_rebuilds_animal(self):
        field = Field(depth=3, width=3)
        fox = Fox(field, Location(2, 1), random.Random(1))
        fox.age = 7
        fox.food_level = 4
        data = fox.snapshot()

        other = Field(depth=3, width=3)
        copy = Fox.from_snapshot(other, random.Random(1), data)

        assert isinstance(copy, Fox)
        assert copy.age == 7
        assert copy.food_level == 4
        assert copy.location == Location(2, 1)
        assert copy.traits == FOX
        assert other.occupant_at(Location(2, 1)) is copy
