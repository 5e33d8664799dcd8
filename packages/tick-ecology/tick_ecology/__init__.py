"""tick-ecology - Grid-based predator-prey population simulation."""
from __future__ import annotations

from tick_ecology.types import (
    CellOccupiedError,
    DeadAnimalError,
    Location,
    RandomSource,
    SnapshotError,
)
from tick_ecology.field import Field
from tick_ecology.animal import Alive, Animal, Dead, Predator, SpeciesTraits
from tick_ecology.species import BEAR, FOX, RABBIT, SPECIES, Bear, Fox, Rabbit
from tick_ecology.census import Census, census
from tick_ecology.chronicle import Chronicle, LifeEvent
from tick_ecology.config import PopulationConfig
from tick_ecology.simulator import Simulator

__all__ = [
    "Location",
    "RandomSource",
    "DeadAnimalError",
    "CellOccupiedError",
    "SnapshotError",
    "Field",
    "Animal",
    "Predator",
    "SpeciesTraits",
    "Alive",
    "Dead",
    "Rabbit",
    "Fox",
    "Bear",
    "RABBIT",
    "FOX",
    "BEAR",
    "SPECIES",
    "Census",
    "census",
    "Chronicle",
    "LifeEvent",
    "PopulationConfig",
    "Simulator",
]
