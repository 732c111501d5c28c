"""
Read-only sample data mirroring the PetClinic seed database.

The collections are built once at import and shared by every virtual
user in the process.  Records are frozen dataclasses held in tuples,
so no user can mutate what another user reads.
"""

from __future__ import annotations

import random
from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol

PET_TYPE_ID_RANGE = (1, 6)


class _HasId(Protocol):
    id: int


@dataclass(frozen=True)
class Owner:
    id: int
    first_name: str
    last_name: str


@dataclass(frozen=True)
class PetType:
    id: int
    name: str


@dataclass(frozen=True)
class Pet:
    id: int
    name: str
    type: PetType
    owner_id: int


@dataclass(frozen=True)
class Vet:
    id: int
    first_name: str
    last_name: str


@dataclass(frozen=True)
class Specialty:
    id: int
    name: str


@dataclass(frozen=True)
class Visit:
    id: int
    pet_id: int
    date: str
    description: str


@dataclass(frozen=True)
class IterationIds:
    """The record ids one iteration works against."""

    owner_id: int
    pet_id: int
    vet_id: int
    specialty_id: int
    visit_id: int


CAT = PetType(1, "cat")
DOG = PetType(2, "dog")
LIZARD = PetType(3, "lizard")
SNAKE = PetType(4, "snake")
BIRD = PetType(5, "bird")
HAMSTER = PetType(6, "hamster")

OWNERS: tuple[Owner, ...] = (
    Owner(1, "George", "Franklin"),
    Owner(2, "Betty", "Davis"),
    Owner(3, "Eduardo", "Rodriquez"),
    Owner(4, "Harold", "Davis"),
    Owner(5, "Peter", "McTavish"),
    Owner(6, "Jean", "Coleman"),
    Owner(7, "Jeff", "Black"),
    Owner(8, "Maria", "Escobito"),
    Owner(9, "David", "Schroeder"),
    Owner(10, "Carlos", "Estaban"),
)

PETS: tuple[Pet, ...] = (
    Pet(1, "Leo", CAT, 1),
    Pet(2, "Basil", HAMSTER, 2),
    Pet(3, "Rosy", DOG, 3),
    Pet(4, "Jewel", DOG, 3),
    Pet(5, "Iggy", LIZARD, 4),
    Pet(6, "George", SNAKE, 5),
    Pet(7, "Samantha", CAT, 6),
    Pet(8, "Max", CAT, 6),
    Pet(9, "Lucky", BIRD, 7),
    Pet(10, "Mulligan", DOG, 8),
    Pet(11, "Freddy", BIRD, 9),
    Pet(12, "Lucky", DOG, 10),
    Pet(13, "Sly", CAT, 10),
)

VETS: tuple[Vet, ...] = (
    Vet(1, "James", "Carter"),
    Vet(2, "Helen", "Leary"),
    Vet(3, "Linda", "Douglas"),
    Vet(4, "Rafael", "Ortega"),
    Vet(5, "Henry", "Stevens"),
    Vet(6, "Sharon", "Jenkins"),
)

SPECIALTIES: tuple[Specialty, ...] = (
    Specialty(1, "radiology"),
    Specialty(2, "surgery"),
    Specialty(3, "dentistry"),
)

VISITS: tuple[Visit, ...] = (
    Visit(1, 7, "2010-03-04", "rabies shot"),
    Visit(2, 8, "2011-03-04", "rabies shot"),
    Visit(3, 8, "2009-06-04", "neutered"),
    Visit(4, 7, "2008-09-04", "spayed"),
)


def random_id(collection: Sequence[_HasId], rng: random.Random | None = None) -> int:
    """
    Return the id of a uniformly chosen record.

    Raises:
        ValueError: If *collection* is empty.
    """
    if not collection:
        raise ValueError("Cannot pick an id from an empty collection")
    return (rng or random).choice(collection).id


def random_pet_type_id(rng: random.Random | None = None) -> int:
    """Pick a pet type id in the inclusive range the API seeds."""
    low, high = PET_TYPE_ID_RANGE
    return (rng or random).randint(low, high)


def pick_iteration_ids(rng: random.Random | None = None) -> IterationIds:
    """Pick one owner, pet, vet, specialty and visit id for an iteration."""
    return IterationIds(
        owner_id=random_id(OWNERS, rng),
        pet_id=random_id(PETS, rng),
        vet_id=random_id(VETS, rng),
        specialty_id=random_id(SPECIALTIES, rng),
        visit_id=random_id(VISITS, rng),
    )
