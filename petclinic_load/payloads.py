"""
JSON request bodies for the write calls of an iteration.

Bodies are constant apart from the owner's telephone number, whose last
digit is randomised so successive owner updates are not byte-identical.
"""

from __future__ import annotations

import random
from typing import Any

JSON_HEADERS = {"Content-Type": "application/json"}

VISIT_DATE = "2024-11-08"


def owner_payload(rng: random.Random | None = None) -> dict[str, Any]:
    """Owner update body with a random final telephone digit."""
    digit = (rng or random).randint(0, 9)
    return {
        "firstName": "George",
        "lastName": "Franklin",
        "address": "110 W. Liberty St.",
        "city": "Madison",
        "telephone": f"608555102{digit}",
    }


def pet_payload() -> dict[str, Any]:
    return {
        "name": "Leo",
        "birthDate": VISIT_DATE,
        "type": {"name": "cat", "id": 1},
    }


def visit_payload() -> dict[str, Any]:
    """Body shared by the visit create and the visit update."""
    return {"date": VISIT_DATE, "description": "rabies shot"}


def vet_payload() -> dict[str, Any]:
    return {
        "firstName": "James",
        "lastName": "Carter",
        "specialties": [{"name": "radiology"}],
    }


def specialty_payload() -> dict[str, Any]:
    return {"name": "surgery"}
