"""
Body of a single load-test iteration.

:func:`run_iteration` issues the fixed sequence of twelve PetClinic API
calls, grouped by resource.  Each call runs inside Locust's
``catch_response`` block and is handed to the classifier, so a failing
call is reported but never stops the calls that follow it.

Request names follow ``"<Group>: <path template> [<METHOD>]"`` so
Locust aggregates statistics per endpoint rather than per concrete id.
"""

from __future__ import annotations

import random
from typing import Any

from petclinic_load.classifier import ResponseBucket, classify_response
from petclinic_load.fixtures import IterationIds, pick_iteration_ids, random_pet_type_id
from petclinic_load.payloads import (
    JSON_HEADERS,
    owner_payload,
    pet_payload,
    specialty_payload,
    vet_payload,
    visit_payload,
)

PETTYPES_GROUP = "Pettypes API"
OWNER_GROUP = "Owner API"
PET_GROUP = "Pet API"
VISIT_GROUP = "Visit API"
VET_GROUP = "Vet API"
SPECIALTY_GROUP = "Specialty API"


def _send(
    client: Any,
    method: str,
    group: str,
    path: str,
    template: str,
    json: dict[str, Any] | None = None,
) -> ResponseBucket:
    """Send one request and classify its response."""
    url = f"{client.base_url}{path}"
    with client.request(
        method,
        path,
        json=json,
        headers=JSON_HEADERS,
        name=f"{group}: {template} [{method}]",
        catch_response=True,
    ) as response:
        return classify_response(response, method, url)


def run_iteration(
    client: Any,
    ids: IterationIds | None = None,
    rng: random.Random | None = None,
) -> list[ResponseBucket]:
    """
    Run one iteration of the PetClinic CRUD workload.

    Args:
        client: A Locust ``HttpSession`` (or anything with ``base_url``
            and a ``request`` method honouring ``catch_response``).
        ids: Record ids to work against.  Picked at random when omitted.
        rng: Random source for id and payload choices.

    Returns:
        The bucket of every response, in request order.
    """
    if ids is None:
        ids = pick_iteration_ids(rng)

    results: list[ResponseBucket] = []

    pet_type_id = random_pet_type_id(rng)
    results.append(
        _send(client, "GET", PETTYPES_GROUP, f"/api/pettypes/{pet_type_id}", "/api/pettypes/[id]")
    )

    owner_path = f"/api/owners/{ids.owner_id}"
    results.append(_send(client, "GET", OWNER_GROUP, owner_path, "/api/owners/[id]"))
    results.append(
        _send(client, "PUT", OWNER_GROUP, owner_path, "/api/owners/[id]", json=owner_payload(rng))
    )

    pet_path = f"/api/pets/{ids.pet_id}"
    results.append(_send(client, "GET", PET_GROUP, pet_path, "/api/pets/[id]"))
    results.append(_send(client, "PUT", PET_GROUP, pet_path, "/api/pets/[id]", json=pet_payload()))

    visit = visit_payload()
    results.append(
        _send(
            client,
            "POST",
            VISIT_GROUP,
            f"/api/owners/{ids.owner_id}/pets/{ids.pet_id}/visits",
            "/api/owners/[id]/pets/[id]/visits",
            json=visit,
        )
    )
    visit_path = f"/api/visits/{ids.visit_id}"
    results.append(_send(client, "GET", VISIT_GROUP, visit_path, "/api/visits/[id]"))
    results.append(_send(client, "PUT", VISIT_GROUP, visit_path, "/api/visits/[id]", json=visit))

    vet_path = f"/api/vets/{ids.vet_id}"
    results.append(_send(client, "GET", VET_GROUP, vet_path, "/api/vets/[id]"))
    results.append(_send(client, "PUT", VET_GROUP, vet_path, "/api/vets/[id]", json=vet_payload()))

    specialty_path = f"/api/specialties/{ids.specialty_id}"
    results.append(
        _send(client, "GET", SPECIALTY_GROUP, specialty_path, "/api/specialties/[id]")
    )
    results.append(
        _send(
            client,
            "PUT",
            SPECIALTY_GROUP,
            specialty_path,
            "/api/specialties/[id]",
            json=specialty_payload(),
        )
    )

    return results
