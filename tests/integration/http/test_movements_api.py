from __future__ import annotations

from uuid import uuid4


async def create_animal(client, headers, visual_id: str, sex: str = "female") -> dict:
    response = await client.post(
        "/api/v1/animals",
        json={"speciesId": "bovine", "sex": sex, "visualId": visual_id},
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()


async def test_sale_projects_status_and_snapshots(client, headers):
    a = await create_animal(client, headers, "M-1")
    b = await create_animal(client, headers, "M-2")

    response = await client.post(
        "/api/v1/movements",
        json={
            "type": "sale",
            "animalIds": [a["id"], b["id"]],
            "movementDate": "2025-04-15",
            "payload": {"buyerName": "Coop", "salePrice": "5000"},
            "notes": "spring sale",
        },
        headers=headers,
    )
    assert response.status_code == 201
    movement = response.json()
    assert movement["payload"] == {"buyerName": "Coop", "salePrice": "5000"}
    assert movement["statusChanges"] == {a["id"]: "sold", b["id"]: "sold"}

    fetched = await client.get(f"/api/v1/movements/{movement['id']}", headers=headers)
    assert fetched.status_code == 200
    assert sorted(fetched.json()["animalIds"]) == sorted([a["id"], b["id"]])

    snapshots = await client.get(f"/api/v1/movements/{movement['id']}/animals", headers=headers)
    assert snapshots.status_code == 200
    assert {s["statusBefore"] for s in snapshots.json()} == {"alive"}
    assert {s["visualId"] for s in snapshots.json()} == {"M-1", "M-2"}

    listing = await client.get(
        "/api/v1/movements", params={"animalId": a["id"], "type": "sale"}, headers=headers
    )
    assert listing.status_code == 200
    assert listing.json()["meta"]["total"] == 1

    stats = await client.get(
        "/api/v1/movements/statistics",
        params={"dateFrom": "2025-04-01", "dateTo": "2025-04-30"},
        headers=headers,
    )
    assert stats.status_code == 200
    body = stats.json()
    assert body["totalMovements"] == 1
    assert body["totalAnimals"] == 2
    assert body["byType"]["sale"] == 1
    assert body["totalSales"] == "5000"


async def test_unknown_animal_rejects_whole_movement(client, headers):
    a = await create_animal(client, headers, "M-3")
    missing = str(uuid4())
    response = await client.post(
        "/api/v1/movements",
        json={"type": "death", "animalIds": [a["id"], missing], "movementDate": "2025-04-15"},
        headers=headers,
    )
    assert response.status_code == 404
    assert response.json()["details"] == {"missingIds": [missing]}

    listing = await client.get("/api/v1/movements", headers=headers)
    assert listing.json()["meta"]["total"] == 0
    current = (await client.get(f"/api/v1/animals/{a['id']}", headers=headers)).json()
    assert current["status"] == "alive"


async def test_movement_validation_errors(client, headers):
    a = await create_animal(client, headers, "M-4")

    unknown_type = await client.post(
        "/api/v1/movements",
        json={"type": "teleport", "animalIds": [a["id"]], "movementDate": "2025-04-15"},
        headers=headers,
    )
    assert unknown_type.status_code == 422

    wrong_payload = await client.post(
        "/api/v1/movements",
        json={
            "type": "transfer_out",
            "animalIds": [a["id"]],
            "movementDate": "2025-04-15",
            "payload": {"originFarmId": "F-1"},
        },
        headers=headers,
    )
    assert wrong_payload.status_code == 422
    assert wrong_payload.json()["details"]["errors"]

    no_animals = await client.post(
        "/api/v1/movements",
        json={"type": "entry", "animalIds": [], "movementDate": "2025-04-15"},
        headers=headers,
    )
    assert no_animals.status_code == 422

    bad_range = await client.get(
        "/api/v1/movements/statistics",
        params={"dateFrom": "2025-05-01", "dateTo": "2025-04-01"},
        headers=headers,
    )
    assert bad_range.status_code == 422

    missing = await client.get(f"/api/v1/movements/{uuid4()}", headers=headers)
    assert missing.status_code == 404
