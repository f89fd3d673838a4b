from __future__ import annotations


async def create_animal(client, headers, visual_id: str) -> dict:
    response = await client.post(
        "/api/v1/animals",
        json={"speciesId": "bovine", "sex": "female", "visualId": visual_id},
        headers=headers,
    )
    return response.json()


async def test_lot_lifecycle(client, headers):
    a = await create_animal(client, headers, "L-A")
    b = await create_animal(client, headers, "L-B")

    create_response = await client.post(
        "/api/v1/lots",
        json={
            "name": "Mastitis April",
            "type": "treatment",
            "productName": "Oxytetracycline",
            "treatmentDate": "2025-04-01",
        },
        headers=headers,
    )
    assert create_response.status_code == 201
    lot = create_response.json()
    assert lot["status"] == "open"
    assert lot["animalCount"] == 0

    for animal in (a, b):
        joined = await client.post(
            f"/api/v1/lots/{lot['id']}/animals", json={"animalId": animal["id"]}, headers=headers
        )
        assert joined.status_code == 201
        assert joined.json()["leftAt"] is None

    again = await client.post(
        f"/api/v1/lots/{lot['id']}/animals", json={"animalId": a["id"]}, headers=headers
    )
    assert again.status_code == 409

    duplicate = await client.post(
        "/api/v1/lots", json={"name": "mastitis april", "type": "sale"}, headers=headers
    )
    assert duplicate.status_code == 409
    assert duplicate.json()["details"]["conflictingId"] == lot["id"]

    out = await client.post(
        "/api/v1/movements",
        json={
            "type": "temporary_out",
            "animalIds": [a["id"]],
            "movementDate": "2025-04-10",
            "payload": {"temporaryType": "pasture"},
        },
        headers=headers,
    )
    assert out.status_code == 201

    members = await client.get(f"/api/v1/lots/{lot['id']}/animals", headers=headers)
    assert [m["animal"]["id"] for m in members.json()] == [b["id"]]
    history = await client.get(
        f"/api/v1/lots/{lot['id']}/animals", params={"includeHistory": "true"}, headers=headers
    )
    assert len(history.json()) == 2

    animal_lots = await client.get(f"/api/v1/animals/{a['id']}/lots", headers=headers)
    assert animal_lots.status_code == 200
    assert animal_lots.json()[0]["lotName"] == "Mastitis April"
    assert animal_lots.json()[0]["leftAt"] is not None

    fetched = (await client.get(f"/api/v1/lots/{lot['id']}", headers=headers)).json()
    assert fetched["animalCount"] == 1

    removed = await client.delete(f"/api/v1/lots/{lot['id']}/animals/{b['id']}", headers=headers)
    assert removed.status_code == 204

    closed = await client.post(
        f"/api/v1/lots/{lot['id']}/close", json={"version": fetched["version"]}, headers=headers
    )
    assert closed.status_code == 200
    assert closed.json()["status"] == "closed"
    assert closed.json()["closedAt"] is not None

    rejected = await client.post(
        f"/api/v1/lots/{lot['id']}/animals", json={"animalId": b["id"]}, headers=headers
    )
    assert rejected.status_code == 422

    listing = await client.get("/api/v1/lots", params={"status": "closed"}, headers=headers)
    assert listing.json()["meta"]["total"] == 1


async def test_update_lot_and_invalid_type(client, headers):
    invalid = await client.post(
        "/api/v1/lots", json={"name": "Odd", "type": "party"}, headers=headers
    )
    assert invalid.status_code == 422

    lot = (
        await client.post(
            "/api/v1/lots", json={"name": "Sale May", "type": "sale"}, headers=headers
        )
    ).json()
    updated = await client.put(
        f"/api/v1/lots/{lot['id']}",
        json={"version": 1, "priceTotal": "12500.00", "buyerName": "Coop"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["buyerName"] == "Coop"
    assert updated.json()["version"] == 2

    negative = await client.put(
        f"/api/v1/lots/{lot['id']}", json={"version": 2, "priceTotal": "-1"}, headers=headers
    )
    assert negative.status_code == 422
