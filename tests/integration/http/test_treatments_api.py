from __future__ import annotations

from herdbook.infrastructure.db.orm.product import ProductORM


async def seed_product(app, product_id: str, name: str, meat_days: int, milk_hours: int) -> None:
    async with app.state.session_factory() as session:
        session.add(
            ProductORM(
                id=product_id,
                name=name,
                withdrawal_meat_days=meat_days,
                withdrawal_milk_hours=milk_hours,
            )
        )
        await session.commit()


async def test_treatment_withdrawal_flow(app, client, headers):
    await seed_product(app, "OXY-20", "Oxytetracycline 20%", 12, 72)
    cow = (
        await client.post(
            "/api/v1/animals",
            json={"speciesId": "bovine", "sex": "female", "visualId": "T-1"},
            headers=headers,
        )
    ).json()

    response = await client.post(
        "/api/v1/treatments",
        json={
            "animalId": cow["id"],
            "treatmentDate": "2025-01-01",
            "productId": "OXY-20",
            "dose": "10",
            "doseUnit": "ml",
        },
        headers=headers,
    )
    assert response.status_code == 201
    treatment = response.json()
    assert treatment["withdrawalMeatUntil"] == "2025-01-13"
    assert treatment["withdrawalMilkUntil"] == "2025-01-04"
    assert treatment["productName"] == "Oxytetracycline 20%"
    assert treatment["warnings"] == []

    during = await client.get(
        f"/api/v1/animals/{cow['id']}/withdrawal",
        params={"asOf": "2025-01-10"},
        headers=headers,
    )
    assert during.status_code == 200
    assert during.json()["underWithdrawal"] is True
    assert during.json()["until"] == "2025-01-13"

    after = await client.get(
        f"/api/v1/animals/{cow['id']}/withdrawal",
        params={"asOf": "2025-01-14"},
        headers=headers,
    )
    assert after.json()["underWithdrawal"] is False

    bad_metric = await client.get(
        f"/api/v1/animals/{cow['id']}/withdrawal", params={"metric": "wool"}, headers=headers
    )
    assert bad_metric.status_code == 422

    updated = await client.put(
        f"/api/v1/treatments/{treatment['id']}",
        json={"version": 1, "diagnosis": "Mastitis"},
        headers=headers,
    )
    assert updated.status_code == 200
    assert updated.json()["diagnosis"] == "Mastitis"

    listing = await client.get(
        "/api/v1/treatments", params={"animalId": cow["id"]}, headers=headers
    )
    assert listing.json()["meta"]["total"] == 1

    deleted = await client.delete(
        f"/api/v1/treatments/{treatment['id']}", params={"version": 2}, headers=headers
    )
    assert deleted.status_code == 204
    gone = await client.get(f"/api/v1/treatments/{treatment['id']}", headers=headers)
    assert gone.status_code == 404


async def test_unknown_product_returns_warning(client, headers):
    cow = (
        await client.post(
            "/api/v1/animals",
            json={"speciesId": "ovine", "sex": "female", "visualId": "T-2"},
            headers=headers,
        )
    ).json()
    response = await client.post(
        "/api/v1/treatments",
        json={"animalId": cow["id"], "treatmentDate": "2025-02-01", "productId": "GHOST"},
        headers=headers,
    )
    assert response.status_code == 201
    body = response.json()
    assert body["withdrawalMeatUntil"] is None
    assert len(body["warnings"]) == 1
