import asyncio

from scripts.seed_foods import DEFAULT_FOODS, seed


def test_seed_is_idempotent():
    assert asyncio.run(seed(DEFAULT_FOODS)) == len(DEFAULT_FOODS)
    assert asyncio.run(seed(DEFAULT_FOODS)) == 0


def test_seeded_foods_are_searchable(client):
    asyncio.run(seed(DEFAULT_FOODS[:2]))
    foods = client.get("/api/food").json()["foods"]
    assert {f["name"] for f in foods} == {"Boiled Egg", "Grilled Chicken Breast"}
