"""
Catalog search, barcode lookup, custom foods and the diary, with the
USDA client replaced by in-memory fakes.
"""
import asyncio
from datetime import date

from services import usda
from services.db import FoodItem, session_scope

SOUP = {"name": "Chicken Soup", "calories": 120, "protein": 9, "serving_unit": "bowl"}


def _custom(client, headers, **body):
    r = client.post("/api/food/custom", json={**SOUP, **body}, headers=headers)
    assert r.status_code == 201, r.text
    return r.json()["foodId"]


# --- catalog ------------------------------------------------------------
def test_custom_food_validation(client, auth_headers):
    assert client.post("/api/food/custom", json=SOUP).status_code == 401
    r = client.post("/api/food/custom", json={"name": "x", "calories": 0,
                                              "serving_unit": "g"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Missing required fields (Name, Calories, Serving Unit)."


def test_search_merges_local_then_usda(client, auth_headers, monkeypatch):
    _custom(client, auth_headers)
    remote = [{"id": "usda-42", "name": "CHICKEN, BROILER", "calories": 215,
               "protein": 18.6, "carbs": 0, "fat": 15.1,
               "serving_size": 100, "serving_unit": "g"}]
    calls = []

    async def fake_search(query, page_size=20):
        calls.append(query)
        return remote

    monkeypatch.setattr(usda, "search_foods", fake_search)

    foods = client.get("/api/food", params={"search": "chick"}).json()["foods"]
    assert [f["id"] for f in foods][1:] == ["usda-42"]
    assert foods[0]["name"] == "Chicken Soup"
    assert foods[0]["carbs"] == 0 and foods[0]["serving_size"] == 1

    # no query: local catalog only
    foods = client.get("/api/food").json()["foods"]
    assert len(foods) == 1
    assert calls == ["chick"]


def test_barcode_lookup_not_found(client):
    r = client.get("/api/food/barcode/0123456789")
    assert r.status_code == 404
    assert r.json()["message"] == "Food item not found for this barcode"


async def _add_packaged(upc: str) -> None:
    async with session_scope() as db:
        db.add(FoodItem(name="Granola Bar", barcode_upc=upc, calories=190, protein=4,
                        carbs=29, fat=7, serving_size=1, serving_unit="bar"))
        await db.commit()


def test_barcode_lookup_finds_packaged_food(client):
    asyncio.run(_add_packaged("0123456789012"))
    r = client.get("/api/food/barcode/0123456789012")
    assert r.status_code == 200
    food = r.json()["food"]
    assert food["name"] == "Granola Bar"
    assert food["calories"] == 190
    assert food["serving_unit"] == "bar"


def test_usda_search_hit_normalisation():
    hit = {"fdcId": 7, "description": "Apple",
           "foodNutrients": [{"nutrientId": 1008, "value": 52},
                             {"nutrientNumber": "1005", "value": 14}]}
    assert usda.normalize_search_hit(hit) == {
        "id": "usda-7", "name": "Apple", "calories": 52.0, "protein": 0.0,
        "fat": 0.0, "carbs": 14.0, "serving_size": 100.0, "serving_unit": "g",
    }
    assert usda.normalize_search_hit({"fdcId": 8, "description": "Water",
                                      "foodNutrients": []}) is None


# --- diary --------------------------------------------------------------
def test_log_food_and_duplicate(client, auth_headers):
    food_id = _custom(client, auth_headers)
    body = {"food_id": food_id, "meal_type": "breakfast", "quantity": 2}

    r = client.post("/api/diary", json=body, headers=auth_headers)
    assert r.status_code == 201
    log = r.json()["log"]
    assert log["food_id"] == food_id
    assert log["log_date"] == date.today().isoformat()

    r = client.post("/api/diary", json=body, headers=auth_headers)
    assert r.status_code == 409
    assert r.json()["message"] == "This item is already in your breakfast list."

    # same food, another meal is fine
    r = client.post("/api/diary", json={**body, "meal_type": "dinner"}, headers=auth_headers)
    assert r.status_code == 201

    r = client.get("/api/diary", params={"date": date.today().isoformat()},
                   headers=auth_headers)
    diary = r.json()["diary"]
    assert [d["meal_type"] for d in diary] == ["breakfast", "dinner"]
    assert diary[0]["name"] == "Chicken Soup"
    assert diary[0]["quantity"] == 2


def test_diary_input_errors(client, auth_headers):
    assert client.get("/api/diary", headers=auth_headers).status_code == 400
    r = client.get("/api/diary", params={"date": "yesterday"}, headers=auth_headers)
    assert r.status_code == 400

    r = client.post("/api/diary", json={"meal_type": "lunch"}, headers=auth_headers)
    assert r.json()["message"] == "Required fields missing"
    r = client.post("/api/diary", json={"food_id": 0, "meal_type": "lunch"}, headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Required fields missing"

    r = client.post("/api/diary", json={"food_id": 9999, "meal_type": "lunch"},
                    headers=auth_headers)
    assert r.status_code == 400
    assert r.json()["message"] == "Invalid food item"


def test_usda_food_is_cached_on_first_log(client, auth_headers, monkeypatch):
    fetched = []

    async def fake_fetch(fdc_id):
        fetched.append(fdc_id)
        return {"name": "Lentils, cooked", "calories": 116, "protein": 9,
                "fat": 0.4, "carbs": 20, "serving_size": 100.0, "serving_unit": "g"}

    monkeypatch.setattr(usda, "fetch_food", fake_fetch)

    for meal in ("lunch", "dinner"):
        r = client.post("/api/diary", json={"food_id": "usda-1234", "meal_type": meal},
                        headers=auth_headers)
        assert r.status_code == 201

    assert fetched == ["1234"]
    r = client.get("/api/food/barcode/usda-1234")
    assert r.status_code == 200
    assert r.json()["food"]["name"] == "Lentils, cooked"


def test_usda_failure_is_invalid_food(client, auth_headers, monkeypatch):
    async def fake_fetch(fdc_id):
        return None

    monkeypatch.setattr(usda, "fetch_food", fake_fetch)
    r = client.post("/api/diary", json={"food_id": "usda-5", "meal_type": "snack"},
                    headers=auth_headers)
    assert r.status_code == 400
