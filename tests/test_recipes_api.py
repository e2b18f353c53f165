from datetime import datetime, timezone

from core.database import get_db

RECORD_KEYS = {
    "id", "title", "description", "ingredients", "instructions",
    "cookingTimeMinutes", "servings", "difficulty", "cuisine",
    "createdAt", "updatedAt",
}


def parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def create(client, payload):
    res = client.post("/api/recipes", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


def test_list_recipes_empty(client):
    res = client.get("/api/recipes")
    assert res.status_code == 200
    assert res.json() == []


def test_create_recipe_scenario(client, tacos):
    res = client.post("/api/recipes", json=tacos)

    assert res.status_code == 201
    body = res.json()
    assert set(body) == RECORD_KEYS
    assert isinstance(body["id"], int)
    assert body["title"] == "Tacos"
    assert body["description"] is None
    assert body["cookingTimeMinutes"] is None
    assert body["createdAt"] is not None
    assert body["updatedAt"] is None
    assert parse_timestamp(body["createdAt"]) <= datetime.now(timezone.utc)
    assert res.headers["Location"].endswith(f"/api/recipes/{body['id']}")


def test_create_then_get_returns_same_record(client, street_tacos):
    created = create(client, street_tacos)

    res = client.get(f"/api/recipes/{created['id']}")

    assert res.status_code == 200
    assert res.json() == created
    assert created["cookingTimeMinutes"] == 30
    assert created["difficulty"] == "Medium"


def test_location_header_resolves(client, tacos):
    res = client.post("/api/recipes", json=tacos)

    follow = client.get(res.headers["Location"])

    assert follow.status_code == 200
    assert follow.json()["id"] == res.json()["id"]


def test_create_accepts_snake_case_keys(client, tacos):
    created = create(client, {**tacos, "cooking_time_minutes": 15})
    assert created["cookingTimeMinutes"] == 15


def test_list_returns_all_records(client, tacos, street_tacos):
    first = create(client, tacos)
    second = create(client, street_tacos)

    res = client.get("/api/recipes")

    assert res.status_code == 200
    assert [r["id"] for r in res.json()] == [first["id"], second["id"]]


def test_get_missing_recipe(client):
    res = client.get("/api/recipes/9999")

    assert res.status_code == 404
    assert "9999" in res.json()["message"]


def test_partial_update_scenario(client, tacos):
    created = create(client, tacos)

    res = client.put(f"/api/recipes/{created['id']}", json={"servings": 6})

    assert res.status_code == 204
    assert res.content == b""

    updated = client.get(f"/api/recipes/{created['id']}").json()
    assert updated["servings"] == 6
    assert updated["updatedAt"] is not None
    for key in RECORD_KEYS - {"servings", "updatedAt"}:
        assert updated[key] == created[key]


def test_empty_update_only_changes_updated_at(client, street_tacos):
    created = create(client, street_tacos)

    res = client.put(f"/api/recipes/{created['id']}", json={})

    assert res.status_code == 204
    updated = client.get(f"/api/recipes/{created['id']}").json()
    assert updated["updatedAt"] is not None
    assert {k: v for k, v in updated.items() if k != "updatedAt"} == \
        {k: v for k, v in created.items() if k != "updatedAt"}


def test_update_missing_recipe(client):
    res = client.put("/api/recipes/9999", json={"title": "Ghost"})
    assert res.status_code == 404


def test_update_validation_error(client, tacos):
    created = create(client, tacos)

    res = client.put(f"/api/recipes/{created['id']}", json={"difficulty": "Extreme"})

    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "difficulty"
    assert client.get(f"/api/recipes/{created['id']}").json()["updatedAt"] is None


def test_delete_recipe(client, tacos):
    created = create(client, tacos)

    res = client.delete(f"/api/recipes/{created['id']}")

    assert res.status_code == 204
    assert client.get(f"/api/recipes/{created['id']}").status_code == 404


def test_delete_missing_recipe(client):
    res = client.delete("/api/recipes/9999")

    assert res.status_code == 404
    assert res.json() == {"error": "Not found", "message": "Recipe with ID 9999 not found"}


def test_title_too_long(client, tacos):
    res = client.post("/api/recipes", json={**tacos, "title": "t" * 201})

    assert res.status_code == 400
    body = res.json()
    assert body["error"] == "Validation failed"
    assert body["details"][0]["field"] == "title"
    assert body["message"].startswith("title:")


def test_title_at_limit(client, tacos):
    created = create(client, {**tacos, "title": "t" * 200})
    assert len(created["title"]) == 200


def test_unknown_difficulty(client, tacos):
    res = client.post("/api/recipes", json={**tacos, "difficulty": "Extreme"})
    assert res.status_code == 400

    for difficulty in ("Easy", "Medium", "Hard"):
        assert create(client, {**tacos, "difficulty": difficulty})["difficulty"] == difficulty


def test_missing_required_fields(client):
    res = client.post("/api/recipes", json={"description": "no title"})

    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["details"]}
    assert fields == {"title", "ingredients", "instructions"}


def test_out_of_range_values(client, tacos):
    res = client.post("/api/recipes", json={**tacos, "cookingTimeMinutes": 2000, "servings": 0})

    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["details"]}
    assert fields == {"cookingTimeMinutes", "servings"}


def test_malformed_json(client):
    res = client.post(
        "/api/recipes",
        content=b'{"title": "broken"',
        headers={"content-type": "application/json"},
    )

    assert res.status_code == 400
    assert res.json()["details"][0]["field"] == "body"


def test_non_integer_id(client):
    res = client.get("/api/recipes/abc")
    assert res.status_code == 400


def test_request_id_header(client):
    res = client.get("/api/recipes", headers={"X-Request-ID": "req-123"})

    assert res.headers["X-Request-ID"] == "req-123"
    assert "X-Process-Time" in res.headers


def test_storage_unavailable(client, failing_session):
    async def broken_db():
        yield failing_session

    client.app.dependency_overrides[get_db] = broken_db

    res = client.get("/api/recipes")

    assert res.status_code == 503
    assert "db-host" not in res.text
    assert res.json()["error"] == "Service unavailable"


def test_id_beyond_integer_column_is_not_found(client):
    huge = "99999999999999999999"

    for method in ("get", "delete"):
        res = client.request(method.upper(), f"/api/recipes/{huge}")
        assert res.status_code == 404
        assert res.json()["message"] == f"Recipe with ID {huge} not found"

    res = client.put(f"/api/recipes/{huge}", json={"servings": 2})
    assert res.status_code == 404


def test_zero_and_negative_ids_are_not_found(client):
    assert client.get("/api/recipes/0").status_code == 404
    assert client.delete("/api/recipes/-5").status_code == 404


def test_integer_fields_reject_booleans_and_floats(client, tacos):
    res = client.post("/api/recipes", json={**tacos, "servings": True, "cookingTimeMinutes": 5.0})

    assert res.status_code == 400
    fields = {d["field"] for d in res.json()["details"]}
    assert fields == {"servings", "cookingTimeMinutes"}
    assert client.get("/api/recipes").json() == []


def test_update_rejects_boolean_servings(client, tacos):
    created = create(client, tacos)

    res = client.put(f"/api/recipes/{created['id']}", json={"servings": True})

    assert res.status_code == 400
    assert client.get(f"/api/recipes/{created['id']}").json()["servings"] is None
