def _create_part(client, **overrides) -> dict:
    payload = {
        "scope_of_work": "electrical",
        "part_name": "6A modular switch",
        "category": "bought_out",
        "unit_type": "number",
        "part_price": 85,
    }
    payload.update(overrides)
    res = client.post("/parts", json=payload)
    assert res.status_code == 201, res.text
    return res.json()


def test_create_and_get_part(test_context):
    client, _ = test_context

    created = _create_part(client, part_name="  Cat6 cable  ", scope_of_work="data", unit_type="meter")

    assert created["part_name"] == "Cat6 cable"
    assert created["part_price"] == 85
    fetched = client.get(f"/parts/{created['id']}")
    assert fetched.status_code == 200, fetched.text
    assert fetched.json()["scope_of_work"] == "data"


def test_create_part_rejects_unknown_scope_and_negative_price(test_context):
    client, _ = test_context

    res = client.post(
        "/parts",
        json={
            "scope_of_work": "plumbing",
            "part_name": "Pipe",
            "category": "inhouse",
            "unit_type": "meter",
            "part_price": -1,
        },
    )

    assert res.status_code == 422
    fields = {item["field"] for item in res.json()["error"]["details"]}
    assert {"scope_of_work", "part_price"} <= fields


def test_list_parts_filters(test_context):
    client, _ = test_context
    _create_part(client)
    _create_part(client, part_name="Dome camera", scope_of_work="cctv", category="out_sourced")
    _create_part(client, part_name="Bullet camera", scope_of_work="cctv")

    cctv = client.get("/parts", params={"scope_of_work": "cctv"})
    assert cctv.status_code == 200, cctv.text
    assert cctv.json()["pagination"]["total"] == 2

    outsourced = client.get("/parts", params={"category": "out_sourced"})
    assert [item["part_name"] for item in outsourced.json()["items"]] == ["Dome camera"]

    search = client.get("/parts", params={"part_name": "CAMERA", "limit": 1})
    body = search.json()
    assert body["pagination"]["total"] == 2
    assert body["pagination"]["count"] == 1
    assert body["pagination"]["has_next"] is True


def test_update_part_changes_only_given_fields(test_context):
    client, _ = test_context
    created = _create_part(client)

    res = client.put(f"/parts/{created['id']}", json={"part_price": "99.999"})

    assert res.status_code == 200, res.text
    body = res.json()
    assert body["part_price"] == 100.0
    assert body["part_name"] == "6A modular switch"


def test_delete_part(test_context):
    client, _ = test_context
    created = _create_part(client)

    res = client.delete(f"/parts/{created['id']}")
    assert res.status_code == 200, res.text
    assert res.json()["message"] == "Part deleted successfully"

    missing = client.delete(f"/parts/{created['id']}")
    assert missing.status_code == 404
    assert missing.json()["error"]["code"] == "not_found"


def test_part_price_must_fit_the_price_column(test_context):
    client, _ = test_context
    created = _create_part(client, part_price="9999999999.99")

    res = client.put(f"/parts/{created['id']}", json={"part_price": 1e10})

    assert res.status_code == 422, res.text
    fields = {item["field"] for item in res.json()["error"]["details"]}
    assert fields == {"part_price"}
