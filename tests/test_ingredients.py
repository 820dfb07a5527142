def test_ingredients_require_staff(client, customer_headers):
    assert client.get("/ingredients").status_code == 401
    assert client.get("/ingredients", headers=customer_headers).status_code == 403


def test_create_and_rename_ingredient(client, staff_headers):
    resp = client.post("/ingredients", json={"name": "Garlic", "description": "Bulbs"}, headers=staff_headers)
    assert resp.status_code == 201
    ingredient_id = resp.json()["data"]["id"]

    resp = client.patch(f"/ingredients/{ingredient_id}", json={"name": "Black garlic"}, headers=staff_headers)
    assert resp.json()["data"]["name"] == "Black garlic"
    assert resp.json()["data"]["description"] == "Bulbs"
    assert [i["name"] for i in client.get("/ingredients", headers=staff_headers).json()["data"]] == ["Black garlic"]


def test_duplicate_ingredient_name(client, staff_headers):
    client.post("/ingredients", json={"name": "Salt"}, headers=staff_headers)
    resp = client.post("/ingredients", json={"name": "Salt"}, headers=staff_headers)
    assert resp.status_code == 409
    assert resp.json()["errors"]["message"] == "Ingredient already exists"


def test_delete_and_restore_ingredient(client, staff_headers):
    ingredient_id = client.post("/ingredients", json={"name": "Chili"}, headers=staff_headers).json()["data"]["id"]

    assert client.delete(f"/ingredients/{ingredient_id}", headers=staff_headers).status_code == 200
    assert client.get(f"/ingredients/{ingredient_id}", headers=staff_headers).status_code == 404
    # deleted names stay reserved until restored
    assert client.post("/ingredients", json={"name": "Chili"}, headers=staff_headers).status_code == 409

    resp = client.patch(f"/ingredients/{ingredient_id}/restore", headers=staff_headers)
    assert resp.status_code == 200
    assert client.get(f"/ingredients/{ingredient_id}", headers=staff_headers).status_code == 200


def test_restore_live_ingredient_is_not_found(client, staff_headers):
    ingredient_id = client.post("/ingredients", json={"name": "Lime"}, headers=staff_headers).json()["data"]["id"]
    assert client.patch(f"/ingredients/{ingredient_id}/restore", headers=staff_headers).status_code == 404
