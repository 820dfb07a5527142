from restaurant.domain.models import Ingredient


def _recipe(menu_id, *ingredients):
    return {
        "menu_id": menu_id,
        "name": "House fried rice",
        "description": "",
        "ingredients": [{"name": name, "quantity": qty} for name, qty in ingredients],
    }


def test_create_recipe_creates_ingredients_by_name(client, db_session, staff_headers, menu):
    db_session.add(Ingredient(name="rice", description="jasmine"))
    db_session.commit()

    resp = client.post("/recipes", json=_recipe(menu.id, ("rice", 0.2), ("egg", 1)), headers=staff_headers)
    assert resp.status_code == 201
    recipe = resp.json()["data"]
    assert [(i["name"], i["quantity"], i["position"]) for i in recipe["ingredients"]] == [
        ("rice", 0.2, 0), ("egg", 1.0, 1),
    ]
    assert db_session.query(Ingredient).count() == 2


def test_recipe_needs_existing_menu(client, staff_headers):
    resp = client.post(
        "/recipes", json=_recipe("6f1c1b1e-8f5c-4c1e-9a4e-2a7a0d9f0b11", ("rice", 1)), headers=staff_headers
    )
    assert resp.status_code == 404


def test_recipe_quantities_must_be_positive(client, staff_headers, menu):
    resp = client.post("/recipes", json=_recipe(menu.id, ("rice", 0)), headers=staff_headers)
    assert resp.status_code == 400
    resp = client.post("/recipes", json=_recipe(menu.id, ("rice", "inf")), headers=staff_headers)
    assert resp.status_code == 400


def test_duplicate_ingredient_names_are_rejected(client, staff_headers, menu):
    resp = client.post("/recipes", json=_recipe(menu.id, ("rice", 1), ("rice", 2)), headers=staff_headers)
    assert resp.status_code == 400
    assert resp.json()["errors"]["code"] == "BAD_REQUEST"


def test_one_recipe_per_menu(client, staff_headers, menu):
    assert client.post("/recipes", json=_recipe(menu.id, ("rice", 1)), headers=staff_headers).status_code == 201
    assert client.post("/recipes", json=_recipe(menu.id, ("egg", 1)), headers=staff_headers).status_code == 409


def test_update_upserts_lines_by_name(client, staff_headers, menu):
    created = client.post(
        "/recipes", json=_recipe(menu.id, ("rice", 0.2), ("egg", 1)), headers=staff_headers
    ).json()["data"]

    resp = client.patch(
        f"/recipes/{created['id']}",
        json={"name": "Special fried rice", "ingredients": [{"name": "egg", "quantity": 2}, {"name": "chili", "quantity": 0.05}]},
        headers=staff_headers,
    )
    assert resp.status_code == 200
    recipe = resp.json()["data"]
    assert recipe["name"] == "Special fried rice"
    assert [(i["name"], i["quantity"]) for i in recipe["ingredients"]] == [
        ("rice", 0.2), ("egg", 2.0), ("chili", 0.05),
    ]


def test_recipe_feeds_portion_calculation(client, db_session, staff_headers, menu):
    client.post("/recipes", json=_recipe(menu.id, ("rice", 0.25)), headers=staff_headers)
    rice = db_session.query(Ingredient).filter(Ingredient.name == "rice").one()
    client.post("/inventory", json={"ingredient_id": rice.id, "quantity": 1.9}, headers=staff_headers)

    resp = client.get(f"/inventory/menu/{menu.id}", headers=staff_headers)
    assert resp.json()["data"]["total_portions"] == 7


def test_delete_and_restore_recipe(client, staff_headers, menu):
    created = client.post("/recipes", json=_recipe(menu.id, ("rice", 1)), headers=staff_headers).json()["data"]
    assert client.delete(f"/recipes/{created['id']}", headers=staff_headers).status_code == 200
    assert client.get(f"/recipes/{created['id']}", headers=staff_headers).status_code == 404
    assert client.patch(f"/recipes/{created['id']}/restore", headers=staff_headers).status_code == 200
    assert len(client.get("/recipes", headers=staff_headers).json()["data"]) == 1
