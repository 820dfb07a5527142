import os

from restaurant.core_settings import get_settings

FORM = {"name": "Sate Ayam", "description": "Chicken satay", "price": "30000", "category": "local"}


def test_create_menu_with_image(client, staff_headers):
    resp = client.post(
        "/menu",
        data=FORM,
        files={"image": ("sate.png", b"\x89PNG fake", "image/png")},
        headers=staff_headers,
    )
    assert resp.status_code == 201
    menu = resp.json()["data"]
    assert menu["price"] == 30000
    assert menu["rating"] == 0
    assert menu["image_url"].startswith("menu/") and menu["image_url"].endswith(".png")
    assert os.path.exists(os.path.join(get_settings().UPLOAD_DIR, menu["image_url"]))
    assert client.get(f"/uploads/{menu['image_url']}").content == b"\x89PNG fake"


def test_create_menu_without_image(client, staff_headers):
    resp = client.post("/menu", data=FORM, headers=staff_headers)
    assert resp.status_code == 201
    assert resp.json()["data"]["image_url"] is None


def test_rejects_other_file_types(client, staff_headers):
    resp = client.post(
        "/menu", data=FORM, files={"image": ("sate.gif", b"GIF89a", "image/gif")}, headers=staff_headers
    )
    assert resp.status_code == 400
    assert resp.json()["errors"]["code"] == "BAD_REQUEST"


def test_rejects_unknown_category_and_bad_price(client, staff_headers):
    resp = client.post("/menu", data={**FORM, "category": "pizza"}, headers=staff_headers)
    assert resp.status_code == 400
    resp = client.post("/menu", data={**FORM, "price": "0"}, headers=staff_headers)
    assert resp.status_code == 400


def test_update_menu_partially(client, staff_headers, menu):
    resp = client.patch(f"/menu/{menu.id}", data={"price": "27500"}, headers=staff_headers)
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["price"] == 27500
    assert data["name"] == menu.name


def test_public_listing_hides_deleted(client, staff_headers, menu):
    assert len(client.get("/menu").json()["data"]) == 1
    assert client.delete(f"/menu/{menu.id}", headers=staff_headers).status_code == 200
    assert client.get("/menu").json()["data"] == []
    assert client.patch(f"/menu/{menu.id}/restore", headers=staff_headers).status_code == 200
    assert client.get(f"/menu/{menu.id}").status_code == 200


def test_customers_cannot_create_menu(client, customer_headers):
    assert client.post("/menu", data=FORM, headers=customer_headers).status_code == 403
