import pytest


def test_register_and_login(client):
    resp = client.post(
        "/users", json={"name": "Budi", "email": "Budi@Example.com", "password": "secret123", "phone": "0812"}
    )
    assert resp.status_code == 201
    user = resp.json()["data"]
    assert user["email"] == "budi@example.com"
    assert user["role"] == "customer"
    assert "password" not in user

    resp = client.post("/auth/login", json={"email": "budi@example.com", "password": "secret123"})
    assert resp.status_code == 200
    data = resp.json()["data"]
    assert data["user"]["id"] == user["id"]
    assert data["token"]


def test_register_duplicate_email(client, customer):
    resp = client.post("/users", json={"name": "Again", "email": customer.email, "password": "secret123"})
    assert resp.status_code == 409


def test_register_validation(client):
    resp = client.post("/users", json={"name": "Al", "email": "not-an-email", "password": "123"})
    assert resp.status_code == 400
    fields = {d["field"] for d in resp.json()["errors"]["details"]}
    assert {"name", "email", "password"} <= fields


@pytest.mark.parametrize("email", ["a@@b.com", "plain.address", "budi@", "@example.com", "budi@exa mple.com"])
def test_register_rejects_malformed_email(client, email):
    resp = client.post("/users", json={"name": "Budi", "email": email, "password": "secret123"})
    assert resp.status_code == 400
    assert [d["field"] for d in resp.json()["errors"]["details"]] == ["email"]


def test_login_unknown_email_and_wrong_password(client, customer):
    resp = client.post("/auth/login", json={"email": "nobody@example.com", "password": "secret123"})
    assert resp.status_code == 404
    resp = client.post("/auth/login", json={"email": customer.email, "password": "wrong-password"})
    assert resp.status_code == 401
    assert resp.json()["errors"]["message"] == "Invalid email or password"


def test_invalid_token_is_rejected(client):
    resp = client.get("/users", headers={"Authorization": "Bearer not-a-token"})
    assert resp.status_code == 401


def test_list_users_requires_staff(client, customer_headers, staff_headers):
    assert client.get("/users", headers=customer_headers).status_code == 403
    resp = client.get("/users", headers=staff_headers)
    assert resp.status_code == 200
    assert len(resp.json()["data"]) == 2


def test_users_update_themselves_only(client, customer, staff, customer_headers):
    resp = client.patch(f"/users/{customer.id}", json={"name": "New Name"}, headers=customer_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["name"] == "New Name"

    assert client.patch(f"/users/{staff.id}", json={"name": "Hacked"}, headers=customer_headers).status_code == 403
    assert client.patch(f"/users/{customer.id}", json={"role": "admin"}, headers=customer_headers).status_code == 403


def test_admin_changes_roles(client, customer, admin_headers):
    resp = client.patch(f"/users/{customer.id}", json={"role": "staff"}, headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["data"]["role"] == "staff"


def test_delete_and_restore_user(client, customer, customer_headers, staff_headers):
    assert client.delete(f"/users/{customer.id}", headers=staff_headers).status_code == 200
    assert client.get(f"/users/{customer.id}", headers=staff_headers).status_code == 404
    assert client.post(
        "/auth/login", json={"email": customer.email, "password": "secret123"}
    ).status_code == 404

    assert client.patch(f"/users/{customer.id}/restore", headers=staff_headers).status_code == 200
    assert client.get(f"/users/{customer.id}", headers=customer_headers).status_code == 200
