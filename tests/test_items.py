from tastetab.dataset import MENU_ITEMS

DOSA = {
    "name": "Masala Dosa",
    "category": "Breakfast",
    "price": 80,
    "imageUrl": "https://images.tastetab.app/masala-dosa.jpg",
    "openTime": "07:00 AM",
    "closeTime": "11:30 AM",
}

MISSING_ID = "0123456789abcdef01234567"


def test_admin_creates_and_lists_items(client, admin_headers):
    res = client.post("/dashboard/items", json=DOSA, headers=admin_headers)
    assert res.status_code == 201
    created = res.json()
    assert created["_id"]
    assert created["name"] == "Masala Dosa"

    res = client.get("/dashboard/items", headers=admin_headers)
    assert res.status_code == 200
    assert [i["_id"] for i in res.json()] == [created["_id"]]


def test_create_requires_every_field_and_positive_price(client, admin_headers):
    res = client.post("/dashboard/items", json={k: v for k, v in DOSA.items() if k != "imageUrl"}, headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["field"] == "imageUrl"

    res = client.post("/dashboard/items", json=dict(DOSA, price=0), headers=admin_headers)
    assert res.status_code == 400
    assert res.json()["field"] == "price"


def test_update_item(client, admin_headers):
    item_id = client.post("/dashboard/items", json=DOSA, headers=admin_headers).json()["_id"]
    res = client.put(f"/dashboard/items/{item_id}", json=dict(DOSA, price=95), headers=admin_headers)
    assert res.status_code == 200
    assert res.json()["price"] == 95
    assert res.json()["_id"] == item_id


def test_update_and_delete_unknown_or_malformed_id(client, admin_headers):
    assert client.put(f"/dashboard/items/{MISSING_ID}", json=DOSA, headers=admin_headers).status_code == 404
    assert client.delete(f"/dashboard/items/{MISSING_ID}", headers=admin_headers).status_code == 404
    assert client.put("/dashboard/items/nope", json=DOSA, headers=admin_headers).status_code == 400
    assert client.delete("/dashboard/items/nope", headers=admin_headers).status_code == 400


def test_delete_item(client, admin_headers, db):
    item_id = client.post("/dashboard/items", json=DOSA, headers=admin_headers).json()["_id"]
    res = client.delete(f"/dashboard/items/{item_id}", headers=admin_headers)
    assert res.status_code == 200
    assert res.json() == {"message": "Item deleted"}
    assert db.items.count_documents({}) == 0


def test_menu_management_is_admin_only(client, cashier_headers):
    assert client.get("/dashboard/items").status_code == 401
    assert client.get("/dashboard/items", headers=cashier_headers).status_code == 403
    assert client.post("/dashboard/items", json=DOSA, headers=cashier_headers).status_code == 403


def test_public_listing_and_seed_need_no_token(client):
    res = client.post("/api/insert-items")
    assert res.status_code == 201
    assert len(res.json()) == len(MENU_ITEMS)
    assert all("_id" in item for item in res.json())
    # the bundled dataset itself is left untouched
    assert all("_id" not in item for item in MENU_ITEMS)

    res = client.get("/api/items")
    assert res.status_code == 200
    assert [i["name"] for i in res.json()] == [i["name"] for i in MENU_ITEMS]
