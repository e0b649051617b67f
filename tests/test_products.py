# tests/test_products.py
KEYBOARD = {"name": "Keyboard", "price": 349.9, "description": "Mechanical, blue switches", "image": "img/kb.png"}


def test_create_then_fetch_returns_same_fields(client):
    r = client.post("/products", json=KEYBOARD)
    assert r.status_code == 201
    created = r.json()
    assert created["id"] == 1

    r2 = client.get(f"/products/{created['id']}")
    assert r2.status_code == 200
    assert r2.json() == {"id": 1, **KEYBOARD}


def test_ids_continue_from_max_existing(client, store):
    store.write({"products": [{"id": 5, "name": "A", "price": 1}, {"id": 2, "name": "B", "price": 2}], "users": []})
    r = client.post("/products", json=KEYBOARD)
    assert r.json()["id"] == 6


def test_missing_name_is_rejected(client):
    r = client.post("/products", json={"price": 10})
    assert r.status_code == 422


def test_search_matches_name_or_description_case_insensitive(client):
    client.post("/products", json=KEYBOARD)
    client.post("/products", json={"name": "Mouse", "price": 99, "description": "Wireless", "image": "m.png"})
    client.post("/products", json={"name": "Headset", "price": 199, "description": "KEYBOARD-free audio", "image": "h.png"})

    names = [p["name"] for p in client.get("/products", params={"search": "keyBOARD"}).json()]
    assert names == ["Keyboard", "Headset"]
    assert client.get("/products", params={"search": "nothing"}).json() == []


def test_search_skips_missing_description(client, store):
    store.write({"products": [{"id": 1, "name": "Chair", "price": 900}], "users": []})
    assert client.get("/products", params={"search": "chair"}).json()[0]["id"] == 1
    assert client.get("/products", params={"search": "desk"}).json() == []


def test_sort_by_name(client):
    for name in ("zeta", "Alpha", "beta"):
        client.post("/products", json={"name": name, "price": 1})
    names = [p["name"] for p in client.get("/products", params={"sort": "name"}).json()]
    assert names == ["Alpha", "beta", "zeta"]
    unsorted = [p["name"] for p in client.get("/products", params={"sort": "price"}).json()]
    assert unsorted == ["zeta", "Alpha", "beta"]


def test_patch_merges_and_keeps_id(client):
    pid = client.post("/products", json=KEYBOARD).json()["id"]
    r = client.patch(f"/products/{pid}", json={"price": 299.9, "id": 42})
    assert r.status_code == 200
    assert r.json() == {**KEYBOARD, "id": pid, "price": 299.9}
    assert client.get(f"/products/{pid}").json()["price"] == 299.9
    assert client.get("/products/42").status_code == 404


def test_patch_unknown_product(client):
    r = client.patch("/products/7", json={"price": 1})
    assert r.status_code == 404
    assert r.json()["detail"] == "Product not found"


def test_put_replaces_all_fields(client):
    pid = client.post("/products", json=KEYBOARD).json()["id"]
    r = client.put(f"/products/{pid}", json={"name": "Keyboard TKL", "price": 250})
    assert r.status_code == 200
    assert r.json() == {"id": pid, "name": "Keyboard TKL", "price": 250, "description": "", "image": ""}
    assert client.put("/products/99", json={"name": "x", "price": 1}).status_code == 404


def test_delete_then_fetch_is_not_found(client):
    pid = client.post("/products", json=KEYBOARD).json()["id"]
    r = client.delete(f"/products/{pid}")
    assert r.status_code == 200
    assert client.get(f"/products/{pid}").status_code == 404
    assert client.delete(f"/products/{pid}").status_code == 404


def test_unreadable_data_file_lists_empty(client, store):
    store.path.write_text("{not json", encoding="utf-8")
    r = client.get("/products")
    assert r.status_code == 200
    assert r.json() == []


def test_write_failure_is_500(tmp_path):
    from fastapi.testclient import TestClient

    from storeapi.database import JsonStore, get_store
    from storeapi.main import app

    # a directory cannot be written as a file
    app.dependency_overrides[get_store] = lambda: JsonStore(tmp_path)
    try:
        r = TestClient(app).post("/products", json=KEYBOARD)
    finally:
        app.dependency_overrides.clear()
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error."}


def test_reset_clears_everything(client, store):
    client.post("/products", json=KEYBOARD)
    client.post("/users", json={"email": "a@b.c", "password": "x", "role": "customer"})
    assert client.post("/reset").json() == {"status": "reset"}
    assert store.read() == {"products": [], "users": []}


def test_patch_with_null_keeps_stored_value(client, store):
    pid = client.post("/products", json=KEYBOARD).json()["id"]
    r = client.patch(f"/products/{pid}", json={"price": None, "name": "Keyboard TKL"})
    assert r.status_code == 200
    assert r.json()["price"] == 349.9
    assert store.read()["products"][0]["price"] == 349.9

    listing = client.get("/products")
    assert listing.status_code == 200
    assert listing.json()[0]["name"] == "Keyboard TKL"


def test_unexpected_error_is_generic_500(client, monkeypatch):
    from fastapi.testclient import TestClient

    import storeapi.main as main

    def boom(*args, **kwargs):
        raise RuntimeError("disk on fire")

    monkeypatch.setattr(main, "list_products_logic", boom)
    r = TestClient(main.app, raise_server_exceptions=False).get("/products")
    assert r.status_code == 500
    assert r.json() == {"detail": "Internal server error."}
