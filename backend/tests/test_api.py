from decimal import Decimal

from fastapi.testclient import TestClient

from storefront.main import app
from storefront.models.product import Product

client = TestClient(app)


def _register_and_login(username="alice", password="s3cret"):
    r = client.post("/api/auth/register", json={"username": username, "password": password})
    assert r.status_code == 200
    r = client.post("/api/auth/login", json={"username": username, "password": password})
    assert r.status_code == 200
    return r.json()["token"]


def _user_id(token):
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    return r.json()["userId"]


def _add_product(name, price):
    r = client.post("/api/products", json={"name": name, "price": price})
    assert r.status_code == 200
    return r.json()


def test_register_confirms_and_rejects_duplicates():
    r = client.post("/api/auth/register", json={"username": "alice", "password": "pw"})
    assert r.status_code == 200
    assert r.json() == {"message": "User registered"}

    r = client.post("/api/auth/register", json={"username": "alice", "password": "other"})
    assert r.status_code == 409
    assert r.json()["error"]["kind"] == "conflict"


def test_login_issues_token_or_401():
    token = _register_and_login()
    assert token.count(".") == 2

    r = client.post("/api/auth/login", json={"username": "alice", "password": "nope"})
    assert r.status_code == 401
    body = r.json()
    assert "token" not in body
    assert body["error"]["kind"] == "unauthorized"


def test_me_requires_valid_bearer_token():
    token = _register_and_login()
    r = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert r.status_code == 200
    assert r.json()["username"] == "alice"
    assert "expiresAt" in r.json()

    assert client.get("/api/auth/me").status_code == 401
    r = client.get("/api/auth/me", headers={"Authorization": "Bearer garbage"})
    assert r.status_code == 401


def test_products_create_and_list():
    created = _add_product("Tea 100g", "3.00")
    assert created["name"] == "Tea 100g"
    assert Decimal(created["price"]) == Decimal("3.00")

    r = client.get("/api/products")
    assert r.status_code == 200
    assert [p["id"] for p in r.json()] == [created["id"]]

    r = client.get(f"/api/products/{created['id']}")
    assert r.status_code == 200
    assert client.get("/api/products/9999").status_code == 404


def test_negative_price_is_a_validation_error():
    r = client.post("/api/products", json={"name": "Broken", "price": "-1.00"})
    assert r.status_code == 422
    assert r.json()["error"]["kind"] == "validation_error"
    assert client.get("/api/products").json() == []


def test_malformed_body_uses_error_envelope():
    r = client.post("/api/cart", json={"userId": "x"})
    assert r.status_code == 422
    err = r.json()["error"]
    assert err["kind"] == "validation_error"
    assert err["details"]


def test_cart_add_and_list():
    uid = _user_id(_register_and_login())
    pid = _add_product("Mug", "7.25")["id"]

    r = client.post("/api/cart", json={"userId": uid, "productId": pid, "quantity": 2})
    assert r.status_code == 200
    item = r.json()
    assert item["userId"] == uid and item["productId"] == pid and item["quantity"] == 2

    r = client.get(f"/api/cart/{uid}")
    assert r.status_code == 200
    assert [it["id"] for it in r.json()] == [item["id"]]

    r = client.post("/api/cart", json={"userId": uid, "productId": pid, "quantity": 0})
    assert r.status_code == 422


def test_checkout_scenario():
    uid = _user_id(_register_and_login())
    a = _add_product("A", "10.00")["id"]
    b = _add_product("B", "5.50")["id"]
    client.post("/api/cart", json={"userId": uid, "productId": a, "quantity": 2})
    client.post("/api/cart", json={"userId": uid, "productId": b, "quantity": 1})

    r = client.post(f"/api/orders?userId={uid}")
    assert r.status_code == 200
    order = r.json()
    assert order["userId"] == uid
    assert Decimal(order["totalAmount"]) == Decimal("25.50")
    assert "createdAt" in order

    assert client.get(f"/api/cart/{uid}").json() == []


def test_checkout_empty_cart_gives_zero_order():
    uid = _user_id(_register_and_login())
    r = client.post(f"/api/orders?userId={uid}")
    assert r.status_code == 200
    assert Decimal(r.json()["totalAmount"]) == 0


def test_checkout_with_vanished_product_is_rejected(db):
    uid = _user_id(_register_and_login())
    pid = _add_product("Ghost", "1.00")["id"]
    client.post("/api/cart", json={"userId": uid, "productId": pid, "quantity": 1})
    db.query(Product).filter(Product.id == pid).delete()
    db.commit()

    r = client.post(f"/api/orders?userId={uid}")
    assert r.status_code == 404
    assert r.json()["error"]["kind"] == "product_not_found"
    assert len(client.get(f"/api/cart/{uid}").json()) == 1


def test_checkout_requires_user_id():
    r = client.post("/api/orders")
    assert r.status_code == 422


def test_health_ok():
    res = client.get("/api/health")
    assert res.status_code == 200
    body = res.json()
    assert body["status"] == "ok"
    assert body["db"] is True


def test_huge_numbers_are_rejected_as_validation_errors():
    uid = _user_id(_register_and_login())
    pid = _add_product("Mug", "7.25")["id"]

    r = client.post("/api/cart", json={"userId": uid, "productId": pid, "quantity": 10**20})
    assert r.status_code == 422
    assert r.json()["error"]["kind"] == "validation_error"

    r = client.post("/api/cart", json={"userId": 10**20, "productId": pid, "quantity": 1})
    assert r.status_code == 422

    for path in (f"/api/cart/{10**20}", f"/api/products/{10**20}"):
        r = client.get(path)
        assert r.status_code == 422
        assert r.json()["error"]["kind"] == "validation_error"

    r = client.post(f"/api/orders?userId={10**20}")
    assert r.status_code == 422
    assert client.get(f"/api/cart/{uid}").json() == []
