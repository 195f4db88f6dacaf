"""
Hammer a running server with concurrent checkouts (and optional cart adds) for
one user, then report how the cart was split between the resulting orders.

With an atomic checkout the non-zero order totals add up to exactly the value
of the items that left the cart.
"""
import argparse
import concurrent.futures
import os
from decimal import Decimal
from uuid import uuid4

import requests

BASE = os.environ.get("STOREFRONT_BASE", "http://127.0.0.1:8000")


def setup_user_and_product(price):
    username = f"load-{uuid4().hex[:8]}"
    requests.post(f"{BASE}/api/auth/register", json={"username": username, "password": "pw"}, timeout=10).raise_for_status()
    r = requests.post(f"{BASE}/api/auth/login", json={"username": username, "password": "pw"}, timeout=10)
    r.raise_for_status()
    token = r.json()["token"]
    me = requests.get(f"{BASE}/api/auth/me", headers={"Authorization": f"Bearer {token}"}, timeout=10)
    me.raise_for_status()
    product = requests.post(f"{BASE}/api/products", json={"name": "load-item", "price": price}, timeout=10)
    product.raise_for_status()
    return me.json()["userId"], product.json()["id"]


def add_task(i, user_id, product_id):
    try:
        r = requests.post(
            f"{BASE}/api/cart",
            json={"userId": user_id, "productId": product_id, "quantity": 1},
            timeout=20,
        )
        return (i, "add", r.status_code, r.json())
    except requests.RequestException as e:
        return (i, "add", "ERR", str(e))


def checkout_task(i, user_id):
    try:
        r = requests.post(f"{BASE}/api/orders", params={"userId": user_id}, timeout=20)
        return (i, "checkout", r.status_code, r.json())
    except requests.RequestException as e:
        return (i, "checkout", "ERR", str(e))


def run(workers, initial_items, price):
    user_id, product_id = setup_user_and_product(price)
    for i in range(initial_items):
        add_task(i, user_id, product_id)
    print(f"user={user_id} product={product_id} initial_items={initial_items} workers={workers}")

    with concurrent.futures.ThreadPoolExecutor(max_workers=workers * 2) as ex:
        futures = [ex.submit(checkout_task, i, user_id) for i in range(workers)]
        futures += [ex.submit(add_task, i, user_id, product_id) for i in range(workers)]
        results = [f.result() for f in futures]

    for r in results:
        print(r)

    totals = [Decimal(r[3]["totalAmount"]) for r in results if r[1] == "checkout" and r[2] == 200]
    added = sum(1 for r in results if r[1] == "add" and r[2] == 200)
    left = requests.get(f"{BASE}/api/cart/{user_id}", timeout=10).json()
    checked_out_value = sum(totals, Decimal("0"))
    expected_value = Decimal(price) * (initial_items + added - len(left))
    print("Order totals:", [str(t) for t in totals])
    print("Items left in cart:", len(left))
    print("Consistent:", checked_out_value == expected_value)


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--workers", type=int, default=8)
    parser.add_argument("--items", type=int, default=5)
    parser.add_argument("--price", default="2.50")
    args = parser.parse_args()
    run(args.workers, args.items, args.price)
