from decimal import Decimal

import pytest

from storefront.exceptions import ProductNotFound, ValidationError
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService, normalize_price
from storefront.services.identity_service import IdentityService


def test_add_and_list_products(db):
    svc = CatalogService(db)
    a = svc.add_product("  Tea 100g ", "3.00")
    b = svc.add_product("Coffee 200g", Decimal("6"))

    assert a.name == "Tea 100g"
    assert b.price == Decimal("6.00")
    assert [p.id for p in svc.list_products()] == [a.id, b.id]
    assert svc.get_product(a.id).name == "Tea 100g"


def test_zero_price_is_allowed(db):
    assert CatalogService(db).add_product("Freebie", "0").price == Decimal("0.00")


@pytest.mark.parametrize("price", ["-0.01", "1.005", "abc", "NaN", "Infinity", None, "10000000000.00"])
def test_bad_prices_are_rejected_before_persisting(db, price):
    svc = CatalogService(db)
    with pytest.raises(ValidationError):
        svc.add_product("Broken", price)
    assert svc.list_products() == []


@pytest.mark.parametrize("name", ["", "   ", None, "n" * 257])
def test_bad_names_are_rejected(db, name):
    with pytest.raises(ValidationError):
        CatalogService(db).add_product(name, "1.00")


def test_normalize_price_handles_floats_exactly():
    assert normalize_price(5.5) == Decimal("5.50")
    assert normalize_price(0.1) == Decimal("0.10")


def test_get_missing_product(db):
    with pytest.raises(ProductNotFound):
        CatalogService(db).get_product(999)


def _setup(db):
    uid = IdentityService(db).register("alice", "pw").id
    pid = CatalogService(db).add_product("Mug", "7.25").id
    return uid, pid


def test_add_item_inserts_rows(db):
    uid, pid = _setup(db)
    cart = CartService(db)
    first = cart.add_item(uid, pid, 2)
    second = cart.add_item(uid, pid, 1)

    assert first.id != second.id
    assert [(it.product_id, it.quantity) for it in cart.list_items(uid)] == [(pid, 2), (pid, 1)]


@pytest.mark.parametrize("qty", [0, -1, True, 1.5])
def test_non_positive_quantity_rejected(db, qty):
    uid, pid = _setup(db)
    cart = CartService(db)
    with pytest.raises(ValidationError):
        cart.add_item(uid, pid, qty)
    assert cart.list_items(uid) == []


def test_unknown_product_rejected(db):
    uid, pid = _setup(db)
    with pytest.raises(ValidationError):
        CartService(db).add_item(uid, pid + 100, 1)


def test_unknown_user_rejected(db):
    uid, pid = _setup(db)
    with pytest.raises(ValidationError):
        CartService(db).add_item(uid + 100, pid, 1)


def test_list_items_for_user_without_cart(db):
    assert CartService(db).list_items(12345) == []


@pytest.mark.parametrize("qty", [10_001, 10**20])
def test_oversized_quantity_rejected(db, qty):
    uid, pid = _setup(db)
    cart = CartService(db)
    with pytest.raises(ValidationError):
        cart.add_item(uid, pid, qty)
    assert cart.list_items(uid) == []


@pytest.mark.parametrize("bad_id", [0, -3, 2**31, 10**20])
def test_ids_outside_integer_range_rejected(db, bad_id):
    uid, pid = _setup(db)
    cart = CartService(db)
    with pytest.raises(ValidationError):
        cart.add_item(bad_id, pid, 1)
    with pytest.raises(ValidationError):
        cart.add_item(uid, bad_id, 1)
    with pytest.raises(ValidationError):
        cart.list_items(bad_id)
    with pytest.raises(ValidationError):
        CatalogService(db).get_product(bad_id)
