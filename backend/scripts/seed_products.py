#!/usr/bin/env python3
"""
Seed the catalogue from a JSON file.

Accepts either a list of entries or an object with an "items" list. Each entry
needs a name ("name" or "title") and a price ("price" or "amount", in currency
units). Entries that fail catalogue validation are reported and skipped.

Usage:
    python scripts/seed_products.py --file products.json
"""
import argparse
import json
import os
import sys

# allow running from repo/scripts
sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from storefront.db import SessionLocal, init_db
from storefront.exceptions import ValidationError
from storefront.services.catalog_service import CatalogService
from storefront.utils.logging import get_logger

log = get_logger("seed_products")

DEFAULT_PRODUCTS = [
    {"name": "Tea 100g", "price": "3.00"},
    {"name": "Coffee 200g", "price": "6.00"},
    {"name": "Mug", "price": "7.25"},
]


def _normalize_entry(entry):
    name = entry.get("name") or entry.get("title") or ""
    price = entry.get("price", entry.get("amount"))
    return name, price


def load_entries(path):
    if path is None:
        return DEFAULT_PRODUCTS
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, dict):
        return data.get("items") if isinstance(data.get("items"), list) else list(data.values())
    if isinstance(data, list):
        return data
    raise ValueError(f"Unsupported JSON shape in {path}")


def seed(entries):
    init_db()
    db = SessionLocal()
    created = 0
    try:
        svc = CatalogService(db)
        for entry in entries:
            name, price = _normalize_entry(entry)
            try:
                svc.add_product(name, price)
                created += 1
            except ValidationError as e:
                log.warning("Skipping %r: %s", entry, e.message)
    finally:
        db.close()
    log.info("Seeded %s products", created)
    return created


if __name__ == "__main__":
    parser = argparse.ArgumentParser()
    parser.add_argument("--file", "-f", default=None, help="Path to a JSON list of products")
    args = parser.parse_args()
    if args.file and not os.path.exists(args.file):
        print("File not found:", args.file)
        sys.exit(1)
    seed(load_entries(args.file))
