"""
Deterministic demo-data generator.

Produces:
  - 5 sellers
  - 20 products (purchase price 5-250)
  - 200 purchase records spread across the sellers
    - 1-5 line items each
    - ~60 % of items undiscounted, the rest at 5-30 % off
    - sale price = purchase price marked up 10-80 %
"""

import random

from sales_analytics.models import LineItem, Product, PurchaseRecord, Seller
from sales_analytics.store import DatasetStore

SEED = 42
RECORD_COUNT = 200
PRODUCT_COUNT = 20


def seed(store: DatasetStore) -> None:
    rng = random.Random(SEED)

    # ── sellers ──────────────────────────────────────────────────────────────
    sellers = [
        Seller(id="seller_1", first_name="Alexey", last_name="Petrov"),
        Seller(id="seller_2", first_name="Ivan", last_name="Smirnov"),
        Seller(id="seller_3", first_name="Maria", last_name="Ivanova"),
        Seller(id="seller_4", first_name="Olga", last_name="Kuznetsova"),
        Seller(id="seller_5", first_name="Dmitry", last_name="Sokolov"),
    ]
    for s in sellers:
        store.add_seller(s)

    # ── products ─────────────────────────────────────────────────────────────
    products = [
        Product(
            sku=f"SKU_{n:03d}",
            purchase_price=round(rng.uniform(5, 250), 2),
        )
        for n in range(1, PRODUCT_COUNT + 1)
    ]
    for p in products:
        store.add_product(p)

    # some sellers are busier than others, so the ranking is not a coin toss
    seller_weights = [5, 4, 3, 2, 1]

    # ── purchase records ─────────────────────────────────────────────────────
    for _ in range(RECORD_COUNT):
        seller = rng.choices(sellers, weights=seller_weights)[0]
        items: list[LineItem] = []
        for product in rng.sample(products, rng.randint(1, 5)):
            markup = rng.uniform(1.10, 1.80)
            discount = 0 if rng.random() < 0.60 else rng.choice([5, 10, 15, 20, 25, 30])
            items.append(LineItem(
                sku=product.sku,
                quantity=rng.randint(1, 10),
                sale_price=round(product.purchase_price * markup, 2),
                discount=discount,
            ))

        total_amount = sum(
            i.sale_price * i.quantity * (1 - i.discount / 100) for i in items
        )
        store.add_purchase_record(PurchaseRecord(
            seller_id=seller.id,
            total_amount=round(total_amount, 2),
            items=items,
        ))
