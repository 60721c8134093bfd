"""
Tests for the HTTP wrapper and the seeded demo dataset.
"""

import pytest
from fastapi.testclient import TestClient

from sales_analytics.main import app
from sales_analytics.seed_data import PRODUCT_COUNT, RECORD_COUNT, seed
from sales_analytics.store import DatasetStore


@pytest.fixture()
def client():
    # entering the context runs the lifespan, which seeds the store
    with TestClient(app) as c:
        yield c


SMALL_DATASET = {
    "sellers": [
        {"id": "S1", "first_name": "Ann", "last_name": "Lee"},
        {"id": "S2", "first_name": "Bo", "last_name": "Chan"},
    ],
    "products": [{"sku": "P1", "purchase_price": 10}],
    "purchase_records": [
        {"seller_id": "S1", "total_amount": 40,
         "items": [{"sku": "P1", "quantity": 2, "sale_price": 20, "discount": 0}]},
        {"seller_id": "S2", "total_amount": 90,
         "items": [{"sku": "P1", "quantity": 3, "sale_price": 30, "discount": 0}]},
    ],
}


class TestSeedData:
    def test_seed_is_deterministic(self):
        a, b = DatasetStore(), DatasetStore()
        seed(a)
        seed(b)
        assert a.snapshot() == b.snapshot()

    def test_seed_sizes(self):
        s = DatasetStore()
        seed(s)
        assert len(s.sellers) == 5
        assert len(s.products) == PRODUCT_COUNT
        assert len(s.purchase_records) == RECORD_COUNT


class TestEndpoints:
    def test_health(self, client):
        resp = client.get("/api/v1/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"

    def test_dataset_is_seeded_on_startup(self, client):
        resp = client.get("/api/v1/dataset")
        assert resp.json() == {
            "sellers": 5,
            "products": PRODUCT_COUNT,
            "purchase_records": RECORD_COUNT,
        }

    def test_stored_report_is_ranked(self, client):
        resp = client.get("/api/v1/reports/sellers")
        assert resp.status_code == 200
        sellers = resp.json()["sellers"]
        assert len(sellers) == 5
        profits = [s["profit"] for s in sellers]
        assert profits == sorted(profits, reverse=True)
        assert sum(s["sales_count"] for s in sellers) == RECORD_COUNT
        assert all(len(s["top_products"]) <= 10 for s in sellers)

    def test_posted_report(self, client):
        resp = client.post("/api/v1/reports/sellers", json=SMALL_DATASET)
        assert resp.status_code == 200
        sellers = resp.json()["sellers"]
        assert [s["seller_id"] for s in sellers] == ["S2", "S1"]
        assert sellers[0]["profit"] == 60.0
        assert sellers[0]["bonus"] == 9.0
        assert sellers[1]["top_products"] == [{"sku": "P1", "quantity": 2}]

    def test_posted_empty_collection_is_rejected(self, client):
        body = {**SMALL_DATASET, "purchase_records": []}
        resp = client.post("/api/v1/reports/sellers", json=body)
        assert resp.status_code == 422
        assert "purchase_records" in resp.json()["detail"]

    def test_replace_dataset(self, client):
        resp = client.put("/api/v1/dataset", json=SMALL_DATASET)
        assert resp.json() == {"sellers": 2, "products": 1, "purchase_records": 2}
        report = client.get("/api/v1/reports/sellers").json()["sellers"]
        assert [s["seller_id"] for s in report] == ["S2", "S1"]

    def test_get_seller(self, client):
        resp = client.get("/api/v1/sellers/seller_1")
        assert resp.status_code == 200
        body = resp.json()
        assert body["first_name"] == "Alexey"
        assert body["purchase_records"] > 0

    def test_unknown_seller_404(self, client):
        resp = client.get("/api/v1/sellers/NOPE")
        assert resp.status_code == 404

    def test_stored_report_keeps_duplicate_sellers(self, client):
        body = {
            "sellers": [
                {"id": "S1", "first_name": "First", "last_name": "Copy"},
                {"id": "S2", "first_name": "Other", "last_name": "One"},
                {"id": "S1", "first_name": "Second", "last_name": "Copy"},
            ],
            "products": [{"sku": "P1", "purchase_price": 10}],
            "purchase_records": [
                {"seller_id": "S1",
                 "items": [{"sku": "P1", "quantity": 1, "sale_price": 20}]},
            ],
        }
        posted = client.post("/api/v1/reports/sellers", json=body).json()["sellers"]

        resp = client.put("/api/v1/dataset", json=body)
        assert resp.json()["sellers"] == 3
        stored = client.get("/api/v1/reports/sellers").json()["sellers"]

        assert stored == posted
        assert [(s["seller_id"], s["name"]) for s in stored] == [
            ("S1", "Second Copy"), ("S1", "First Copy"), ("S2", "Other One"),
        ]
        # detail lookup follows the same last-entry-wins rule
        assert client.get("/api/v1/sellers/S1").json()["first_name"] == "Second"

    def test_reseed_restores_demo_data(self, client):
        client.put("/api/v1/dataset", json=SMALL_DATASET)
        resp = client.post("/api/v1/admin/seed")
        assert resp.json()["purchase_records"] == RECORD_COUNT
