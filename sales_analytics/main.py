from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException

from sales_analytics import log
from sales_analytics.engine import (
    InvalidInputError,
    UnknownProductError,
    analyze_sales_data,
)
from sales_analytics.models import SalesData
from sales_analytics.policies import default_options
from sales_analytics.seed_data import seed
from sales_analytics.store import store

VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Auto-seed on startup so the service is immediately usable
    store.clear()
    seed(store)
    log.info("Seeded demo dataset with %d purchase records", len(store.purchase_records))
    yield


app = FastAPI(
    title="Seller Sales Analytics",
    version=VERSION,
    description="Per-seller revenue, profit, top products and bonus report",
    lifespan=lifespan,
)


def _run_report(data: SalesData) -> dict:
    try:
        reports = analyze_sales_data(data, default_options())
    except (InvalidInputError, UnknownProductError) as exc:
        raise HTTPException(422, str(exc))
    return {"sellers": [r.model_dump() for r in reports]}


@app.get("/api/v1/health", summary="Liveness probe")
def health():
    return {"status": "ok", "version": VERSION}


# ── Dataset ──────────────────────────────────────────────────────────────────

@app.get("/api/v1/dataset", summary="Summarise the stored dataset")
def dataset_summary():
    return {
        "sellers": len(store.sellers),
        "products": len(store.products),
        "purchase_records": len(store.purchase_records),
    }


@app.put("/api/v1/dataset", summary="Replace the stored dataset")
def replace_dataset(data: SalesData):
    store.load(data)
    return dataset_summary()


@app.get("/api/v1/sellers", summary="List all sellers")
def list_sellers():
    return {"sellers": [s.model_dump() for s in store.list_sellers()]}


@app.get("/api/v1/sellers/{seller_id}", summary="Get seller details")
def get_seller(seller_id: str):
    seller = store.get_seller(seller_id)
    if not seller:
        raise HTTPException(404, f"Seller '{seller_id}' not found")
    return {
        **seller.model_dump(),
        "purchase_records": len(store.get_records_for_seller(seller_id)),
    }


# ── Reports ──────────────────────────────────────────────────────────────────

@app.get(
    "/api/v1/reports/sellers",
    summary="Seller report for the stored dataset",
)
def stored_report():
    return _run_report(store.snapshot())


@app.post(
    "/api/v1/reports/sellers",
    summary="Seller report for a posted dataset",
)
def posted_report(data: SalesData):
    return _run_report(data)


# ── Admin ─────────────────────────────────────────────────────────────────────

@app.post("/api/v1/admin/seed", summary="Re-seed demo data")
def reseed():
    store.clear()
    seed(store)
    return {
        "status": "seeded",
        "sellers": len(store.sellers),
        "products": len(store.products),
        "purchase_records": len(store.purchase_records),
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
