from typing import Optional

from sales_analytics.models import Product, PurchaseRecord, SalesData, Seller


class DatasetStore:
    # input order, duplicates kept
    def __init__(self) -> None:
        self.sellers: list[Seller] = []
        self.products: list[Product] = []
        self.purchase_records: list[PurchaseRecord] = []

    # ── writes ────────────────────────────────────────────────────────────────

    def add_seller(self, seller: Seller) -> None:
        self.sellers.append(seller)

    def add_product(self, product: Product) -> None:
        self.products.append(product)

    def add_purchase_record(self, record: PurchaseRecord) -> None:
        self.purchase_records.append(record)

    def load(self, data: SalesData) -> None:
        self.clear()
        for seller in data.sellers:
            self.add_seller(seller)
        for product in data.products:
            self.add_product(product)
        for record in data.purchase_records:
            self.add_purchase_record(record)

    def clear(self) -> None:
        self.sellers.clear()
        self.products.clear()
        self.purchase_records.clear()

    # ── reads ─────────────────────────────────────────────────────────────────

    def get_seller(self, seller_id: str) -> Optional[Seller]:
        # last entry wins, matching the engine's seller index
        for seller in reversed(self.sellers):
            if seller.id == seller_id:
                return seller
        return None

    def list_sellers(self) -> list[Seller]:
        return list(self.sellers)

    def get_records_for_seller(self, seller_id: str) -> list[PurchaseRecord]:
        return [r for r in self.purchase_records if r.seller_id == seller_id]

    def snapshot(self) -> SalesData:
        return SalesData(
            sellers=list(self.sellers),
            products=list(self.products),
            purchase_records=list(self.purchase_records),
        )


# module-level singleton used by the app
store = DatasetStore()
