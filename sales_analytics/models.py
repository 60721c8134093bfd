from pydantic import BaseModel, ConfigDict, Field

# Ids and SKUs may arrive as numbers; they are lookup keys, so keep them as strings
_INPUT_CONFIG = ConfigDict(coerce_numbers_to_str=True)


# ── Input models ─────────────────────────────────────────────────────────────

class Seller(BaseModel):
    model_config = _INPUT_CONFIG

    id: str
    first_name: str
    last_name: str


class Product(BaseModel):
    model_config = _INPUT_CONFIG

    sku: str
    purchase_price: float  # cost basis per unit


class LineItem(BaseModel):
    model_config = _INPUT_CONFIG

    sku: str
    quantity: int
    sale_price: float
    discount: float = 0.0  # percent, e.g. 15 for 15 %


class PurchaseRecord(BaseModel):
    model_config = _INPUT_CONFIG

    seller_id: str
    total_amount: float = 0.0
    items: list[LineItem] = Field(default_factory=list)


class SalesData(BaseModel):
    sellers: list[Seller]
    products: list[Product]
    purchase_records: list[PurchaseRecord]


# ── Aggregation state ────────────────────────────────────────────────────────

class SellerStats(BaseModel):
    """Running totals for one seller, mutated only by the aggregation pass."""

    id: str
    name: str
    revenue: float = 0.0
    profit: float = 0.0
    sales_count: int = 0
    # insertion order matters: ties in the top-products list keep it
    products_sold: dict[str, int] = Field(default_factory=dict)
    bonus: float = 0.0
    top_products: list["TopProduct"] = Field(default_factory=list)


# ── Response models ──────────────────────────────────────────────────────────

class TopProduct(BaseModel):
    model_config = ConfigDict(frozen=True)

    sku: str
    quantity: int


class SellerReport(BaseModel):
    model_config = ConfigDict(frozen=True)

    seller_id: str
    name: str
    revenue: float
    profit: float
    sales_count: int
    top_products: list[TopProduct]
    bonus: float


SellerStats.model_rebuild()
