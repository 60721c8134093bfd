from collections.abc import Mapping, Sequence
from typing import Literal, Optional, Union

from pydantic import ValidationError

from sales_analytics import log
from sales_analytics.config import Settings, settings as default_settings
from sales_analytics.models import (
    Product,
    PurchaseRecord,
    SalesData,
    Seller,
    SellerReport,
    SellerStats,
    TopProduct,
)
from sales_analytics.money import round_money
from sales_analytics.policies import (
    AnalysisOptions,
    BonusPolicy,
    RevenuePolicy,
    as_bonus_policy,
    as_revenue_policy,
)


class SalesAnalysisError(Exception):
    """Base class for every error raised by the sales analysis."""


class InvalidInputError(SalesAnalysisError, ValueError):
    """Raised when the input bundle is missing or a collection is absent or empty."""


class MissingPolicyError(SalesAnalysisError, TypeError):
    """Raised when the revenue or bonus policy was not supplied."""


class UnknownProductError(SalesAnalysisError, KeyError):
    """Raised when a line item references a SKU missing from the product list."""


_REQUIRED_COLLECTIONS = ("sellers", "products", "purchase_records")

# camelCase keys are what JSON callers tend to send
_OPTION_ALIASES = {
    "calculate_revenue": ("calculate_revenue", "calculateRevenue"),
    "calculate_bonus": ("calculate_bonus", "calculateBonus"),
}


# ── 1. Validation ────────────────────────────────────────────────────────────

def validate_input_data(data: Union[SalesData, Mapping, None]) -> SalesData:
    if data is None:
        log.warning("Sales analysis called without input data")
        raise InvalidInputError("Input data is required")

    if isinstance(data, SalesData):
        bundle = data
    elif isinstance(data, Mapping):
        for name in _REQUIRED_COLLECTIONS:
            value = data.get(name)
            if not isinstance(value, Sequence) or isinstance(value, (str, bytes)):
                log.warning("Input collection '%s' is missing or not a list", name)
                raise InvalidInputError(f"'{name}' must be a non-empty list")
        try:
            bundle = SalesData.model_validate(data)
        except ValidationError as exc:
            log.warning("Input data failed shape validation: %s", exc.error_count())
            raise InvalidInputError(f"Malformed input data: {exc}") from exc
    else:
        raise InvalidInputError(f"Unsupported input type: {type(data).__name__}")

    for name in _REQUIRED_COLLECTIONS:
        if not getattr(bundle, name):
            log.warning("Input collection '%s' is empty", name)
            raise InvalidInputError(f"'{name}' must be a non-empty list")

    return bundle


def _option(options: object, name: str) -> object:
    for key in _OPTION_ALIASES[name]:
        if isinstance(options, Mapping):
            value = options.get(key)
        else:
            value = getattr(options, key, None)
        if value is not None:
            return value
    return None


def validate_options(
    options: Union[AnalysisOptions, Mapping, None],
) -> tuple[RevenuePolicy, BonusPolicy]:
    if options is None:
        raise MissingPolicyError("Revenue and bonus policies are required")

    revenue_policy = as_revenue_policy(_option(options, "calculate_revenue"))
    bonus_policy = as_bonus_policy(_option(options, "calculate_bonus"))

    missing = [
        name
        for name, policy in (("calculate_revenue", revenue_policy), ("calculate_bonus", bonus_policy))
        if policy is None
    ]
    if missing:
        log.warning("Missing analysis policies: %s", ", ".join(missing))
        raise MissingPolicyError(f"Missing required policies: {', '.join(missing)}")

    return revenue_policy, bonus_policy


# ── 2. Accumulators & indexes ────────────────────────────────────────────────

def prepare_seller_stats(sellers: Sequence[Seller]) -> list[SellerStats]:
    return [
        SellerStats(id=seller.id, name=f"{seller.first_name} {seller.last_name}")
        for seller in sellers
    ]


def build_indexes(
    seller_stats: Sequence[SellerStats],
    products: Sequence[Product],
) -> tuple[dict[str, SellerStats], dict[str, Product]]:
    seller_index = {stats.id: stats for stats in seller_stats}
    product_index = {product.sku: product for product in products}

    if len(seller_index) != len(seller_stats):
        log.warning(
            "Duplicate seller ids in input: %d entries, %d unique (last one receives sales)",
            len(seller_stats),
            len(seller_index),
        )
    if len(product_index) != len(products):
        log.warning(
            "Duplicate product SKUs in input: %d entries, %d unique (last one wins)",
            len(products),
            len(product_index),
        )

    log.debug("Indexed %d sellers and %d products", len(seller_index), len(product_index))
    return seller_index, product_index


# ── 3. Aggregation pass ──────────────────────────────────────────────────────

def process_purchase_records(
    records: Sequence[PurchaseRecord],
    seller_index: Mapping[str, SellerStats],
    product_index: Mapping[str, Product],
    revenue_policy: RevenuePolicy,
    on_unknown_product: Literal["skip", "raise"] = "skip",
) -> int:
    """Fold every record into its seller's accumulator, in input order.

    Records for unknown sellers are skipped whole. Returns the number of
    records that were applied.
    """
    applied = 0

    for record in records:
        stats = seller_index.get(record.seller_id)
        if stats is None:
            log.debug("Skipping purchase record for unknown seller '%s'", record.seller_id)
            continue

        stats.sales_count += 1
        applied += 1

        for item in record.items:
            product = product_index.get(item.sku)
            if product is None:
                if on_unknown_product == "raise":
                    log.warning("Line item references unknown SKU '%s'", item.sku)
                    raise UnknownProductError(f"Unknown product SKU: {item.sku}")
                log.warning("Skipping line item with unknown SKU '%s'", item.sku)
                continue

            revenue = revenue_policy.compute_item_revenue(item, product)
            cost = product.purchase_price * item.quantity
            profit = revenue - cost

            stats.revenue += revenue
            stats.profit += profit
            stats.products_sold[item.sku] = stats.products_sold.get(item.sku, 0) + item.quantity

    return applied


# ── 4. Ranking, bonus & top products ─────────────────────────────────────────

def rank_sellers(seller_stats: Sequence[SellerStats]) -> list[SellerStats]:
    # sorted() is stable, so equal profits keep seller-list order
    return sorted(seller_stats, key=lambda stats: stats.profit, reverse=True)


def top_products(products_sold: Mapping[str, int], limit: int = 10) -> list[TopProduct]:
    ranked = sorted(products_sold.items(), key=lambda entry: entry[1], reverse=True)
    return [TopProduct(sku=sku, quantity=quantity) for sku, quantity in ranked[:limit]]


def calculate_bonuses_and_top_products(
    ranked: Sequence[SellerStats],
    bonus_policy: BonusPolicy,
    top_limit: int = 10,
) -> None:
    total = len(ranked)
    for rank, stats in enumerate(ranked):
        stats.bonus = round_money(bonus_policy.compute_bonus(rank, total, stats))
        stats.top_products = top_products(stats.products_sold, top_limit)


# ── 5. Formatting ────────────────────────────────────────────────────────────

def format_result(ranked: Sequence[SellerStats]) -> list[SellerReport]:
    return [
        SellerReport(
            seller_id=stats.id,
            name=stats.name,
            revenue=round_money(stats.revenue),
            profit=round_money(stats.profit),
            sales_count=stats.sales_count,
            top_products=list(stats.top_products),
            bonus=stats.bonus,
        )
        for stats in ranked
    ]


# ── Entry point ──────────────────────────────────────────────────────────────

def analyze_sales_data(
    data: Union[SalesData, Mapping, None],
    options: Union[AnalysisOptions, Mapping, None],
    *,
    settings: Optional[Settings] = None,
) -> list[SellerReport]:
    config = settings or default_settings

    bundle = validate_input_data(data)
    revenue_policy, bonus_policy = validate_options(options)

    seller_stats = prepare_seller_stats(bundle.sellers)
    seller_index, product_index = build_indexes(seller_stats, bundle.products)

    applied = process_purchase_records(
        bundle.purchase_records,
        seller_index,
        product_index,
        revenue_policy,
        on_unknown_product=config.unknown_product_policy,
    )

    ranked = rank_sellers(seller_stats)
    calculate_bonuses_and_top_products(ranked, bonus_policy, config.top_products_limit)

    log.info(
        "Analyzed %d/%d purchase records across %d sellers",
        applied,
        len(bundle.purchase_records),
        len(ranked),
    )
    return format_result(ranked)
