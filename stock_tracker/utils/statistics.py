# stock_tracker/utils/statistics.py
import math
from typing import Iterable

from stock_tracker.schemas.product import Product
from stock_tracker.schemas.reports import StatisticsSnapshot
from stock_tracker.utils.catalog import is_low_stock, is_out_of_stock, stock_value


def _percentage(part: int, whole: int) -> int:
    if whole == 0:
        return 0
    # Round half up, 12.5 -> 13
    return int(math.floor(part / whole * 100 + 0.5))

def compute_statistics(products: Iterable[Product]) -> StatisticsSnapshot:
    """Aggregates dashboard metrics over the whole (unfiltered) snapshot."""
    products = list(products)

    total_products = len(products)
    out_of_stock = sum(1 for p in products if is_out_of_stock(p))
    low_stock = sum(1 for p in products if is_low_stock(p))
    total_value = round(sum(stock_value(p) for p in products), 2)

    return StatisticsSnapshot(
        total_products=total_products,
        out_of_stock=out_of_stock,
        low_stock=low_stock,
        total_value=total_value,
        stock_percentage=_percentage(total_products - out_of_stock, total_products),
        low_stock_percentage=_percentage(low_stock, total_products),
        out_of_stock_percentage=_percentage(out_of_stock, total_products),
    )
