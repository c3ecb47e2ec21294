# stock_tracker/utils/catalog.py
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Sequence

from stock_tracker.schemas.product import Product, ProductOut

ALL_CATEGORIES = "all"

STATUS_OUT_OF_STOCK = "out_of_stock"
STATUS_LOW_STOCK = "low_stock"
STATUS_IN_STOCK = "in_stock"

# Products without edit history sort as if last edited at the epoch
EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


# ---- STOCK READS ----
def primary_quantity(product: Product) -> int:
    """Quantity at the primary (first) location, 0 when there is none."""
    if not product.stocks:
        return 0
    return product.stocks[0].quantity

def total_quantity(product: Product) -> int:
    return sum(s.quantity for s in product.stocks)

def is_out_of_stock(product: Product) -> bool:
    # True for an empty stock list as well
    return all(s.quantity == 0 for s in product.stocks)

def is_low_stock(product: Product) -> bool:
    """
    A product is low on stock when at least one location holds a positive
    quantity at or below its effective minimum. The stock-level minimum
    overrides the product-level one; with neither set the minimum is 0.
    """
    for s in product.stocks:
        threshold = s.min_quantity if s.min_quantity is not None else (product.min_quantity or 0)
        if 0 < s.quantity <= threshold:
            return True
    return False

def stock_status(product: Product) -> str:
    if is_out_of_stock(product):
        return STATUS_OUT_OF_STOCK
    if is_low_stock(product):
        return STATUS_LOW_STOCK
    return STATUS_IN_STOCK

def stock_value(product: Product) -> float:
    return (product.price or 0) * total_quantity(product)

def last_edited_at(product: Product) -> Optional[datetime]:
    if not product.edited_by:
        return None
    at = product.edited_by[-1].at
    if at is not None and at.tzinfo is None:
        # Naive timestamps from the API are UTC
        at = at.replace(tzinfo=timezone.utc)
    return at


# ---- FILTER / SORT ----
def _matches_query(product: Product, query: str) -> bool:
    if not query:
        return True
    # Barcodes are compared verbatim, names case-insensitively
    return query.lower() in product.name.lower() or query in product.barcode

def _matches_category(product: Product, category: str) -> bool:
    return category == ALL_CATEGORIES or product.type == category

def filter_and_sort(products: Iterable[Product], query: str = "", category: str = ALL_CATEGORIES) -> List[Product]:
    """
    Returns the products matching the search text and the selected category,
    most recently edited first. Ties keep their input order.
    """
    query = query or ""
    category = category or ALL_CATEGORIES
    ordered = sorted(products, key=lambda p: last_edited_at(p) or EPOCH, reverse=True)
    return [p for p in ordered if _matches_query(p, query) and _matches_category(p, category)]

def product_types(products: Iterable[Product]) -> List[str]:
    """Values for the category selector: "all" followed by each distinct type."""
    types = [ALL_CATEGORIES]
    for p in products:
        if p.type not in types:
            types.append(p.type)
    return types

def out_of_stock_products(products: Iterable[Product], limit: Optional[int] = None) -> List[Product]:
    found = [p for p in products if is_out_of_stock(p)]
    return found if limit is None else found[:limit]

def low_stock_products(products: Iterable[Product], limit: Optional[int] = None) -> List[Product]:
    found = [p for p in products if is_low_stock(p)]
    return found if limit is None else found[:limit]


# ---- SERIALIZATION ----
def to_product_out(product: Product) -> ProductOut:
    primary = product.stocks[0] if product.stocks else None
    min_quantity = primary.min_quantity if primary and primary.min_quantity is not None else product.min_quantity
    return ProductOut(
        id=product.id,
        name=product.name,
        barcode=product.barcode,
        type=product.type,
        price=product.price,
        image=product.image,
        quantity=primary_quantity(product),
        min_quantity=min_quantity,
        status=stock_status(product),
        last_edited_at=last_edited_at(product),
    )

def to_product_out_list(products: Sequence[Product]) -> List[ProductOut]:
    return [to_product_out(p) for p in products]
