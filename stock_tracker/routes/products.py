# stock_tracker/routes/products.py
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query
import httpx
import logging

from stock_tracker.store import ProductStore, RefreshError, get_store
from stock_tracker.schemas import product as product_schemas
from stock_tracker.utils.audit import write_log
from stock_tracker.utils.catalog import (
    ALL_CATEGORIES, filter_and_sort, low_stock_products, out_of_stock_products,
    product_types, to_product_out_list,
)
from stock_tracker.utils.inventory_client import InventoryClient, get_inventory_client
from stock_tracker.utils.pagination import ITEMS_PER_PAGE, paginate

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Products"])

# Number of products listed per alert block on the dashboard
DASHBOARD_ALERT_LIMIT = 3


# =========================
# PRODUCT LIST
# =========================
@router.get("/products", response_model=product_schemas.ProductListPage)
def list_products(
    q: str = Query("", description="Search by name or barcode"),
    category: str = Query(ALL_CATEGORIES, description="Product type or 'all'"),
    # Out-of-range pages are clamped, not rejected
    page: int = Query(1),
    store: ProductStore = Depends(get_store),
):
    matching = filter_and_sort(store.products, q, category)
    result = paginate(matching, page)

    return {
        "items": to_product_out_list(result.items),
        "total": result.total,
        "page": result.page,
        "page_size": ITEMS_PER_PAGE,
        "total_pages": result.total_pages,
        "page_labels": result.page_labels,
        "has_previous": result.has_previous,
        "has_next": result.has_next,
    }


# =========================
# HELPER ENDPOINTS
# =========================
@router.get("/products/unique/types", response_model=List[str])
def get_product_types(store: ProductStore = Depends(get_store)):
    return product_types(store.products)

@router.get("/products/alerts", response_model=product_schemas.StockAlerts)
def get_stock_alerts(
    limit: int = Query(DASHBOARD_ALERT_LIMIT, ge=1, le=100),
    store: ProductStore = Depends(get_store),
):
    products = store.products
    return {
        "out_of_stock": to_product_out_list(out_of_stock_products(products, limit)),
        "low_stock": to_product_out_list(low_stock_products(products, limit)),
    }


# =========================
# REFRESH
# =========================
@router.post("/products/refresh")
async def refresh_products(
    store: ProductStore = Depends(get_store),
    client: InventoryClient = Depends(get_inventory_client),
):
    try:
        user = await client.current_user()
    except (httpx.RequestError, httpx.HTTPStatusError) as e:
        raise HTTPException(status_code=502, detail=f"Could not load the current user: {e}")

    if user.warehouse_id is None:
        raise HTTPException(status_code=409, detail="Current user is not assigned to a warehouse")

    try:
        products = await store.refresh(client.fetch_products, user.warehouse_id)
    except RefreshError as e:
        write_log(user_id=user.id, action="PRODUCTS_REFRESH", resource="products",
                  status="FAILED", meta={"warehouse_id": user.warehouse_id})
        raise HTTPException(status_code=502, detail=f"Products could not be refreshed, showing cached data: {e.cause}")

    write_log(user_id=user.id, action="PRODUCTS_REFRESH", resource="products",
              meta={"warehouse_id": user.warehouse_id, "returned": len(products)})

    return {"message": "Products refreshed", "total": len(products), "version": store.version}
