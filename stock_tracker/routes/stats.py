# stock_tracker/routes/stats.py

from fastapi import APIRouter, Depends

from stock_tracker.store import ProductStore, get_store
from stock_tracker.schemas.reports import StatisticsSnapshot
from stock_tracker.utils.statistics import compute_statistics

router = APIRouter(
    prefix="/stats",
    tags=["Stats"]
)

# === Endpoint: Dashboard Summary ===

@router.get("/summary", response_model=StatisticsSnapshot)
def get_stats_summary(store: ProductStore = Depends(get_store)):
    # Recomputed from the current snapshot on every call
    return compute_statistics(store.products)
