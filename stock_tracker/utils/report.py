# stock_tracker/utils/report.py
import re
import uuid
from datetime import datetime, timezone
from typing import Iterable, Optional, Union

from stock_tracker.config import settings
from stock_tracker.schemas.product import Product
from stock_tracker.schemas.reports import ReportDocument, ReportRow, StatisticsSnapshot
from stock_tracker.utils.catalog import primary_quantity


def build_report(
    products: Iterable[Product],
    statistics: StatisticsSnapshot,
    generated_by: Optional[str] = None,
    warehouse_id: Optional[Union[int, str]] = None,
    generated_at: Optional[datetime] = None,
) -> ReportDocument:
    """Assembles the stock report: headline metrics plus one row per product."""
    rows = tuple(
        ReportRow(
            name=p.name,
            type=p.type,
            price=p.price,
            quantity=primary_quantity(p),
        )
        for p in products
    )
    return ReportDocument(
        generated_at=generated_at or datetime.now(timezone.utc),
        total_products=statistics.total_products,
        out_of_stock=statistics.out_of_stock,
        low_stock=statistics.low_stock,
        total_value=statistics.total_value,
        rows=rows,
        currency=settings.CURRENCY,
        warehouse_id=warehouse_id,
        generated_by=generated_by,
    )

def report_filename(report: ReportDocument) -> str:
    return f"stock_report_{report.generated_at.strftime('%Y-%m-%d')}.pdf"

def report_storage_name(report: ReportDocument) -> str:
    """Name of the stored PDF, unique per export and warehouse."""
    warehouse = re.sub(r"[^A-Za-z0-9_-]", "_", str(report.warehouse_id)) if report.warehouse_id is not None else "all"
    stamp = report.generated_at.strftime("%Y-%m-%d_%H%M%S")
    return f"stock_report_{warehouse}_{stamp}_{uuid.uuid4().hex[:8]}.pdf"
