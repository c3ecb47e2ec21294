# stock_tracker/routes/reports.py
from fastapi import APIRouter, Depends, HTTPException
from fastapi.responses import FileResponse

from stock_tracker.store import ProductStore, get_store
from stock_tracker.schemas.reports import ExportResponse, ReportDocument
from stock_tracker.utils.audit import write_log
from stock_tracker.utils.pdf import export_document
from stock_tracker.utils.report import build_report, report_filename
from stock_tracker.utils.statistics import compute_statistics

router = APIRouter(prefix="/reports", tags=["Reports"])

def _current_report(store: ProductStore) -> ReportDocument:
    products = store.products
    return build_report(products, compute_statistics(products), warehouse_id=store.warehouse_id)

# -----------------------------
# 1) Report payload
# -----------------------------
@router.get("/stock", response_model=ReportDocument)
def get_stock_report(store: ProductStore = Depends(get_store)):
    return _current_report(store)

# -----------------------------
# 2) PDF export
# -----------------------------
@router.post("/stock/pdf", response_model=ExportResponse)
def export_stock_report(store: ProductStore = Depends(get_store)):
    report = _current_report(store)
    result = export_document(report)
    if not result.ok:
        write_log(action="REPORT_EXPORT", resource="reports", status="FAILED", meta={"reason": result.reason})
        raise HTTPException(status_code=500, detail=result.reason)

    write_log(action="REPORT_EXPORT", resource="reports", meta={"path": result.location, "rows": len(report.rows)})
    return ExportResponse(message="PDF generated", path=result.location, filename=report_filename(report))

@router.get("/stock/download")
def download_stock_report(store: ProductStore = Depends(get_store)):
    # Always rendered from the current snapshot so the file matches the dashboard
    report = _current_report(store)
    result = export_document(report)
    if not result.ok:
        raise HTTPException(status_code=500, detail=result.reason)

    write_log(action="REPORT_DOWNLOAD", resource="reports", meta={"path": result.location})

    return FileResponse(
        path=result.location,
        media_type="application/pdf",
        filename=report_filename(report)
    )
