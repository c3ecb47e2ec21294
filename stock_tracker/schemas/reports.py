# stock_tracker/schemas/reports.py
from datetime import datetime
from typing import Optional, Tuple, Union
from pydantic import BaseModel, ConfigDict

# Dashboard metrics derived from the full product snapshot
class StatisticsSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    total_products: int = 0
    out_of_stock: int = 0
    low_stock: int = 0
    total_value: float = 0.0
    stock_percentage: int = 0
    low_stock_percentage: int = 0
    out_of_stock_percentage: int = 0

# One product line of the stock report
class ReportRow(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    type: str
    price: Optional[float] = None
    quantity: int

# Report payload handed to the export sink
class ReportDocument(BaseModel):
    model_config = ConfigDict(frozen=True)

    generated_at: datetime
    total_products: int
    out_of_stock: int
    low_stock: int
    total_value: float
    rows: Tuple[ReportRow, ...]
    currency: str
    warehouse_id: Optional[Union[int, str]] = None
    generated_by: Optional[str] = None

# Terminal result of an export attempt
class ExportResult(BaseModel):
    ok: bool
    location: Optional[str] = None
    reason: Optional[str] = None

class ExportResponse(BaseModel):
    message: str
    path: str
    filename: str
