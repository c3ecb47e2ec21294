# stock_tracker/schemas/product.py
from datetime import datetime
from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


# Read-only base: the engine never mutates what the remote API sent
class FrozenBase(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)


# Single entry of a product's edit history
class EditRecord(FrozenBase):
    at: Optional[datetime] = None
    user: Optional[Any] = None

    @field_validator("at", mode="before")
    @classmethod
    def _blank_timestamp_is_missing(cls, v):
        # Falsy timestamps sort as epoch start, like a missing one
        if v is None or (isinstance(v, str) and not v.strip()):
            return None
        return v


# Quantity held at one location; index 0 of Product.stocks is the primary one
class Stock(FrozenBase):
    quantity: int = Field(default=0, ge=0)
    min_quantity: Optional[int] = Field(default=None, ge=0, alias="minQuantity")
    location: Optional[Union[int, str]] = None

    @field_validator("quantity", mode="before")
    @classmethod
    def _missing_quantity_is_zero(cls, v):
        return 0 if v is None else v


class Product(FrozenBase):
    id: Union[int, str]
    name: str = ""
    barcode: str = ""
    type: str = ""
    price: Optional[float] = Field(default=None, ge=0)
    min_quantity: Optional[int] = Field(default=None, ge=0, alias="minQuantity")
    image: Optional[str] = None
    edited_by: List[EditRecord] = Field(default_factory=list, alias="editedBy")
    stocks: List[Stock] = Field(default_factory=list)

    @field_validator("name", "barcode", "type", mode="before")
    @classmethod
    def _coerce_text(cls, v):
        if v is None:
            return ""
        # Barcodes often arrive as JSON numbers
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v

    @field_validator("edited_by", "stocks", mode="before")
    @classmethod
    def _null_list_is_empty(cls, v):
        return [] if v is None else v


# Row shape returned to the product list screen
class ProductOut(BaseModel):
    id: Union[int, str]
    name: str
    barcode: str
    type: str
    price: Optional[float] = None
    image: Optional[str] = None
    quantity: int
    min_quantity: Optional[int] = None
    status: str
    last_edited_at: Optional[datetime] = None


# Paginated response for product listings
class ProductListPage(BaseModel):
    items: List[ProductOut]
    total: int
    page: int
    page_size: int
    total_pages: int
    page_labels: List[Union[int, str]]
    has_previous: bool
    has_next: bool


# Dashboard alert lists
class StockAlerts(BaseModel):
    out_of_stock: List[ProductOut]
    low_stock: List[ProductOut]
