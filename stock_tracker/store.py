# stock_tracker/store.py
import logging
from typing import Awaitable, Callable, Iterable, Optional, Tuple, Union

from stock_tracker.schemas.product import Product

logger = logging.getLogger(__name__)

WarehouseId = Union[int, str]
FetchProducts = Callable[[WarehouseId], Awaitable[Iterable[Product]]]


class RefreshError(Exception):
    """The remote fetch failed; the previous snapshot is still in place."""

    def __init__(self, warehouse_id: WarehouseId, cause: Exception):
        super().__init__(f"Could not refresh products for warehouse {warehouse_id}: {cause}")
        self.warehouse_id = warehouse_id
        self.cause = cause


class ProductStore:
    """
    In-memory snapshot of the products of one warehouse.

    The snapshot is an immutable tuple replaced in a single assignment, so a
    reader holding it never sees a half-applied refresh.
    """

    def __init__(self, products: Iterable[Product] = ()):
        self._snapshot: Tuple[Tuple[Product, ...], int, Optional[WarehouseId]] = (tuple(products), 0, None)

    @property
    def products(self) -> Tuple[Product, ...]:
        return self._snapshot[0]

    @property
    def version(self) -> int:
        return self._snapshot[1]

    @property
    def warehouse_id(self) -> Optional[WarehouseId]:
        return self._snapshot[2]

    def replace(self, products: Iterable[Product], warehouse_id: Optional[WarehouseId] = None) -> None:
        self._snapshot = (tuple(products), self.version + 1, warehouse_id)

    async def refresh(self, fetch: FetchProducts, warehouse_id: WarehouseId) -> Tuple[Product, ...]:
        # Concurrent refreshes are not deduplicated; the last one to complete wins
        try:
            products = await fetch(warehouse_id)
        except Exception as e:
            logger.warning("Product refresh failed for warehouse %s, keeping %d cached products: %s",
                           warehouse_id, len(self.products), e)
            raise RefreshError(warehouse_id, e) from e

        self.replace(products, warehouse_id)
        logger.info("Product store refreshed: warehouse=%s products=%d version=%d",
                    warehouse_id, len(self.products), self.version)
        return self.products


product_store = ProductStore()

def get_store() -> ProductStore:
    return product_store
