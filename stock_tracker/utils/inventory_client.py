# stock_tracker/utils/inventory_client.py
import httpx
import logging
from typing import List, Optional, Union

from stock_tracker.config import settings
from stock_tracker.schemas.product import Product
from stock_tracker.schemas.user import CurrentUser

logger = logging.getLogger(__name__)

class InventoryClient:
    def __init__(self, base_url: str = None, token: Optional[str] = None, transport: httpx.AsyncBaseTransport = None):
        # Remote inventory API configuration
        self.base_url = (base_url or settings.INVENTORY_API_URL).rstrip("/")
        self.token = token if token is not None else settings.INVENTORY_API_TOKEN
        self.timeout = settings.REQUEST_TIMEOUT
        # Swappable transport (tests use httpx.MockTransport)
        self.transport = transport

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get_json(self, path: str):
        url = f"{self.base_url}{path}"
        async with httpx.AsyncClient(transport=self.transport, timeout=self.timeout) as client:
            try:
                response = await client.get(url, headers=self._headers())
                response.raise_for_status()
                return response.json()
            except (httpx.RequestError, httpx.HTTPStatusError) as e:
                logger.error(f"Inventory API error on GET {path}: {e}")
                raise

    async def current_user(self) -> CurrentUser:
        # Identity of the signed-in user, including the warehouse they work in
        data = await self._get_json("/auth/me")
        return CurrentUser.model_validate(data)

    async def fetch_products(self, warehouse_id: Union[int, str]) -> List[Product]:
        data = await self._get_json(f"/warehouses/{warehouse_id}/products")
        # Accept either a bare list or an envelope {"items": [...]}
        if isinstance(data, dict):
            data = data.get("items") or data.get("products") or []
        products = [Product.model_validate(item) for item in data]
        logger.info("Fetched %d products for warehouse %s", len(products), warehouse_id)
        return products

inventory_client = InventoryClient()

def get_inventory_client() -> InventoryClient:
    return inventory_client
