# stock_tracker/schemas/user.py
from typing import Optional, Union
from pydantic import BaseModel, ConfigDict, Field


# Identity of the signed-in user as reported by the inventory API
class CurrentUser(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Union[int, str]
    name: Optional[str] = None
    warehouse_id: Optional[Union[int, str]] = Field(default=None, alias="warehouseId")
