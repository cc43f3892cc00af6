from datetime import datetime
import uuid
from pydantic import BaseModel, ConfigDict


class PricePerShareHistory(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: uuid.UUID
    namespace: str
    datetime: datetime
    price_per_share: float
    total_assets: int
    total_shares: int
