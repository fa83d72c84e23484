from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, StrictBool
from pydantic.alias_generators import to_camel


class MenuItemWrite(BaseModel):
    """Body of POST /menu and PUT /menu/{id}: a full replace of the mutable fields."""

    name: str = Field(min_length=1)
    description: str = Field(min_length=1)
    # 0 and negative prices are accepted; null, missing, NaN and infinity are not
    price: float = Field(strict=True, allow_inf_nan=False)
    available: StrictBool

    model_config = ConfigDict(extra="ignore")


class MenuItemResponse(BaseModel):
    id: str
    name: str
    description: str
    # Stored as Numeric(10, 2); the Decimal read back is rendered as a JSON number
    price: float
    available: bool
    created_at: datetime

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class DeleteResponse(BaseModel):
    success: bool = True
