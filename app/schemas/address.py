from pydantic import BaseModel, ConfigDict, Field
from typing import Optional


class AddAddressRequest(BaseModel):
    """
    Single comma-separated string: street, city, state, country, postal code.
    """
    combined_address: Optional[str] = Field(default=None, alias="combinedAddress")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"combinedAddress": "1 Main St, Springfield, IL, USA, 62704"}
        }
    )
