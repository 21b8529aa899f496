"""
Pydantic models for API request structures.
"""
from pydantic import AliasChoices, BaseModel, Field


class ValidateRequest(BaseModel):
    """Request model for direct key/pin validation."""

    key: str = Field(
        ...,
        validation_alias=AliasChoices("key", "chave"),
        description="Primary numeric code printed on the proof of payment"
    )
    pin: str = Field(..., description="Secondary numeric code paired with the key")

    model_config = {
        "json_schema_extra": {
            "example": {
                "key": "414979709",
                "pin": "86612413"
            }
        }
    }
