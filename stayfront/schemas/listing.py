"""
Pydantic schemas for listing-related payloads.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional
from pydantic import BaseModel, Field, field_serializer, model_validator


class Listing(BaseModel):
    id: int
    host_id: int
    host_name: Optional[str] = None
    title: str
    description: str = ""
    location: str = ""
    price_per_night: Decimal
    image_url: Optional[str] = None
    max_guests: int
    bedrooms: int = 0
    bathrooms: Decimal = Decimal(0)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("price_per_night", "bathrooms")
    def _decimal_as_number(self, value: Decimal) -> float:
        return float(value)


class ListingCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1, max_length=255)
    price_per_night: Decimal = Field(..., ge=0)
    image_url: str = ""
    max_guests: int = Field(1, ge=1)
    bedrooms: int = Field(1, ge=0)
    bathrooms: Decimal = Field(Decimal(1), ge=0)

    @field_serializer("price_per_night", "bathrooms")
    def _decimal_as_number(self, value: Decimal) -> float:
        return float(value)


class ListingSearch(BaseModel):
    """Search form. Field aliases are the query parameter names the API expects."""

    location: Optional[str] = None
    check_in: Optional[date] = Field(None, alias="checkIn")
    check_out: Optional[date] = Field(None, alias="checkOut")
    guests: Optional[int] = Field(None, ge=1)

    model_config = {"populate_by_name": True}

    @model_validator(mode="before")
    @classmethod
    def _blank_to_none(cls, data):
        # Empty form inputs arrive as ""
        if isinstance(data, dict):
            return {k: (None if v == "" else v) for k, v in data.items()}
        return data

    def to_query(self) -> dict[str, str]:
        """Non-empty parameters only, in the remote API's naming."""
        params = self.model_dump(by_alias=True, exclude_none=True, mode="json")
        return {key: str(value) for key, value in params.items() if value}
