"""Catalog Models - Pydantic models for records delivered by the product source."""
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator

from storefront.money import parse_price


class ProductRating(BaseModel):
    """Aggregate customer rating as reported by the catalog."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    rate: float = 0.0
    count: int = 0


class Product(BaseModel):
    """Product model. Read-only; never mutated after loading."""
    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    title: str
    price: Decimal
    image: Optional[str] = None
    description: Optional[str] = None
    category: Optional[str] = None
    rating: Optional[ProductRating] = None

    @field_validator("id", mode="before")
    @classmethod
    def normalize_id(cls, v):
        # The Fake Store API sends integer ids; cart lines and URLs use text
        if isinstance(v, bool) or v is None or v == "":
            raise ValueError("product id must be a non-empty string or integer")
        return str(v)

    @field_validator("price", mode="before")
    @classmethod
    def convert_price_to_decimal(cls, v):
        return parse_price(v)


# Request bodies for the JSON API

class AddToCartRequest(BaseModel):
    product_id: str

    @field_validator("product_id", mode="before")
    @classmethod
    def normalize_id(cls, v):
        return str(v)


class RemoveFromCartRequest(BaseModel):
    product_id: str

    @field_validator("product_id", mode="before")
    @classmethod
    def normalize_id(cls, v):
        return str(v)
