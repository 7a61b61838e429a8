"""
==============================================================================
Product Models Module
==============================================================================

Pydantic model for catalog products.

==============================================================================
"""

from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator


class Product(BaseModel):
    """
    Product as returned by the catalog source.

    Products are immutable once fetched; a refresh replaces the whole list.

    Attributes:
        id: Unique document identifier
        name: Product display name
        slug: URL slug
        price: Unit price (non-negative)
        description: Long description
        category: Category name
        stock: Units available (non-negative)
        image: Image URL
    """

    model_config = ConfigDict(
        from_attributes=True,
        frozen=True,
        extra="ignore",
    )

    id: str = Field(..., min_length=1, description="Unique identifier")
    name: str = Field(..., description="Product name")
    slug: Optional[str] = Field(default=None, description="URL slug")
    price: Decimal = Field(default=Decimal("0"), ge=0, description="Unit price")
    description: str = Field(default="", description="Description")
    category: Optional[str] = Field(default=None, description="Category name")
    stock: int = Field(default=0, ge=0, description="Units in stock")
    image: Optional[str] = Field(default=None, description="Image URL")

    @field_validator("price", "stock", mode="before")
    @classmethod
    def missing_as_zero(cls, value: Any) -> Any:
        """Unset numeric fields in the content service read as zero."""
        return 0 if value is None else value

    @field_validator("name", "description", mode="before")
    @classmethod
    def missing_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("price", mode="before")
    @classmethod
    def price_from_float(cls, value: Any) -> Any:
        # str() keeps 99.99 as 99.99 instead of its binary expansion
        if isinstance(value, float):
            return str(value)
        return value

    @field_serializer("price", when_used="json")
    def serialize_price(self, price: Decimal) -> float:
        return float(price)

    @property
    def in_stock(self) -> bool:
        """True when at least one unit is available."""
        return self.stock > 0
