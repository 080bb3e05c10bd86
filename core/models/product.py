# =============================================================================
# core/models/product.py - Product Schemas
# =============================================================================
# These models define the API contract for product operations:
# - ProductCreate: Input for POST /products
# - ProductUpdate: Partial input for PUT /updateProducts/{id}
# - ProductFilter: Parsed query for GET /products/filter
# - ProductSort: Allowed sort keys
#
# Rows themselves are returned to clients exactly as the store sends them.
# =============================================================================

import math
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field

from app.exceptions import ValidationError


class ProductSort(str, Enum):
    """
    Sort orders accepted by the filter endpoint.

    Absent sort keeps the store's default ordering.
    """
    PRICE_ASC = "price_asc"
    PRICE_DESC = "price_desc"


class ProductCreate(BaseModel):
    """
    Schema for creating a product.

    Every field is declared optional so that a missing field is reported as
    "Missing product fields." (400) by the service, not by the framework.
    `price: 0` and `instock: false` are legitimate values.

    Example:
        {
            "name": "Desk Lamp",
            "category": "lighting",
            "price": 24.5,
            "instock": true
        }
    """

    name: str | None = Field(
        default=None,
        description="Product display name"
    )

    category: str | None = Field(
        default=None,
        description="Category used by the filter endpoint"
    )

    price: float | None = Field(
        default=None,
        ge=0,
        description="Unit price (non-negative)"
    )

    instock: bool | None = Field(
        default=None,
        description="Whether the product is currently available"
    )

    def missing_fields(self) -> list[str]:
        """Names of required fields that are absent, null or blank."""
        missing = []
        for field_name in ("name", "category"):
            value = getattr(self, field_name)
            if value is None or not value.strip():
                missing.append(field_name)
        for field_name in ("price", "instock"):
            if getattr(self, field_name) is None:
                missing.append(field_name)
        return missing

    def to_row(self) -> dict[str, Any]:
        """Row payload for the products table."""
        return {
            "name": self.name,
            "category": self.category,
            "price": self.price,
            "instock": self.instock,
        }


class ProductUpdate(BaseModel):
    """
    Schema for a partial product update.

    Only fields present in the request body are written; omitted fields are
    left untouched in the store.
    """

    name: str | None = None
    category: str | None = None
    price: float | None = Field(default=None, ge=0)
    instock: bool | None = None

    def to_update_fields(self) -> dict[str, Any]:
        """Fields explicitly sent by the client."""
        return self.model_dump(exclude_unset=True)


def _parse_price(raw: str | None, param: str) -> float | None:
    if raw is None or raw == "":
        return None
    try:
        value = float(raw)
    except ValueError:
        raise ValidationError(f"{param} must be a number", details={param: raw}) from None
    if not math.isfinite(value):
        raise ValidationError(f"{param} must be a finite number", details={param: raw})
    return value


class ProductFilter(BaseModel):
    """
    Conjunctive filter over the products table.

    Every predicate is optional; an absent predicate is not applied at all.
    """

    category: str | None = None
    instock: bool | None = None
    min_price: float | None = None
    max_price: float | None = None
    sort: ProductSort | None = None

    @classmethod
    def from_query(
        cls,
        category: str | None = None,
        instock: str | None = None,
        min_price: str | None = None,
        max_price: str | None = None,
        sort: str | None = None,
    ) -> "ProductFilter":
        """
        Build a filter from raw query-string values.

        - instock: "true" means True, any other present value means False
        - minPrice/maxPrice: must parse as finite numbers
        - sort: unknown values are ignored

        Raises:
            ValidationError: If a price bound is not a number
        """
        try:
            parsed_sort = ProductSort(sort) if sort else None
        except ValueError:
            parsed_sort = None

        return cls(
            category=category or None,
            instock=None if instock is None else instock == "true",
            min_price=_parse_price(min_price, "minPrice"),
            max_price=_parse_price(max_price, "maxPrice"),
            sort=parsed_sort,
        )
