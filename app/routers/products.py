# =============================================================================
# app/routers/products.py - Product Endpoints
# =============================================================================
# CRUD, filter and search over the products table.
#
# /products/filter and /products/search are declared before /products/{id}
# so they are never captured as an id. Handlers are plain `def` because the
# Supabase client blocks; FastAPI runs them in its threadpool.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Path, Query
from pydantic import BaseModel, Field

from app.dependencies import ProductServiceDep
from core.models.product import ProductCreate, ProductFilter, ProductUpdate

router = APIRouter()


# =============================================================================
# Response Models
# =============================================================================

class ProductWriteResponse(BaseModel):
    """Response for create and update."""
    message: str = Field(..., examples=["Product added"])
    product: dict | None = Field(default=None, description="Row as stored")


class MessageResponse(BaseModel):
    """Response carrying only a message."""
    message: str = Field(..., examples=["Product deleted"])


# =============================================================================
# Endpoints
# =============================================================================

@router.get("/products")
def list_products(service: ProductServiceDep):
    """
    List all products.
    """
    return service.list_products()


@router.get("/products/filter")
def filter_products(
    service: ProductServiceDep,
    category: Annotated[str | None, Query(description="Exact category match")] = None,
    instock: Annotated[str | None, Query(description="'true' for available products")] = None,
    min_price: Annotated[str | None, Query(alias="minPrice", description="Lower price bound")] = None,
    max_price: Annotated[str | None, Query(alias="maxPrice", description="Upper price bound")] = None,
    sort: Annotated[str | None, Query(description="price_asc or price_desc")] = None,
):
    """
    Filter products.

    All given predicates must hold. Omitting every parameter returns the
    whole table.
    """
    filters = ProductFilter.from_query(
        category=category,
        instock=instock,
        min_price=min_price,
        max_price=max_price,
        sort=sort,
    )
    return service.filter_products(filters)


@router.get("/products/search")
def search_products(
    service: ProductServiceDep,
    name: Annotated[str | None, Query(description="Case-insensitive name fragment")] = None,
):
    """
    Search products by name.

    Without `name` this behaves like GET /products.
    """
    return service.search_products(name)


@router.get("/products/{product_id}")
def get_product(
    product_id: Annotated[str, Path(description="Product id")],
    service: ProductServiceDep,
):
    """
    Get a single product.
    """
    return service.get_product(product_id)


@router.post("/products", response_model=ProductWriteResponse, status_code=201)
def create_product(request: ProductCreate, service: ProductServiceDep):
    """
    Create a product.

    name, category, price and instock are all required.
    """
    product = service.create_product(request)
    return ProductWriteResponse(message="Product added", product=product)


@router.put("/updateProducts/{product_id}", response_model=ProductWriteResponse)
def update_product(
    product_id: Annotated[str, Path(description="Product id")],
    request: ProductUpdate,
    service: ProductServiceDep,
):
    """
    Update a product.

    Only the fields present in the body are changed.
    """
    product = service.update_product(product_id, request)
    return ProductWriteResponse(message="Product updated", product=product)


@router.delete("/products/{product_id}", response_model=MessageResponse)
def delete_product(
    product_id: Annotated[str, Path(description="Product id")],
    service: ProductServiceDep,
):
    """
    Delete a product.

    Deleting an id that does not exist is not an error.
    """
    service.delete_product(product_id)
    return MessageResponse(message="Product deleted")
