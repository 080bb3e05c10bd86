# =============================================================================
# core/services/product_service.py - Product Business Logic
# =============================================================================
# Handles product CRUD, filtering and search against the products table.
# Separates HTTP concerns from database logic.
# =============================================================================

import logging
from typing import Any

from supabase import Client

from app.exceptions import NotFoundError, StoreError, ValidationError
from core.models.product import ProductCreate, ProductFilter, ProductSort, ProductUpdate
from lib.supabase_client import error_message, is_no_rows_error

logger = logging.getLogger(__name__)

PRODUCTS_TABLE = "products"


class ProductService:
    """
    Service for product operations.

    Provides a clean interface between API routes and the database.
    The Supabase client is passed in so tests can swap it for a fake.
    """

    def __init__(self, client: Client):
        self.client = client

    def _table(self):
        return self.client.table(PRODUCTS_TABLE)

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def list_products(self) -> list[dict[str, Any]]:
        """
        Fetch every product.

        Raises:
            StoreError: If the query fails
        """
        try:
            response = self._table().select("*").execute()
        except Exception as e:
            logger.error(f"Failed to list products: {e}")
            raise StoreError(error_message(e)) from e

        return response.data or []

    def get_product(self, product_id: str | int) -> dict[str, Any]:
        """
        Fetch one product by id.

        Raises:
            NotFoundError: If no single row matches or the lookup fails
        """
        try:
            response = (
                self._table()
                .select("*")
                .eq("id", product_id)
                .single()
                .execute()
            )
        except Exception as e:
            if not is_no_rows_error(e):
                # Malformed ids and store outages are reported as not found too
                logger.error(f"Failed to fetch product {product_id}: {error_message(e)}")
            raise NotFoundError(
                f"Product not found: {product_id}",
                details={"id": product_id},
            ) from e

        if not response.data:
            raise NotFoundError(f"Product not found: {product_id}", details={"id": product_id})

        return response.data

    def filter_products(self, filters: ProductFilter) -> list[dict[str, Any]]:
        """
        Fetch products matching every predicate in `filters`.

        Price sorts fall back to id so equal prices keep a stable order.

        Raises:
            StoreError: If the query fails
        """
        query = self._table().select("*")

        if filters.category is not None:
            query = query.eq("category", filters.category)

        if filters.instock is not None:
            query = query.eq("instock", filters.instock)

        if filters.min_price is not None:
            query = query.gte("price", filters.min_price)

        if filters.max_price is not None:
            query = query.lte("price", filters.max_price)

        if filters.sort is not None:
            query = query.order("price", desc=(filters.sort == ProductSort.PRICE_DESC))
            query = query.order("id")

        try:
            response = query.execute()
        except Exception as e:
            logger.error(f"Failed to filter products with {filters.model_dump()}: {e}")
            raise StoreError(error_message(e)) from e

        return response.data or []

    def search_products(self, name: str | None = None) -> list[dict[str, Any]]:
        """
        Case-insensitive substring search on product name.

        An absent or empty term returns every product.

        Raises:
            StoreError: If the query fails
        """
        if not name:
            return self.list_products()

        try:
            response = (
                self._table()
                .select("*")
                .ilike("name", f"%{name}%")
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to search products for '{name}': {e}")
            raise StoreError(error_message(e)) from e

        return response.data or []

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def create_product(self, product: ProductCreate) -> dict[str, Any]:
        """
        Insert one product.

        Returns:
            The inserted row

        Raises:
            ValidationError: If a required field is missing
            StoreError: If the insert fails
        """
        missing = product.missing_fields()
        if missing:
            raise ValidationError("Missing product fields.", details={"missing": missing})

        try:
            response = self._table().insert(product.to_row()).execute()
        except Exception as e:
            logger.error(f"Failed to create product: {e}")
            raise StoreError(error_message(e)) from e

        if not response.data:
            raise StoreError("Insert returned no data")

        created = response.data[0]
        logger.info(f"Created product: {created.get('id')}")
        return created

    def update_product(
        self,
        product_id: str | int,
        changes: ProductUpdate,
    ) -> dict[str, Any] | None:
        """
        Apply a partial update.

        Only fields present in `changes` are written. Matching zero rows is
        not an error.

        Returns:
            The updated row, or None if nothing matched

        Raises:
            StoreError: If the update fails
        """
        update_data = changes.to_update_fields()

        if not update_data:
            # Nothing to update
            try:
                return self.get_product(product_id)
            except NotFoundError:
                return None

        try:
            response = (
                self._table()
                .update(update_data)
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to update product {product_id}: {e}")
            raise StoreError(error_message(e)) from e

        if response.data:
            logger.info(f"Updated product: {product_id} fields={sorted(update_data)}")
            return response.data[0]

        logger.info(f"Update matched no product: {product_id}")
        return None

    def delete_product(self, product_id: str | int) -> int:
        """
        Delete product(s) with the given id.

        Returns:
            Number of rows removed (0 is not an error)

        Raises:
            StoreError: If the delete fails
        """
        try:
            response = (
                self._table()
                .delete()
                .eq("id", product_id)
                .execute()
            )
        except Exception as e:
            logger.error(f"Failed to delete product {product_id}: {e}")
            raise StoreError(error_message(e)) from e

        deleted = len(response.data or [])
        logger.info(f"Deleted product: {product_id} ({deleted} row(s))")
        return deleted
