# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the Storefront API:
# - fakes.py: In-memory Supabase stand-in
# - test_models.py: Pydantic model validation and query parsing
# - test_product_service.py: Product operations against the fake store
# - test_order_service.py: Order placement workflow
# - test_mailer.py: SMTP client and confirmation rendering
# - test_api.py: HTTP surface through FastAPI's TestClient
#
# Run tests with: pytest
# =============================================================================
