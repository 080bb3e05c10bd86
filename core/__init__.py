# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the business logic behind the API:
# - models/: Pydantic schemas for request validation
# - services/: Product operations and the order placement workflow
# - notifications.py: Order confirmation email rendering
#
# Services receive their Supabase client and mailer as arguments.
# This keeps the logic testable with fakes.
# =============================================================================
