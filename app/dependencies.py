# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
# Tests replace them through app.dependency_overrides.
# =============================================================================

from typing import Annotated

from fastapi import Depends
from supabase import Client

from app.config import settings
from core.services.order_service import OrderService
from core.services.product_service import ProductService
from lib.mailer import Mailer
from lib.supabase_client import SupabaseClient


def get_supabase_client() -> Client:
    """
    Get Supabase client instance.

    Returns the process-wide client.
    """
    return SupabaseClient.get_client()


def get_mailer() -> Mailer:
    """Get a mailer configured from settings."""
    return Mailer.from_settings(settings)


SupabaseDep = Annotated[Client, Depends(get_supabase_client)]
MailerDep = Annotated[Mailer, Depends(get_mailer)]


def get_product_service(client: SupabaseDep) -> ProductService:
    return ProductService(client)


def get_order_service(client: SupabaseDep, mailer: MailerDep) -> OrderService:
    return OrderService(client, mailer, operator_email=settings.ORDER_NOTIFY_EMAIL)


# Type aliases for dependency injection
ProductServiceDep = Annotated[ProductService, Depends(get_product_service)]
OrderServiceDep = Annotated[OrderService, Depends(get_order_service)]
