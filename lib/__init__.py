# =============================================================================
# lib/ - External Collaborator Clients
# =============================================================================
# This package contains the clients for services the API talks to:
# - supabase_client.py: Supabase (hosted Postgres) client and error helpers
# - mailer.py: SMTP client for transactional email
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.supabase_client import SupabaseClient, error_message, is_no_rows_error
from lib.mailer import Mailer, MailerError

__all__ = [
    # Supabase
    "SupabaseClient",
    "error_message",
    "is_no_rows_error",
    # Mail
    "Mailer",
    "MailerError",
]
