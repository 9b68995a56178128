"""
Supabase client factory.

The review pipeline writes shared catalogue data (products and their
sources) together with the originating chat record. These writes are
performed server-side with the service role key, so the client is created
once at startup and injected into the repository layer.

SECURITY RULES:
1. NEVER expose the service role key to clients or logs
2. NEVER accept table names or filters from request bodies
"""

import logging
from typing import Optional

from backend.config import settings
from supabase import Client, create_client

logger = logging.getLogger(__name__)


def get_service_role_client(
    supabase_url: Optional[str] = None,
    service_role_key: Optional[str] = None,
) -> Client:
    """
    Create a Supabase client with service_role privileges.

    Args:
        supabase_url: Project URL. Defaults to settings.SUPABASE_URL.
        service_role_key: Service role key. Defaults to
            settings.SUPABASE_SERVICE_ROLE_KEY.

    Returns:
        A Supabase client with service_role privileges (bypasses RLS).

    Raises:
        ValueError: If the URL or key is not configured.
    """
    url = supabase_url or settings.SUPABASE_URL
    key = service_role_key or settings.SUPABASE_SERVICE_ROLE_KEY

    if not url or not key:
        raise ValueError(
            "SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY must be configured "
            "to create the Supabase client."
        )

    client: Client = create_client(supabase_url=url, supabase_key=key)

    logger.debug("Created service role Supabase client")

    return client
