"""
Database access layer for the product review backend.

DO NOT define table schemas, migrations, or RLS policies here.
The tables written by the review pipeline (products, chats,
product_sources, chat_sources) are owned by the Supabase project.

Includes:
- Supabase client initialization
"""

from .client import get_service_role_client

__all__ = ["get_service_role_client"]
