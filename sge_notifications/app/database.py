import logging
from typing import Optional

from supabase import Client, create_client

from .config import Settings

logger = logging.getLogger(__name__)


def create_supabase_client(settings: Settings) -> Optional[Client]:
    """
    Create the Supabase client used for student and parent lookups.

    Returns None when the URL or service role key is not configured so the
    process can still start; lookups then behave as "not found".
    """
    if not settings.supabase_url or not settings.supabase_service_role_key:
        logger.error("Missing env vars: SUPABASE_URL or SUPABASE_SERVICE_ROLE_KEY")
        return None

    try:
        client = create_client(settings.supabase_url, settings.supabase_service_role_key)
    except Exception as e:
        logger.error(f"Failed to create Supabase client: {str(e)}")
        return None

    logger.info("Supabase client initialized")
    return client
