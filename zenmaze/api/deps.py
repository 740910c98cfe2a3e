"""API dependencies for dependency injection."""

from typing import Annotated

from fastapi import Depends
from slowapi import Limiter
from slowapi.util import get_remote_address

from zenmaze.config import get_settings
from zenmaze.core import LevelCatalog
from zenmaze.services.records_service import RecordsService, get_records_service
from zenmaze.services.session_service import SessionService, get_session_service

settings = get_settings()

# Rate limiter shared by the app and the routes it guards
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)


def get_catalog(
    sessions: SessionService = Depends(get_session_service),
) -> LevelCatalog:
    """Get the level catalog shared with the session service."""
    return sessions.catalog


# Type aliases for cleaner route signatures
Sessions = Annotated[SessionService, Depends(get_session_service)]
Records = Annotated[RecordsService, Depends(get_records_service)]
Catalog = Annotated[LevelCatalog, Depends(get_catalog)]
