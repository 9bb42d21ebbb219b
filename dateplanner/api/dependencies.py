"""API dependencies."""

from functools import lru_cache

from dateplanner.core.config import get_settings
from dateplanner.core.logger import get_logger
from dateplanner.services.in_memory_repository import InMemoryVenueRepository
from dateplanner.services.venue_repository import VenueRepositoryProtocol

logger = get_logger(__name__)


@lru_cache
def get_venue_repository() -> VenueRepositoryProtocol:
    """Provide the venue repository, seeded from ``VENUE_DATA_PATH`` when set."""
    data_path = get_settings().VENUE_DATA_PATH
    if not data_path:
        logger.warning("VENUE_DATA_PATH is not set; serving an empty venue repository.")
        return InMemoryVenueRepository()
    return InMemoryVenueRepository.from_json_file(data_path)
