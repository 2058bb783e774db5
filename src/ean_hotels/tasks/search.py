"""Search workflow used by the CLI."""
from __future__ import annotations

import logging
from typing import List

from ean_hotels.hotels.models import Hotel
from ean_hotels.services.hotel_client import HotelClient
from ean_hotels.tasks.search_payloads import SearchRequest

logger = logging.getLogger(__name__)


class SearchTask:
    """Execute a hotel search and return hits as JSON-ready dicts."""

    def __init__(self, request: SearchRequest) -> None:
        self.request = request

    def run(self, client: HotelClient) -> List[dict[str, object]]:
        logger.info(
            "Executing %s search (location=%s, ids=%s)",
            "availability" if self.request.is_availability else "dateless",
            self.request.location,
            self.request.ids or None,
        )
        result = client.find(self.request)
        hotels: List[Hotel] = list(result.value)
        logger.info("Search returned %s hotels", len(hotels))
        return Hotel.from_iterable(hotels)
