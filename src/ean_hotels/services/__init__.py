"""Service clients for the EAN hotel API."""

from .hotel_client import HotelClient, Result, SearchOutcome

__all__ = [
    "HotelClient",
    "Result",
    "SearchOutcome",
]
