"""Hotel domain models and response parsing helpers."""

from .models import (
    Amenity,
    CreditCard,
    Hotel,
    Promotion,
    ReservationRequest,
    Room,
    RoomGuest,
)
from .normalizer import (
    build_hotel,
    decode_amenities,
    parse_hotel_list,
    parse_room,
    parse_rooms,
    raise_api_error,
)

__all__ = [
    "Amenity",
    "CreditCard",
    "Hotel",
    "Promotion",
    "ReservationRequest",
    "Room",
    "RoomGuest",
    "build_hotel",
    "decode_amenities",
    "parse_hotel_list",
    "parse_room",
    "parse_rooms",
    "raise_api_error",
]
