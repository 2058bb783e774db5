"""Dataclasses for hotels, room rates and reservation requests returned by EAN."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, Iterable, List, Optional

if TYPE_CHECKING:  # pragma: no cover
    from ean_hotels.services.hotel_client import HotelClient, Result
    from ean_hotels.tasks.search_payloads import DateLike, RoomOccupancy


class Amenity(enum.IntFlag):
    """Hotel features as encoded in the ``amenityMask`` bitmask."""

    BUSINESS_CENTER = 1
    FITNESS_CENTER = 1 << 1
    HOT_TUB = 1 << 2
    INTERNET_ACCESS = 1 << 3
    KIDS_ACTIVITIES = 1 << 4
    KITCHEN = 1 << 5
    PETS_ALLOWED = 1 << 6
    SWIMMING_POOL = 1 << 7
    RESTAURANT = 1 << 8
    SPA = 1 << 9
    WHIRLPOOL_BATH = 1 << 10
    BREAKFAST = 1 << 11
    BABYSITTING = 1 << 12
    JACUZZI = 1 << 13
    PARKING = 1 << 14
    ROOM_SERVICE = 1 << 15
    ACCESSIBLE_PATH = 1 << 16
    ACCESSIBLE_BATHROOM = 1 << 17
    ROLL_IN_SHOWER = 1 << 18
    HANDICAPPED_PARKING = 1 << 19
    IN_ROOM_ACCESSIBILITY = 1 << 20
    DEAF_ACCESSIBILITY = 1 << 21
    BRAILLE_OR_RAISED_SIGNAGE = 1 << 22
    FREE_AIRPORT_SHUTTLE = 1 << 23
    INDOOR_POOL = 1 << 24
    OUTDOOR_POOL = 1 << 25
    EXTENDED_PARKING = 1 << 26
    FREE_PARKING = 1 << 27

    @property
    def label(self) -> str:
        return (self.name or "").lower()


@dataclass(frozen=True, slots=True)
class Promotion:
    id: Any
    description: Optional[str] = None
    details: Optional[str] = None

    def to_dict(self) -> dict[str, object]:
        return {"id": self.id, "description": self.description, "details": self.details}


@dataclass(frozen=True, slots=True)
class CreditCard:
    type: str
    number: str
    csv: str
    expiration: str  # MM/YYYY


@dataclass(frozen=True, slots=True)
class RoomGuest:
    """Occupancy of a searched room plus the adult checking in to it."""

    adults: int
    first_name: str
    last_name: str
    children: List[int] = field(default_factory=list)
    bed_type: Optional[str] = None
    smoking_preference: Optional[str] = None
    number_of_beds: Optional[int] = None
    frequent_guest_id: Optional[str] = None
    itinerary_id: Optional[int] = None
    special_info: Optional[str] = None
    affiliate_confirmation_id: Optional[str] = None
    affiliate_customer_id: Optional[str] = None

    def __post_init__(self) -> None:
        if self.special_info and len(self.special_info) > 256:
            raise ValueError("special_info is limited to 256 characters")
        if self.affiliate_confirmation_id and len(self.affiliate_confirmation_id) > 36:
            raise ValueError("affiliate_confirmation_id is limited to 36 characters")


@dataclass(frozen=True, slots=True)
class ReservationRequest:
    """Guest, billing and per-room details needed to book a quoted room.

    ``itinerary_id`` on a :class:`RoomGuest` is only for resubmitting after a
    credit card validation error, so a duplicate itinerary is not created.
    """

    first_name: str
    last_name: str
    email: str
    card: CreditCard
    address: List[str]
    city: str
    country: str
    postal_code: str
    rooms: List[RoomGuest]
    home_phone: Optional[str] = None
    work_phone: Optional[str] = None
    extension: Optional[str] = None
    fax_phone: Optional[str] = None
    company: Optional[str] = None
    emails: List[str] = field(default_factory=list)
    state: Optional[str] = None

    def __post_init__(self) -> None:
        if not 1 <= len(self.address) <= 3:
            raise ValueError("address must have between one and three lines")
        if self.extension and len(self.extension) > 5:
            raise ValueError("extension is limited to 5 characters")
        if not self.rooms:
            raise ValueError("at least one room is required")


@dataclass(frozen=True, slots=True)
class Room:
    """A priced room option returned by an availability search."""

    room_type_code: Optional[str]
    rate_code: Optional[str]
    rate_key: Optional[str]
    max_occupancy: Optional[int] = None
    quoted_occupancy: Optional[int] = None
    minimum_age: Optional[int] = None
    description: Optional[str] = None
    promotion: Optional[Promotion] = None
    allotment: Optional[int] = None
    available: Optional[bool] = None
    restricted: Optional[bool] = None
    expedia_id: Optional[Any] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def reserve(self, reservation: ReservationRequest) -> "Result":
        """Book this room using its ``rate_key``.

        The booking endpoint is not wired up yet; only the request shape exists.
        """
        raise NotImplementedError("Room reservations are not supported by this client yet")

    def to_dict(self) -> dict[str, object]:
        return {
            "room_type_code": self.room_type_code,
            "rate_code": self.rate_code,
            "rate_key": self.rate_key,
            "max_occupancy": self.max_occupancy,
            "quoted_occupancy": self.quoted_occupancy,
            "minimum_age": self.minimum_age,
            "description": self.description,
            "promotion": self.promotion.to_dict() if self.promotion else None,
            "allotment": self.allotment,
            "available": self.available,
            "restricted": self.restricted,
            "expedia_id": self.expedia_id,
        }


@dataclass(frozen=True, slots=True)
class Hotel:
    """Hotel summary as returned by the list endpoint."""

    id: Any
    name: Optional[str]
    address: Optional[str] = None
    city: Optional[str] = None
    province: Optional[str] = None
    postal: Optional[str] = None
    country: Optional[str] = None
    airport: Optional[str] = None
    category: Optional[int] = None
    rating: Optional[float] = None
    confidence_rating: Optional[int] = None
    amenities: FrozenSet[Amenity] = frozenset()
    tripadvisor_rating: Optional[float] = None
    location_description: Optional[str] = None
    short_description: Optional[str] = None
    high_rate: Optional[float] = None
    low_rate: Optional[float] = None
    currency: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    proximity_distance: Optional[float] = None
    proximity_unit: Optional[str] = None
    in_destination: Optional[bool] = None
    thumbnail_path: Optional[str] = None
    ian_url: Optional[str] = None
    rooms: Optional[List[Room]] = None
    raw: Dict[str, Any] = field(default_factory=dict, repr=False, compare=False)

    def has_amenity(self, amenity: Amenity) -> bool:
        return amenity in self.amenities

    def search_rooms(
        self,
        client: "HotelClient",
        *,
        arrival: "DateLike",
        departure: "DateLike",
        rooms: Iterable["RoomOccupancy"],
        include_details: Optional[bool] = None,
        fee_breakdown: Optional[bool] = None,
    ) -> "Result":
        """Search availability for this hotel only; the result value is a list of Rooms."""
        return client.room_search(
            self.id,
            arrival=arrival,
            departure=departure,
            rooms=rooms,
            include_details=include_details,
            fee_breakdown=fee_breakdown,
        )

    def to_dict(self) -> dict[str, object]:
        return {
            "id": self.id,
            "name": self.name,
            "address": self.address,
            "city": self.city,
            "province": self.province,
            "postal": self.postal,
            "country": self.country,
            "airport": self.airport,
            "category": self.category,
            "rating": self.rating,
            "confidence_rating": self.confidence_rating,
            "amenities": sorted(amenity.label for amenity in self.amenities),
            "tripadvisor_rating": self.tripadvisor_rating,
            "location_description": self.location_description,
            "short_description": self.short_description,
            "high_rate": self.high_rate,
            "low_rate": self.low_rate,
            "currency": self.currency,
            "latitude": self.latitude,
            "longitude": self.longitude,
            "proximity_distance": self.proximity_distance,
            "proximity_unit": self.proximity_unit,
            "in_destination": self.in_destination,
            "thumbnail_path": self.thumbnail_path,
            "ian_url": self.ian_url,
            "rooms": [room.to_dict() for room in self.rooms] if self.rooms is not None else None,
        }

    @classmethod
    def from_iterable(cls, records: Iterable["Hotel"]) -> List[dict[str, object]]:
        return [record.to_dict() for record in records]
