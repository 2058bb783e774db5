"""Utilities to transform raw EAN list responses into Hotel and Room objects."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, NoReturn, Optional

from ean_hotels.core.errors import NO_RESERVATION_ID, APIError, ResponseFormatError

from .models import Amenity, Hotel, Promotion, Room

logger = logging.getLogger(__name__)

ENVELOPE_KEY = "HotelListResponse"
ERROR_KEY = "EanWsError"


def _as_list(value: Any) -> List[Any]:
    # The API returns a bare object when there is exactly one entry.
    if value is None:
        return []
    if isinstance(value, list):
        return value
    return [value]


def decode_amenities(mask: Optional[int]) -> frozenset[Amenity]:
    """Return every amenity whose bit is set in ``mask``."""
    if not mask:
        return frozenset()
    mask = int(mask)
    return frozenset(amenity for amenity in Amenity if mask & amenity.value)


def raise_api_error(error: Dict[str, Any]) -> NoReturn:
    itinerary_id = error.get("itineraryId")
    reservation_id = None
    # The id is passed through untouched; only the "no reservation" sentinel is filtered.
    if itinerary_id not in (None, NO_RESERVATION_ID, str(NO_RESERVATION_ID)):
        reservation_id = itinerary_id
        logger.warning("EAN error reported alongside itinerary %s", reservation_id)

    raise APIError(
        error.get("presentationMessage") or "EAN API returned an error",
        verbose_message=error.get("verboseMessage"),
        recoverability=error.get("handling"),
        raw=error,
        reservation_id=reservation_id,
    )


def parse_room(details: Dict[str, Any]) -> Room:
    promotion = None
    if details.get("promoId") is not None:
        promotion = Promotion(
            id=details["promoId"],
            description=details.get("promoDescription"),
            details=details.get("promoDetailText"),
        )
    return Room(
        room_type_code=details.get("roomTypeCode"),
        rate_code=details.get("rateCode"),
        rate_key=details.get("rateKey"),
        max_occupancy=details.get("maxRoomOccupancy"),
        quoted_occupancy=details.get("quotedRoomOccupancy"),
        minimum_age=details.get("minGuestAge"),
        description=details.get("roomDescription"),
        promotion=promotion,
        allotment=details.get("currentAllotment"),
        available=details.get("propertyAvailable"),
        restricted=details.get("propertyRestricted"),
        expedia_id=details.get("expediaPropertyId"),
        raw=details,
    )


def parse_rooms(room_details: Dict[str, Any]) -> List[Room]:
    return [parse_room(details) for details in _as_list(room_details.get("RoomRateDetails"))]


def build_hotel(data: Dict[str, Any]) -> Hotel:
    address = data.get("address1")
    if data.get("address2"):
        address = ", ".join(part for part in (address, data["address2"]) if part)

    rooms = None
    if data.get("RoomRateDetailsList"):
        rooms = parse_rooms(data["RoomRateDetailsList"])

    return Hotel(
        id=data.get("hotelId"),
        name=data.get("name"),
        address=address,
        city=data.get("city"),
        province=data.get("stateProvinceCode"),
        postal=data.get("postalCode"),
        country=data.get("countryCode"),
        airport=data.get("airportCode"),
        category=data.get("propertyCategory"),
        rating=data.get("hotelRating"),
        confidence_rating=data.get("confidenceRating"),
        amenities=decode_amenities(data.get("amenityMask")),
        tripadvisor_rating=data.get("tripAdvisorRating"),
        location_description=data.get("locationDescription"),
        short_description=data.get("shortDescription"),
        high_rate=data.get("highRate"),
        low_rate=data.get("lowRate"),
        currency=data.get("rateCurrencyCode"),
        latitude=data.get("latitude"),
        longitude=data.get("longitude"),
        # Older API revisions misspell this key.
        proximity_distance=data.get("proximityDistance", data.get("promixityDistance")),
        proximity_unit=data.get("proximityUnit"),
        in_destination=data.get("hotelInDestination"),
        thumbnail_path=data.get("thumbNailUrl"),
        ian_url=data.get("deepLink"),
        rooms=rooms,
        raw=data,
    )


def _load_envelope(body: str) -> Dict[str, Any]:
    try:
        payload = json.loads(body)
    except json.JSONDecodeError as exc:
        raise ResponseFormatError(f"Response body is not JSON: {exc}", body) from exc
    if not isinstance(payload, dict) or not isinstance(payload.get(ENVELOPE_KEY), dict):
        raise ResponseFormatError(f"Response is missing the {ENVELOPE_KEY} envelope", body)
    return payload[ENVELOPE_KEY]


def parse_hotel_list(body: str) -> List[Hotel]:
    """Parse a list response body into Hotels.

    Raises APIError when the envelope carries an ``EanWsError``.
    """
    root = _load_envelope(body)

    error = root.get(ERROR_KEY)
    if error is not None:
        raise_api_error(error)

    hotel_list = root.get("HotelList") or {}
    hotels = [build_hotel(data) for data in _as_list(hotel_list.get("HotelSummary"))]
    logger.debug("Parsed %s hotels from list response", len(hotels))
    return hotels
