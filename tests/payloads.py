from __future__ import annotations

import json
from typing import Any


def hotel_summary(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "hotelId": 106347,
        "name": "Harborside Inn",
        "address1": "185 State Street",
        "city": "Boston",
        "stateProvinceCode": "MA",
        "postalCode": "02109",
        "countryCode": "US",
        "airportCode": "BOS",
        "propertyCategory": 1,
        "hotelRating": 3.0,
        "confidenceRating": 85,
        "amenityMask": 3,
        "tripAdvisorRating": 4.5,
        "locationDescription": "Near Faneuil Hall",
        "shortDescription": "Historic waterfront hotel",
        "highRate": 289.0,
        "lowRate": 199.0,
        "rateCurrencyCode": "USD",
        "latitude": 42.35906,
        "longitude": -71.05316,
        "proximityDistance": 0.3,
        "proximityUnit": "MI",
        "hotelInDestination": True,
        "thumbNailUrl": "/hotels/1000000/10000/9900/9873/9873_22_t.jpg",
        "deepLink": "http://travel.ian.com/index.jsp?hotelID=106347",
    }
    data.update(overrides)
    return data


def room_rate(**overrides: Any) -> dict[str, Any]:
    data: dict[str, Any] = {
        "roomTypeCode": "200127380",
        "rateCode": "201597620",
        "rateKey": "0ABAA81D-2EE5-4591-BA1B-C0CCCA1A1E84",
        "maxRoomOccupancy": 2,
        "quotedRoomOccupancy": 1,
        "minGuestAge": 0,
        "roomDescription": "Standard Room, 1 King Bed",
        "currentAllotment": 5,
        "propertyAvailable": True,
        "propertyRestricted": False,
        "expediaPropertyId": 9873,
    }
    data.update(overrides)
    return data


def list_body(summary: Any) -> str:
    return json.dumps({"HotelListResponse": {"HotelList": {"HotelSummary": summary}}})


def error_body(itinerary_id: Any = -1, **overrides: Any) -> str:
    error: dict[str, Any] = {
        "itineraryId": itinerary_id,
        "handling": "RECOVERABLE",
        "category": "DATA_VALIDATION",
        "presentationMessage": "Multiple locations found for the destination.",
        "verboseMessage": "Multiple locations found. Please refine the destination string.",
    }
    error.update(overrides)
    return json.dumps({"HotelListResponse": {"EanWsError": error}})
