from __future__ import annotations

import json

import pytest

from ean_hotels.core.errors import APIError, ResponseFormatError
from ean_hotels.hotels import (
    Amenity,
    CreditCard,
    ReservationRequest,
    RoomGuest,
    decode_amenities,
    parse_hotel_list,
)
from payloads import error_body, hotel_summary, list_body, room_rate


def test_amenity_bits_are_distinct_powers_of_two():
    values = [amenity.value for amenity in Amenity]
    assert len(values) == len(set(values)) == 28
    assert sorted(values) == [1 << bit for bit in range(28)]


@pytest.mark.parametrize(
    ("mask", "expected"),
    [
        (0, set()),
        (None, set()),
        (1, {Amenity.BUSINESS_CENTER}),
        (3, {Amenity.BUSINESS_CENTER, Amenity.FITNESS_CENTER}),
        (5, {Amenity.BUSINESS_CENTER, Amenity.HOT_TUB}),
        ((1 << 27) | (1 << 9), {Amenity.FREE_PARKING, Amenity.SPA}),
    ],
)
def test_decode_amenities(mask, expected):
    assert decode_amenities(mask) == expected


def test_decode_amenities_ignores_unknown_bits():
    assert decode_amenities((1 << 28) | 2) == {Amenity.FITNESS_CENTER}


def test_parse_hotel_list_maps_hotel_and_rooms():
    summary = hotel_summary(
        address2="Suite 100",
        amenityMask=int(Amenity.SWIMMING_POOL | Amenity.SPA),
        RoomRateDetailsList={
            "RoomRateDetails": [
                room_rate(promoId=209558, promoDescription="Save 20%", promoDetailText="Book 7 days ahead"),
                room_rate(rateCode="201597621"),
            ]
        },
    )

    hotels = parse_hotel_list(list_body([summary, hotel_summary(hotelId=122212)]))
    assert [hotel.id for hotel in hotels] == [106347, 122212]

    hotel = hotels[0]
    assert hotel.name == "Harborside Inn"
    assert hotel.address == "185 State Street, Suite 100"
    assert hotel.city == "Boston"
    assert hotel.province == "MA"
    assert hotel.postal == "02109"
    assert hotel.country == "US"
    assert hotel.airport == "BOS"
    assert hotel.category == 1
    assert hotel.rating == 3.0
    assert hotel.confidence_rating == 85
    assert hotel.amenities == {Amenity.SWIMMING_POOL, Amenity.SPA}
    assert hotel.has_amenity(Amenity.SPA)
    assert hotel.tripadvisor_rating == 4.5
    assert hotel.high_rate == 289.0
    assert hotel.low_rate == 199.0
    assert hotel.currency == "USD"
    assert hotel.proximity_distance == 0.3
    assert hotel.proximity_unit == "MI"
    assert hotel.in_destination is True
    assert hotel.thumbnail_path.endswith("_t.jpg")
    assert hotel.ian_url == "http://travel.ian.com/index.jsp?hotelID=106347"
    assert hotel.raw["hotelId"] == 106347

    assert hotel.rooms is not None and len(hotel.rooms) == 2
    room = hotel.rooms[0]
    assert room.room_type_code == "200127380"
    assert room.rate_key == "0ABAA81D-2EE5-4591-BA1B-C0CCCA1A1E84"
    assert room.max_occupancy == 2
    assert room.quoted_occupancy == 1
    assert room.minimum_age == 0
    assert room.allotment == 5
    assert room.available is True
    assert room.restricted is False
    assert room.expedia_id == 9873
    assert room.promotion is not None
    assert room.promotion.id == 209558
    assert room.promotion.description == "Save 20%"
    assert room.promotion.details == "Book 7 days ahead"
    assert hotel.rooms[1].promotion is None

    assert hotels[1].rooms is None


def test_single_hotel_object_is_normalised_to_a_list():
    hotels = parse_hotel_list(list_body(hotel_summary()))
    assert len(hotels) == 1
    assert hotels[0].address == "185 State Street"


def test_single_room_object_is_normalised_to_a_list():
    summary = hotel_summary(RoomRateDetailsList={"RoomRateDetails": room_rate()})
    hotel = parse_hotel_list(list_body(summary))[0]
    assert [room.rate_code for room in hotel.rooms] == ["201597620"]


def test_misspelled_proximity_key_is_still_read():
    summary = hotel_summary()
    del summary["proximityDistance"]
    summary["promixityDistance"] = 1.7
    assert parse_hotel_list(list_body(summary))[0].proximity_distance == 1.7


def test_missing_hotel_summary_yields_no_hotels():
    body = json.dumps({"HotelListResponse": {"HotelList": {"@size": "0"}}})
    assert parse_hotel_list(body) == []


def test_error_without_reservation():
    with pytest.raises(APIError) as excinfo:
        parse_hotel_list(error_body(-1))
    error = excinfo.value
    assert error.reservation_made is False
    assert error.reservation_id is None
    assert error.message == "Multiple locations found for the destination."
    assert str(error) == error.message
    assert error.verbose_message.startswith("Multiple locations found.")
    assert error.recoverability == "RECOVERABLE"
    assert error.raw["category"] == "DATA_VALIDATION"


def test_error_with_reservation_made():
    with pytest.raises(APIError) as excinfo:
        parse_hotel_list(error_body(4021, handling="UNRECOVERABLE"))
    error = excinfo.value
    assert error.reservation_made is True
    assert error.reservation_id == 4021
    assert error.recoverability == "UNRECOVERABLE"
    assert "4021" in str(error)


def test_error_envelope_skips_hotel_parsing():
    body = json.dumps(
        {
            "HotelListResponse": {
                "EanWsError": {"itineraryId": -1, "presentationMessage": "Bad request"},
                "HotelList": {"HotelSummary": hotel_summary()},
            }
        }
    )
    with pytest.raises(APIError, match="Bad request"):
        parse_hotel_list(body)


def test_empty_error_object_is_still_an_error():
    body = json.dumps(
        {"HotelListResponse": {"EanWsError": {}, "HotelList": {"HotelSummary": hotel_summary()}}}
    )
    with pytest.raises(APIError) as excinfo:
        parse_hotel_list(body)
    assert excinfo.value.reservation_made is False
    assert excinfo.value.message == "EAN API returned an error"


def test_non_numeric_itinerary_id_keeps_the_server_message():
    with pytest.raises(APIError) as excinfo:
        parse_hotel_list(error_body("N/A", presentationMessage="Credit card declined."))
    error = excinfo.value
    assert error.message == "Credit card declined."
    assert error.reservation_made is True
    assert error.reservation_id == "N/A"


def test_string_sentinel_itinerary_id_means_no_reservation():
    with pytest.raises(APIError) as excinfo:
        parse_hotel_list(error_body("-1"))
    assert excinfo.value.reservation_made is False
    assert excinfo.value.reservation_id is None


@pytest.mark.parametrize("body", ["<html>Service Unavailable</html>", "[]", json.dumps({"Other": {}})])
def test_unexpected_body_raises_response_format_error(body):
    with pytest.raises(ResponseFormatError) as excinfo:
        parse_hotel_list(body)
    assert excinfo.value.body == body


def test_hotel_to_dict_uses_amenity_labels():
    summary = hotel_summary(RoomRateDetailsList={"RoomRateDetails": room_rate(promoId=1)})
    record = parse_hotel_list(list_body(summary))[0].to_dict()
    assert record["amenities"] == ["business_center", "fitness_center"]
    assert record["rooms"][0]["promotion"]["id"] == 1
    assert "raw" not in record


def test_room_reserve_is_not_available_yet():
    summary = hotel_summary(RoomRateDetailsList={"RoomRateDetails": room_rate()})
    room = parse_hotel_list(list_body(summary))[0].rooms[0]
    reservation = ReservationRequest(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        card=CreditCard(type="CA", number="5401999999999999", csv="123", expiration="11/2030"),
        address=["1 Main Street"],
        city="Boston",
        state="MA",
        country="US",
        postal_code="02109",
        rooms=[RoomGuest(adults=1, first_name="Ada", last_name="Lovelace")],
    )
    with pytest.raises(NotImplementedError):
        room.reserve(reservation)


def test_reservation_request_limits_address_lines():
    with pytest.raises(ValueError, match="address"):
        ReservationRequest(
            first_name="Ada",
            last_name="Lovelace",
            email="ada@example.com",
            card=CreditCard(type="CA", number="5401999999999999", csv="123", expiration="11/2030"),
            address=["1", "2", "3", "4"],
            city="Boston",
            country="US",
            postal_code="02109",
            rooms=[RoomGuest(adults=1, first_name="Ada", last_name="Lovelace")],
        )
