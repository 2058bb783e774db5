from __future__ import annotations

import textwrap
from datetime import date, timedelta

import pytest
from pydantic import ValidationError

from ean_hotels.config.run_config import RunConfig
from ean_hotels.tasks.search_payloads import DestinationString, GeoCircle, PlaceLocation


def _write(tmp_path, content: str):
    path = tmp_path / "search.toml"
    path.write_text(textwrap.dedent(content))
    return path


def test_load_availability_search_with_nights(tmp_path):
    path = _write(
        tmp_path,
        """
        profile = "boston-weekend"

        [search]
        location = "Boston"
        arrival = "2014-03-14"
        nights = 7
        include_details = true

        [[search.rooms]]
        adults = 2
        children = [5, 7]

        [output]
        filename = "boston.json"
        """,
    )
    config = RunConfig.load(path)
    request = config.to_request()

    assert config.profile == "boston-weekend"
    assert config.output.filename == "boston.json"
    assert request.is_availability
    assert request.location == DestinationString("Boston")
    assert request.arrival == date(2014, 3, 14)
    assert request.departure == date(2014, 3, 21)
    assert request.rooms[0].to_param() == "2,5,7"
    assert request.include_details is True


def test_structured_location_table(tmp_path):
    path = _write(
        tmp_path,
        """
        [search.location]
        city = "Boston"
        state = "MA"
        country = "US"
        """,
    )
    request = RunConfig.load(path).to_request()
    assert request.location == PlaceLocation(city="Boston", state="MA", country="US")
    assert not request.is_availability


def test_geo_location_table(tmp_path):
    path = _write(
        tmp_path,
        """
        [search.location]
        latitude = 33.93
        longitude = 18.46
        radius = 10
        radius_unit = "MI"
        sort = "PROXIMITY"
        """,
    )
    request = RunConfig.load(path).to_request()
    assert request.location == GeoCircle(
        latitude=33.93, longitude=18.46, radius=10, radius_unit="MI", sort="PROXIMITY"
    )


def test_ids_accept_comma_separated_string(tmp_path):
    path = _write(tmp_path, '[search]\nids = "106347, 122212"\n')
    assert RunConfig.load(path).to_request().ids == ["106347", "122212"]


def test_relative_and_us_style_dates():
    config = RunConfig.model_validate(
        {"search": {"location": "Boston", "arrival": "+14d", "departure": "12/31/2030", "rooms": [{"adults": 1}]}}
    )
    request = config.to_request()
    assert request.arrival == date.today() + timedelta(days=14)
    assert request.departure == date(2030, 12, 31)


def test_location_table_must_pick_one_form():
    with pytest.raises(ValidationError, match="exactly one"):
        RunConfig.model_validate({"search": {"location": {"city": "Boston", "id": "X"}}})


def test_departure_and_nights_are_exclusive():
    with pytest.raises(ValidationError):
        RunConfig.model_validate(
            {"search": {"location": "Boston", "arrival": "2014-03-14", "departure": "2014-03-21", "nights": 7}}
        )


def test_invalid_date_is_reported():
    config = RunConfig.model_validate({"search": {"location": "Boston", "arrival": "next tuesday"}})
    with pytest.raises(ValueError, match="Invalid date"):
        config.to_request()
