"""TOML run configuration describing a hotel search for manual runs."""
from __future__ import annotations

import re
import tomllib
from datetime import date, datetime, timedelta
from pathlib import Path
from typing import Any, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from ean_hotels.tasks.search_payloads import RoomOccupancy, SearchRequest

_RELATIVE_DATE = re.compile(r"^(?P<count>\d+)\s*(?P<unit>[dDwWmM])$")


class RoomSection(BaseModel):
    adults: int = Field(ge=1)
    children: list[int] = Field(default_factory=list)


class LocationSection(BaseModel):
    """Structured location; set exactly one of city, id or latitude."""

    city: Optional[str] = None
    state: Optional[str] = None
    country: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    name: Optional[str] = None
    id: Optional[str] = None
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius: Optional[Union[int, float, str]] = None
    radius_unit: Optional[str] = None
    sort: Optional[str] = None

    @model_validator(mode="after")
    def _validate_shape(self) -> "LocationSection":
        forms = [form for form in ("city", "id", "latitude") if getattr(self, form) is not None]
        if len(forms) != 1:
            raise ValueError("location requires exactly one of 'city', 'id' or 'latitude'")
        if self.latitude is not None and self.longitude is None:
            raise ValueError("location with 'latitude' also requires 'longitude'")
        return self


class SearchSection(BaseModel):
    """Search parameters decoded from the run config."""

    location: Optional[Union[str, LocationSection]] = None
    ids: list[str] = Field(default_factory=list)
    arrival: Optional[str] = Field(
        default=None, description="ISO date, MM/DD/YYYY, 'today' or a relative offset such as '+14d'"
    )
    departure: Optional[str] = None
    nights: Optional[int] = Field(default=None, ge=1)
    number_of_results: Optional[int] = Field(default=None, ge=1)
    rooms: list[RoomSection] = Field(default_factory=list)
    include_details: Optional[bool] = None
    fee_breakdown: Optional[bool] = None
    include_surrounding: Optional[bool] = None

    @field_validator("ids", mode="before")
    @classmethod
    def _coerce_ids(cls, value: object) -> list[str]:
        if value in (None, "", ()):
            return []
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, (list, tuple)):
            return [str(item).strip() for item in value if str(item).strip()]
        raise TypeError("Expected string or list of hotel ids")

    @model_validator(mode="after")
    def _validate_dates(self) -> "SearchSection":
        if self.arrival is None and (self.departure or self.nights):
            raise ValueError("'departure' and 'nights' require 'arrival'")
        if self.departure and self.nights:
            raise ValueError("set either 'departure' or 'nights', not both")
        return self


class OutputSection(BaseModel):
    filename: str = "hotels.json"
    subdir: Optional[str] = None


class RunConfig(BaseModel):
    """Top-level configuration decoded from TOML."""

    profile: str = Field(default="default", description="Human label used for logging")
    search: SearchSection = Field(default_factory=SearchSection)
    output: OutputSection = Field(default_factory=OutputSection)

    @classmethod
    def load(cls, path: Path) -> "RunConfig":
        """Load a config from a TOML file."""
        data = tomllib.loads(path.read_text())
        return cls.model_validate(data)

    def to_request(self) -> SearchRequest:
        search = self.search
        arrival = _parse_date(search.arrival) if search.arrival else None
        departure: Optional[date] = None
        if search.departure:
            departure = _parse_date(search.departure)
        elif arrival and search.nights:
            departure = arrival + timedelta(days=search.nights)

        location: Any = search.location
        if isinstance(location, LocationSection):
            location = location.model_dump(exclude_none=True)

        return SearchRequest(
            location=location,
            ids=list(search.ids),
            arrival=arrival,
            departure=departure,
            number_of_results=search.number_of_results,
            rooms=[RoomOccupancy(adults=room.adults, children=list(room.children)) for room in search.rooms],
            include_details=search.include_details,
            fee_breakdown=search.fee_breakdown,
            include_surrounding=search.include_surrounding,
        )


def _parse_date(value: str) -> date:
    text = value.strip()
    lowered = text.lower()
    if lowered == "today":
        return date.today()
    if lowered.startswith("today+"):
        text = f"+{text.split('+', 1)[1]}"
        lowered = text.lower()
    if lowered.startswith("+"):
        match = _RELATIVE_DATE.match(lowered[1:])
        if not match:
            raise ValueError(
                f"Unsupported relative date '{value}'. Use forms like '+14d', '+2w', '+1m'."
            )
        count = int(match.group("count"))
        unit = match.group("unit").lower()
        if unit == "d":
            delta = timedelta(days=count)
        elif unit == "w":
            delta = timedelta(weeks=count)
        else:
            # Months are 30-day blocks.
            delta = timedelta(days=30 * count)
        return date.today() + delta
    if "/" in text:
        try:
            return datetime.strptime(text, "%m/%d/%Y").date()
        except ValueError as exc:
            raise ValueError(f"Invalid date '{value}'. Expected MM/DD/YYYY.") from exc
    try:
        return date.fromisoformat(text)
    except ValueError as exc:
        raise ValueError(
            f"Invalid date '{value}'. Provide ISO format (YYYY-MM-DD), MM/DD/YYYY or a relative offset."
        ) from exc


__all__ = ["RunConfig"]
