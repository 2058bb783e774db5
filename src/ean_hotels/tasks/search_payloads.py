"""Utilities for building EAN hotel list query parameters."""
from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING, Any, Dict, Iterable, List, Mapping, Optional, Union

from ean_hotels.core.errors import SearchValidationError

if TYPE_CHECKING:  # pragma: no cover
    from ean_hotels.config.settings import EANSettings

DateLike = Union[date, str]
Params = Dict[str, Any]

EAN_DATE_FORMAT = "%m/%d/%Y"


def format_date(value: Optional[DateLike]) -> Optional[str]:
    if value is None:
        return None
    if isinstance(value, date):
        return value.strftime(EAN_DATE_FORMAT)
    return value.strip() or None


@dataclass
class RoomOccupancy:
    adults: int
    children: List[int] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.adults < 1:
            raise SearchValidationError("Each room needs at least one adult")
        self.children = [int(age) for age in self.children]

    @classmethod
    def from_value(cls, value: Union["RoomOccupancy", Mapping[str, Any], int]) -> "RoomOccupancy":
        if isinstance(value, RoomOccupancy):
            return value
        if isinstance(value, int):
            return cls(adults=value)
        if isinstance(value, Mapping):
            return cls(adults=int(value.get("adults", 0)), children=list(value.get("children") or []))
        raise SearchValidationError(f"Unsupported room description: {value!r}")

    def to_param(self) -> str:
        return ",".join(str(part) for part in (self.adults, *self.children))


# Location variants ------------------------------------------------------------


def _require(value: Any, field_name: str, kind: str) -> None:
    # A dropped location field would turn the query into "list everything".
    if value is None or (isinstance(value, str) and not value.strip()):
        raise SearchValidationError(f"{kind} location requires a non-empty '{field_name}'")


@dataclass(frozen=True)
class DestinationString:
    """Free-text destination, resolved by the API."""

    text: str

    def __post_init__(self) -> None:
        _require(self.text, "text", "Free-text")

    def to_params(self) -> Params:
        return {"destinationString": self.text}


@dataclass(frozen=True)
class PlaceLocation:
    city: str
    country: Optional[str] = None
    state: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    name: Optional[str] = None

    def __post_init__(self) -> None:
        _require(self.city, "city", "Place")

    def to_params(self) -> Params:
        params: Params = {"city": self.city}
        if self.state:
            params["stateProvinceCode"] = self.state
        params["countryCode"] = self.country
        # postalCode only narrows an address search.
        if self.address:
            params["address"] = self.address
            if self.postal_code:
                params["postalCode"] = self.postal_code
        if self.name:
            params["propertyName"] = self.name
        return params


@dataclass(frozen=True)
class DestinationId:
    id: str

    def __post_init__(self) -> None:
        _require(self.id, "id", "Destination id")

    def to_params(self) -> Params:
        return {"destinationId": self.id}


@dataclass(frozen=True)
class GeoCircle:
    latitude: Any
    longitude: Any
    radius: Any = None
    radius_unit: Optional[str] = None
    sort: Any = None

    def __post_init__(self) -> None:
        _require(self.latitude, "latitude", "Geographic")
        _require(self.longitude, "longitude", "Geographic")

    def to_params(self) -> Params:
        sort = self.sort
        if isinstance(sort, enum.Enum):
            sort = sort.value
        return {
            "latitude": self.latitude,
            "longitude": self.longitude,
            "searchRadius": self.radius,
            "searchRadiusUnit": self.radius_unit,
            "sort": str(sort) if sort is not None else None,
        }


LocationSpec = Union[DestinationString, PlaceLocation, DestinationId, GeoCircle]
_LOCATION_TYPES = (DestinationString, PlaceLocation, DestinationId, GeoCircle)


def coerce_location(value: Union[LocationSpec, str, Mapping[str, Any], None]) -> Optional[LocationSpec]:
    """Turn a string or mapping into a location variant.

    Mappings are matched by key in order: ``city``, ``id``, ``latitude``.
    """
    if value is None or isinstance(value, _LOCATION_TYPES):
        return value
    if isinstance(value, str):
        text = value.strip()
        if not text:
            raise SearchValidationError("Location string must not be blank")
        return DestinationString(text)
    if isinstance(value, Mapping):
        if "city" in value:
            return PlaceLocation(
                city=value["city"],
                country=value.get("country"),
                state=value.get("state"),
                address=value.get("address"),
                postal_code=value.get("postal_code"),
                name=value.get("name"),
            )
        if "id" in value:
            return DestinationId(value["id"])
        if "latitude" in value:
            return GeoCircle(
                latitude=value["latitude"],
                longitude=value.get("longitude"),
                radius=value.get("radius"),
                radius_unit=value.get("radius_unit"),
                sort=value.get("sort"),
            )
        raise SearchValidationError(
            f"Location mapping needs a 'city', 'id' or 'latitude' key; got {sorted(value)}"
        )
    raise SearchValidationError(f"Unsupported location type: {type(value).__name__}")


# Search request ---------------------------------------------------------------


@dataclass
class SearchRequest:
    """Caller search intent. A present ``arrival`` makes it an availability search."""

    location: Optional[LocationSpec] = None
    ids: List[Any] = field(default_factory=list)
    arrival: Optional[DateLike] = None
    departure: Optional[DateLike] = None
    number_of_results: Optional[int] = None
    rooms: List[RoomOccupancy] = field(default_factory=list)
    include_details: Optional[bool] = None
    fee_breakdown: Optional[bool] = None
    include_surrounding: Optional[bool] = None

    def __post_init__(self) -> None:
        self.location = coerce_location(self.location)
        self.ids = list(self.ids or [])
        self.rooms = [RoomOccupancy.from_value(room) for room in (self.rooms or [])]

    @property
    def is_availability(self) -> bool:
        return bool(self.arrival)


def room_group(params: Params, rooms: Iterable[RoomOccupancy]) -> Params:
    req_params = dict(params)
    for index, room in enumerate(rooms, start=1):
        req_params[f"room{index}"] = room.to_param()
    return req_params


def location_params(params: Params, location: LocationSpec) -> Params:
    if not isinstance(location, _LOCATION_TYPES):
        raise SearchValidationError(f"Unsupported location: {location!r}")
    return {**params, **location.to_params()}


def _join_ids(ids: Iterable[Any]) -> str:
    return ",".join(str(hotel_id) for hotel_id in ids)


def availability_params(request: SearchRequest) -> Params:
    if not request.rooms:
        raise SearchValidationError("Availability searches need at least one room")
    req_params = room_group(
        {
            "arrivalDate": format_date(request.arrival),
            "departureDate": format_date(request.departure),
            "numberOfResults": request.number_of_results,
            "includeDetails": request.include_details,
            "includeHotelFeeBreakdown": request.fee_breakdown,
            "includeSurrounding": request.include_surrounding,
        },
        request.rooms,
    )
    if request.ids:
        req_params["hotelIds"] = _join_ids(request.ids)
    elif request.location is not None:
        req_params = location_params(req_params, request.location)
    else:
        raise SearchValidationError("Availability searches need a location or hotel ids")
    return req_params


def dateless_params(request: SearchRequest) -> Params:
    if request.location is not None:
        return location_params({"includeSurrounding": request.include_surrounding}, request.location)
    if request.ids:
        return {"hotelIdList": _join_ids(request.ids)}
    raise SearchValidationError("Dateless searches need a location or hotel ids")


def build_params(request: SearchRequest) -> Params:
    if request.is_availability:
        return availability_params(request)
    return dateless_params(request)


def finalize_params(params: Params, settings: "EANSettings") -> Params:
    """Append credentials and drop every unset parameter."""
    req_params = {**params, **settings.common_params()}
    return {key: value for key, value in req_params.items() if value is not None}


def is_availability_query(params: Mapping[str, Any]) -> bool:
    return params.get("arrivalDate") is not None


__all__ = [
    "DateLike",
    "DestinationId",
    "DestinationString",
    "GeoCircle",
    "LocationSpec",
    "PlaceLocation",
    "RoomOccupancy",
    "SearchRequest",
    "availability_params",
    "build_params",
    "coerce_location",
    "dateless_params",
    "finalize_params",
    "format_date",
    "is_availability_query",
    "location_params",
    "room_group",
]
