"""Client for the EAN hotel list REST endpoint."""
from __future__ import annotations

import logging
from contextlib import AbstractContextManager
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple
from urllib.parse import quote

import httpx

from ean_hotels.config.settings import EANSettings
from ean_hotels.core.errors import APIError
from ean_hotels.hotels.models import Hotel, Room
from ean_hotels.hotels.normalizer import parse_hotel_list
from ean_hotels.tasks.search_payloads import (
    DateLike,
    RoomOccupancy,
    SearchRequest,
    build_params,
    finalize_params,
)

logger = logging.getLogger(__name__)

HOTEL_LIST_PATH = "/ean-services/rs/hotel/v3/list"

ResponseHandler = Callable[[httpx.Response], Tuple[str, str, Any]]


@dataclass(frozen=True)
class Result:
    """What was sent, what came back, and what it parsed to."""

    url: str
    raw: str
    value: Any
    params: Mapping[str, Any] = field(default_factory=dict, repr=False)


@dataclass(frozen=True)
class SearchOutcome:
    """Either a Result or the APIError the server reported, never both."""

    result: Optional[Result] = None
    error: Optional[APIError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def reservation_made(self) -> bool:
        return self.error is not None and self.error.reservation_made

    @property
    def reservation_id(self) -> Optional[Any]:
        return self.error.reservation_id if self.error is not None else None

    def unwrap(self) -> Result:
        if self.error is not None:
            raise self.error
        if self.result is None:
            raise ValueError("SearchOutcome holds neither a result nor an error")
        return self.result


def _encode_value(value: Any) -> Optional[str]:
    if value is None or value is False:
        return None
    if value is True:
        return "true"
    return str(value)


def encode_query(params: Mapping[str, Any]) -> str:
    """Serialise params as ``key=value&`` pairs, skipping unset and false values."""
    parts = []
    for key, value in params.items():
        encoded = _encode_value(value)
        if encoded is None:
            continue
        parts.append(f"{quote(str(key), safe='')}={quote(encoded, safe='')}&")
    return "".join(parts)


def _redact(params: Mapping[str, Any]) -> Dict[str, Any]:
    return {key: ("***" if key == "apiKey" else value) for key, value in params.items()}


def _hotel_list_handler(response: httpx.Response) -> Tuple[str, str, List[Hotel]]:
    return str(response.url), response.text, parse_hotel_list(response.text)


class HotelClient(AbstractContextManager["HotelClient"]):
    """Thin wrapper around the EAN hotel list endpoint.

    Transport failures (timeouts, connection errors) surface as ``httpx``
    exceptions; errors reported by the API raise ``APIError``.
    """

    def __init__(
        self,
        settings: EANSettings,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        default_headers = {
            "Accept": "application/json",
            "User-Agent": settings.user_agent,
        }
        if headers:
            default_headers.update(headers)
        self.settings = settings
        self._client = httpx.Client(
            base_url=settings.base_url,
            timeout=settings.timeout_s,
            headers=default_headers,
            transport=transport,
        )

    def close(self) -> None:
        self._client.close()

    def __exit__(self, exc_type, exc, exc_tb) -> None:
        self.close()

    def perform_search(
        self,
        path: str,
        params: Mapping[str, Any],
        handler: ResponseHandler,
    ) -> Result:
        query = encode_query(params)
        logger.info("GET %s with %s parameters", path, len(params))
        logger.debug("Query parameters: %s", _redact(params))
        response = self._client.get(f"{path}?{query}")
        logger.debug("EAN responded %s (%s bytes)", response.status_code, len(response.content))
        url, raw, value = handler(response)
        return Result(url=url, raw=raw, value=value, params=dict(params))

    def hotel_list(self, params: Mapping[str, Any]) -> Result:
        req_params = finalize_params(dict(params), self.settings)
        return self.perform_search(HOTEL_LIST_PATH, req_params, _hotel_list_handler)

    def find(self, request: Optional[SearchRequest] = None, **kwargs: Any) -> Result:
        """Find hotels matching the search.

        Pass a SearchRequest or its fields as keyword arguments::

            client.find(location="Boston")
            client.find(arrival="03/14/2014", departure="03/21/2014",
                        location="Boston", rooms=[{"adults": 1}])
        """
        if request is None:
            request = SearchRequest(**kwargs)
        elif kwargs:
            raise TypeError("Pass either a SearchRequest or keyword arguments, not both")
        mode = "availability" if request.is_availability else "dateless"
        logger.info("Running %s hotel search", mode)
        try:
            return self.hotel_list(build_params(request))
        except APIError as exc:
            logger.warning("EAN %s search failed: %s (%s)", mode, exc.message, exc.recoverability)
            raise

    def find_outcome(self, request: Optional[SearchRequest] = None, **kwargs: Any) -> SearchOutcome:
        try:
            return SearchOutcome(result=self.find(request, **kwargs))
        except APIError as exc:
            return SearchOutcome(error=exc)

    def room_search(
        self,
        hotel_id: Any,
        *,
        arrival: DateLike,
        departure: DateLike,
        rooms: Iterable[RoomOccupancy],
        include_details: Optional[bool] = None,
        fee_breakdown: Optional[bool] = None,
    ) -> Result:
        """Availability search scoped to one hotel; the value is its list of Rooms."""
        request = SearchRequest(
            ids=[hotel_id],
            arrival=arrival,
            departure=departure,
            rooms=list(rooms),
            include_details=include_details,
            fee_breakdown=fee_breakdown,
        )
        result = self.find(request)
        rooms_found: List[Room] = []
        for hotel in result.value:
            if str(hotel.id) == str(hotel_id) and hotel.rooms:
                rooms_found.extend(hotel.rooms)
        logger.info("Found %s room options for hotel %s", len(rooms_found), hotel_id)
        return Result(url=result.url, raw=result.raw, value=rooms_found, params=result.params)
