"""Run an EAN hotel search from the command line and save the results as JSON."""
from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

import httpx
from pydantic import ValidationError

from ean_hotels.config.run_config import RunConfig
from ean_hotels.config.settings import EANSettings
from ean_hotels.core.errors import APIError, ResponseFormatError, SearchValidationError
from ean_hotels.core.logging import configure_logging
from ean_hotels.services.hotel_client import HotelClient
from ean_hotels.storage.json_writer import JsonStore
from ean_hotels.tasks.search import SearchTask
from ean_hotels.tasks.search_payloads import RoomOccupancy, SearchRequest, build_params

logger = logging.getLogger("search_hotels")


def _parse_room(value: str) -> RoomOccupancy:
    """Parse '2' or '2,5,7' (adults followed by child ages)."""
    try:
        parts = [int(part) for part in value.split(",") if part.strip()]
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"Invalid room '{value}'; expected ADULTS[,AGE...]") from exc
    if not parts:
        raise argparse.ArgumentTypeError("Room must list at least the number of adults")
    try:
        return RoomOccupancy(adults=parts[0], children=parts[1:])
    except SearchValidationError as exc:
        raise argparse.ArgumentTypeError(str(exc)) from exc


def _request_from_args(args: argparse.Namespace) -> SearchRequest:
    ids = [item.strip() for item in (args.ids or "").split(",") if item.strip()]
    rooms = args.room or []
    if args.arrival and not rooms:
        rooms = [RoomOccupancy(adults=1)]
    return SearchRequest(
        location=args.location,
        ids=ids,
        arrival=args.arrival,
        departure=args.departure,
        number_of_results=args.number_of_results,
        rooms=rooms,
        include_details=args.include_details or None,
        fee_breakdown=args.fee_breakdown or None,
        include_surrounding=args.include_surrounding or None,
    )


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Search hotels through the EAN API")
    parser.add_argument("--config", type=Path, help="TOML run config describing the search")
    parser.add_argument("--location", help="Free-text destination, e.g. 'Boston'")
    parser.add_argument("--ids", help="Comma-separated hotel ids")
    parser.add_argument("--arrival", help="Arrival date MM/DD/YYYY (makes this an availability search)")
    parser.add_argument("--departure", help="Departure date MM/DD/YYYY")
    parser.add_argument(
        "--room",
        action="append",
        type=_parse_room,
        help="Room occupancy as ADULTS[,CHILD_AGE...]; repeat for several rooms",
    )
    parser.add_argument("--number-of-results", type=int)
    parser.add_argument("--include-details", action="store_true")
    parser.add_argument("--fee-breakdown", action="store_true", help="Include the hotel fee breakdown in rates")
    parser.add_argument("--include-surrounding", action="store_true")
    parser.add_argument("--output", default=None, help="Output filename (default from config or hotels.json)")
    parser.add_argument("--log-level", default=None)
    args = parser.parse_args(argv)

    try:
        settings = EANSettings()
    except ValidationError as exc:
        print(f"Missing or invalid EAN_* settings: {exc}", file=sys.stderr)
        return 2
    configure_logging(args.log_level or settings.log_level, settings.log_dir)
    settings.ensure_directories()

    filename = args.output or "hotels.json"
    subdir = None
    profile = None
    try:
        if args.config:
            run_config = RunConfig.load(args.config)
            logger.info("Loaded run config profile '%s' from %s", run_config.profile, args.config)
            request = run_config.to_request()
            profile = run_config.profile
            filename = args.output or run_config.output.filename
            subdir = run_config.output.subdir
        else:
            request = _request_from_args(args)
    except OSError as exc:
        logger.error("Cannot read run config: %s", exc)
        return 2
    except (SearchValidationError, ValidationError, ValueError) as exc:
        logger.error("Invalid search: %s", exc)
        return 2

    with HotelClient(settings) as client:
        try:
            items = SearchTask(request).run(client)
        except SearchValidationError as exc:
            logger.error("Invalid search: %s", exc)
            return 2
        except APIError as exc:
            logger.error("EAN error: %s | %s", exc.message, exc.verbose_message)
            if exc.reservation_made:
                logger.warning(
                    "A reservation (itinerary %s) was created despite the error; do not rebook blindly",
                    exc.reservation_id,
                )
            return 1
        except ResponseFormatError as exc:
            logger.error("Unexpected response from EAN: %s", exc)
            return 1
        except httpx.HTTPError as exc:
            logger.error("Request to EAN failed: %s", exc)
            return 1

    search = {
        "profile": profile,
        "mode": "availability" if request.is_availability else "dateless",
        "params": build_params(request),
    }
    path = JsonStore(settings.download_dir).write(items, filename=filename, subdir=subdir, search=search)
    logger.info("Wrote %s hotels to %s", len(items), path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
