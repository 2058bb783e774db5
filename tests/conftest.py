from __future__ import annotations

from typing import Any, Callable, Iterator

import httpx
import pytest

from ean_hotels.config.settings import EANSettings
from ean_hotels.services.hotel_client import HotelClient


@pytest.fixture
def settings(tmp_path) -> EANSettings:
    return EANSettings(
        cid="55505",
        api_key="test-key",
        minor_rev=28,
        download_dir=tmp_path / "downloads",
        _env_file=None,
    )


class RecordingTransport(httpx.MockTransport):
    """MockTransport that remembers every request it served."""

    def __init__(self, responder: Callable[[httpx.Request], httpx.Response]) -> None:
        self.requests: list[httpx.Request] = []

        def handler(request: httpx.Request) -> httpx.Response:
            self.requests.append(request)
            return responder(request)

        super().__init__(handler)


@pytest.fixture
def make_client(settings: EANSettings) -> Iterator[Callable[..., tuple[HotelClient, RecordingTransport]]]:
    clients: list[HotelClient] = []

    def factory(body: str = "", *, status_code: int = 200, responder=None):
        if responder is None:
            def responder(_request: httpx.Request) -> httpx.Response:
                return httpx.Response(status_code, text=body)
        transport = RecordingTransport(responder)
        client = HotelClient(settings, transport=transport)
        clients.append(client)
        return client, transport

    yield factory
    for client in clients:
        client.close()
