import asyncio
from datetime import date

import httpx
import pytest

from portal.core.errors import UpstreamError
from portal.services.holidays import fetch_holidays, regional_holidays

NATIONAL = [
    {"date": "2026-01-01", "name": "Confraternização mundial", "type": "national"},
    {"date": "2026-04-21", "name": "Tiradentes", "type": "national"},
]


def test_holidays_merge_national_and_regional(settings) -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=NATIONAL)

    holidays = asyncio.run(fetch_holidays(2026, settings, transport=httpx.MockTransport(handler)))

    assert seen == ["https://holidays.test/api/feriados/v1/2026"]
    assert len(holidays) == len(NATIONAL) + len(regional_holidays(2026))
    assert holidays[0] == {"date": date(2026, 1, 1), "name": "Confraternização mundial", "type": "national"}
    assert holidays[1]["type"] == "municipal"
    assert [h["date"] for h in holidays] == sorted(h["date"] for h in holidays)


@pytest.mark.parametrize(
    "response",
    [
        httpx.Response(500, text="boom"),
        httpx.Response(200, text="not json"),
        httpx.Response(200, json=[{"name": "sem data"}]),
    ],
)
def test_upstream_failures(settings, response) -> None:
    transport = httpx.MockTransport(lambda request: response)
    with pytest.raises(UpstreamError) as exc_info:
        asyncio.run(fetch_holidays(2026, settings, transport=transport))
    assert exc_info.value.message == "Failed to fetch holidays"


def test_network_error(settings) -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    with pytest.raises(UpstreamError):
        asyncio.run(fetch_holidays(2026, settings, transport=httpx.MockTransport(handler)))


def test_holidays_endpoint_requires_login(client) -> None:
    assert client.get("/api/holidays?year=2026").status_code == 401
