"""National holidays from the upstream calendar API plus local ones."""
from datetime import date
from typing import List, Optional

import httpx
from loguru import logger

from portal.core.config import Settings
from portal.core.errors import UpstreamError

# (month, day, name)
STATE_HOLIDAYS = (
    (3, 19, "Dia de São José (Padroeiro do Amapá)"),
    (9, 13, "Criação do Território Federal do Amapá"),
    (10, 5, "Criação do Estado do Amapá"),
)
MUNICIPAL_HOLIDAYS = (
    (2, 4, "Aniversário de Macapá"),
)


def regional_holidays(year: int) -> List[dict]:
    holidays = [
        {"date": date(year, month, day), "name": name, "type": "state"}
        for month, day, name in STATE_HOLIDAYS
    ]
    holidays += [
        {"date": date(year, month, day), "name": name, "type": "municipal"}
        for month, day, name in MUNICIPAL_HOLIDAYS
    ]
    return holidays


def _normalize(entry: dict) -> dict:
    return {
        "date": date.fromisoformat(entry["date"]),
        "name": entry["name"],
        "type": "national",
    }


async def fetch_holidays(
    year: int,
    settings: Settings,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> List[dict]:
    """All holidays of `year` sorted by date; upstream failures raise UpstreamError."""
    request_url = f"{settings.HOLIDAYS_API_URL.rstrip('/')}/{year}"
    logger.info("Holiday request: url={} timeout={}", request_url, settings.HOLIDAYS_TIMEOUT)
    try:
        async with httpx.AsyncClient(
            timeout=httpx.Timeout(settings.HOLIDAYS_TIMEOUT),
            transport=transport,
        ) as client:
            response = await client.get(request_url)
        response.raise_for_status()
        national = [_normalize(entry) for entry in response.json()]
    except httpx.HTTPError as exc:
        logger.warning("Holiday request failed: {}", exc)
        raise UpstreamError("Failed to fetch holidays") from exc
    except (ValueError, KeyError, TypeError) as exc:
        logger.warning("Holiday response could not be parsed: {}", exc)
        raise UpstreamError("Failed to fetch holidays") from exc

    holidays = national + regional_holidays(year)
    holidays.sort(key=lambda h: h["date"])
    logger.info("Holiday request ok: {} national, {} total", len(national), len(holidays))
    return holidays
