"""Riot Games API client."""
import asyncio
import logging
import math
import time
from datetime import datetime, timezone
from email.utils import parsedate_to_datetime
from typing import Any, Dict, List, Optional
from urllib.parse import quote

import httpx

from masterstats.config import settings
from masterstats.domain.enums import Region
from masterstats.domain.errors import FetchFailure
from .rate_limiter import EndpointRateLimiter, RateLimiter

logger = logging.getLogger(__name__)

DEFAULT_RETRY_AFTER = 5.0


def parse_retry_after(value: Optional[str], default: float = DEFAULT_RETRY_AFTER) -> float:
    """Seconds to wait from a ``Retry-After`` header (delay seconds or HTTP date)."""
    if not value:
        return default
    try:
        seconds = float(value)
    except ValueError:
        seconds = None
    if seconds is not None:
        return max(0.0, seconds) if math.isfinite(seconds) else default
    try:
        when = parsedate_to_datetime(value)
    except (TypeError, ValueError, IndexError):
        logger.warning(f"unparseable Retry-After {value!r}, waiting {default}s")
        return default
    if when.tzinfo is None:
        when = when.replace(tzinfo=timezone.utc)
    return max(0.0, (when - datetime.now(timezone.utc)).total_seconds())


class RiotAPIClient:
    """Asynchronous Riot API client with per-endpoint rate limiting.

    ``_make_request`` returns the decoded JSON body, ``None`` for a 404, and
    raises :class:`FetchFailure` for anything else once retries are spent.
    5xx responses, timeouts and transport errors are retried with
    exponential backoff; a 429 waits for ``Retry-After``.
    """

    def __init__(
        self,
        api_key: str,
        *,
        timeout: Optional[float] = None,
        max_retries: Optional[int] = None,
        retry_backoff: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key
        self.session: Optional[httpx.AsyncClient] = None
        self.timeout = timeout if timeout is not None else settings.REQUEST_TIMEOUT
        self.max_retries = max_retries if max_retries is not None else settings.MAX_RETRIES
        self.retry_backoff = retry_backoff if retry_backoff is not None else settings.RETRY_BACKOFF
        self.last_status_code: Optional[int] = None
        self._transport = transport
        self._endpoint_cooldown: dict[str, float] = {}

        self.rate_limiter = EndpointRateLimiter(
            RateLimiter.per_second_and_two_minutes(settings.RATE_LIMIT_PER_1_SEC, settings.RATE_LIMIT_PER_2_MIN)
        )
        self._setup_endpoint_limiters()

    def _setup_endpoint_limiters(self) -> None:
        self.rate_limiter.add_endpoint_limiter(
            "summoner",
            RateLimiter.per_second_and_two_minutes(
                settings.SUMMONER_RATE_LIMIT_PER_1_SEC, settings.SUMMONER_RATE_LIMIT_PER_2_MIN
            ),
        )
        self.rate_limiter.add_endpoint_limiter(
            "league",
            RateLimiter.per_second_and_two_minutes(
                settings.LEAGUE_RATE_LIMIT_PER_1_SEC, settings.LEAGUE_RATE_LIMIT_PER_2_MIN
            ),
        )
        self.rate_limiter.add_endpoint_limiter(
            "mastery",
            RateLimiter.per_second_and_two_minutes(
                settings.MASTERY_RATE_LIMIT_PER_1_SEC, settings.MASTERY_RATE_LIMIT_PER_2_MIN
            ),
        )

    async def __aenter__(self):
        self.session = httpx.AsyncClient(
            timeout=self.timeout,
            headers={"X-Riot-Token": self.api_key},
            transport=self._transport,
        )
        return self

    async def __aexit__(self, *_):
        if self.session:
            await self.session.aclose()
            self.session = None

    def _get_platform_url(self, region: Region) -> str:
        return f"https://{region.platform_route}.api.riotgames.com"

    async def _backoff(self, attempt: int) -> None:
        await asyncio.sleep(self.retry_backoff ** attempt)

    async def _make_request(self, url: str, endpoint_type: str = "default") -> Optional[Any]:
        if self.session is None:
            raise RuntimeError("RiotAPIClient must be used as an async context manager")

        last_error = "no attempt made"
        for attempt in range(self.max_retries + 1):
            cooldown = self._endpoint_cooldown.get(endpoint_type, 0.0)
            now = time.monotonic()
            if cooldown > now:
                await asyncio.sleep(cooldown - now)

            await self.rate_limiter.acquire(endpoint_type)

            try:
                response = await self.session.get(url)
            except httpx.TimeoutException:
                last_error = f"timeout for {url}"
                logger.warning(last_error)
                if attempt < self.max_retries:
                    await self._backoff(attempt)
                    continue
                raise FetchFailure(last_error) from None
            except httpx.HTTPError as exc:
                last_error = f"network error for {url}: {exc}"
                logger.error(last_error)
                if attempt < self.max_retries:
                    await self._backoff(attempt)
                    continue
                raise FetchFailure(last_error) from exc

            self.last_status_code = response.status_code

            if response.status_code == 200:
                try:
                    return response.json()
                except ValueError as exc:
                    raise FetchFailure(f"invalid JSON from {url}", status_code=200) from exc

            if response.status_code == 404:
                return None

            if response.status_code == 401 or response.status_code == 403:
                logger.error(f"{response.status_code} from API, check RIOT_API_KEY")
                raise FetchFailure("API key rejected", status_code=response.status_code)

            if response.status_code == 429:
                retry_after = parse_retry_after(response.headers.get("Retry-After"))
                logger.warning(f"429 rate-limited, waiting {retry_after}s")
                self._endpoint_cooldown[endpoint_type] = time.monotonic() + retry_after
                await self.rate_limiter.reset_endpoint(endpoint_type)
                last_error = "rate limited"
                if attempt < self.max_retries:
                    continue
                raise FetchFailure(last_error, status_code=429)

            if response.status_code >= 500:
                last_error = f"HTTP {response.status_code} for {url}"
                if attempt < self.max_retries:
                    await self._backoff(attempt)
                    continue
                raise FetchFailure(last_error, status_code=response.status_code)

            logger.warning(f"HTTP {response.status_code} for {url}")
            raise FetchFailure(f"HTTP {response.status_code} for {url}", status_code=response.status_code)

        raise FetchFailure(last_error)

    # ── Summoner API ───────────────────────────────────────────────────

    async def get_summoner_by_name(self, region: Region, name: str) -> Optional[Dict]:
        base = self._get_platform_url(region)
        return await self._make_request(
            f"{base}/lol/summoner/v4/summoners/by-name/{quote(name, safe='')}", "summoner"
        )

    # ── League API ─────────────────────────────────────────────────────

    async def get_league_entries_by_summoner(self, region: Region, summoner_id: str) -> List[Dict]:
        base = self._get_platform_url(region)
        result = await self._make_request(f"{base}/lol/league/v4/entries/by-summoner/{summoner_id}", "league")
        return result if isinstance(result, list) else []

    # ── Champion mastery API ───────────────────────────────────────────

    async def get_champion_masteries(self, region: Region, puuid: str) -> List[Dict]:
        base = self._get_platform_url(region)
        result = await self._make_request(
            f"{base}/lol/champion-mastery/v4/champion-masteries/by-puuid/{puuid}", "mastery"
        )
        return result if isinstance(result, list) else []

    async def get_mastery_score(self, region: Region, puuid: str) -> int:
        base = self._get_platform_url(region)
        result = await self._make_request(f"{base}/lol/champion-mastery/v4/scores/by-puuid/{puuid}", "mastery")
        return int(result) if isinstance(result, (int, float)) else 0
