"""Application settings and configuration."""
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

ENV_PATH = Path(__file__).resolve().parent / '.env'
load_dotenv(dotenv_path=ENV_PATH)


def _int_env(name: str, default: int) -> int:
    try:
        return int(os.getenv(name, str(default)))
    except ValueError:
        return default


def _float_env(name: str, default: float) -> float:
    try:
        return float(os.getenv(name, str(default)))
    except ValueError:
        return default


class Settings:
    """Process-wide configuration, read from ``config/.env`` and the environment."""

    RIOT_API_KEY: str = os.getenv('RIOT_API_KEY', '')

    # ── Rate limits (per 1 second / per 2 minutes) ────────────────────────
    # Personal keys are capped at 20/s and 100/120s; stay slightly below.
    RATE_LIMIT_PER_1_SEC:          int = 18
    RATE_LIMIT_PER_2_MIN:          int = 90

    SUMMONER_RATE_LIMIT_PER_1_SEC: int = 18
    SUMMONER_RATE_LIMIT_PER_2_MIN: int = 85

    LEAGUE_RATE_LIMIT_PER_1_SEC:   int = 15
    LEAGUE_RATE_LIMIT_PER_2_MIN:   int = 75

    MASTERY_RATE_LIMIT_PER_1_SEC:  int = 18
    MASTERY_RATE_LIMIT_PER_2_MIN:  int = 90

    # ── HTTP ───────────────────────────────────────────────────────────────
    REQUEST_TIMEOUT: int   = _int_env('REQUEST_TIMEOUT', 10)
    MAX_RETRIES:     int   = _int_env('MAX_RETRIES', 3)
    RETRY_BACKOFF:   float = _float_env('RETRY_BACKOFF', 2.0)

    # ── Summoner cache ─────────────────────────────────────────────────────
    SUMMONER_CACHE_CAPACITY: int   = _int_env('SUMMONER_CACHE_CAPACITY', 500)
    # Upper bound for one fetch on a cache miss, retries included.
    FETCH_TIMEOUT:           float = _float_env('FETCH_TIMEOUT', 20.0)

    # ── Static data ────────────────────────────────────────────────────────
    DDRAGON_BASE_URL:   str           = 'https://ddragon.leagueoflegends.com'
    DDRAGON_VERSION:    str           = os.getenv('DDRAGON_VERSION', '')
    DDRAGON_LOCALE:     str           = os.getenv('DDRAGON_LOCALE', 'en_US')
    CHAMPION_DATA_FILE: Optional[str] = os.getenv('CHAMPION_DATA_FILE') or None

    # ── Paths ──────────────────────────────────────────────────────────────
    BASE_DIR: Path = Path(__file__).resolve().parent.parent
    LOG_DIR:  Path = Path(os.getenv('LOG_DIR', str(BASE_DIR.parent / 'logs')))

    LOG_LEVEL: str = os.getenv('LOG_LEVEL', 'INFO')

    @classmethod
    def validate(cls) -> None:
        if not cls.RIOT_API_KEY:
            raise ValueError("RIOT_API_KEY must be set in config/.env or the environment")
        if cls.SUMMONER_CACHE_CAPACITY < 1:
            raise ValueError("SUMMONER_CACHE_CAPACITY must be at least 1")


settings = Settings()
