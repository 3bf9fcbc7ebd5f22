"""Runtime settings read from the environment (optionally via a .env file)."""

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

from friendmap.infrastructure.geocoding import DEFAULT_GEOCODER_URL, DEFAULT_TIMEOUT_SECONDS

_TRUE = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class Settings:
    sheet_csv_url: str | None = None
    write_back_url: str | None = None
    access_key: str | None = None
    geocoder_url: str = DEFAULT_GEOCODER_URL
    geocoder_user_agent: str = "friendmap/0.1"
    http_timeout: float = DEFAULT_TIMEOUT_SECONDS
    geocode_cache: bool = True
    default_phone_region: str | None = None


def _opt(env: Mapping[str, str], name: str) -> str | None:
    return (env.get(name) or "").strip() or None


def load_settings(env: Mapping[str, str] | None = None) -> Settings:
    """Build Settings from FRIENDMAP_* variables. Unset or blank values fall back to defaults."""
    env = os.environ if env is None else env
    timeout_raw = _opt(env, "FRIENDMAP_HTTP_TIMEOUT")
    try:
        timeout = float(timeout_raw) if timeout_raw else DEFAULT_TIMEOUT_SECONDS
    except ValueError as exc:
        raise ValueError(
            f"FRIENDMAP_HTTP_TIMEOUT must be a number, got {timeout_raw!r}."
        ) from exc
    if timeout <= 0:
        raise ValueError("FRIENDMAP_HTTP_TIMEOUT must be positive.")
    cache_raw = _opt(env, "FRIENDMAP_GEOCODE_CACHE")
    region = _opt(env, "FRIENDMAP_DEFAULT_PHONE_REGION")
    return Settings(
        sheet_csv_url=_opt(env, "FRIENDMAP_SHEET_CSV_URL"),
        write_back_url=_opt(env, "FRIENDMAP_WRITE_BACK_URL"),
        access_key=_opt(env, "FRIENDMAP_ACCESS_KEY"),
        geocoder_url=_opt(env, "FRIENDMAP_GEOCODER_URL") or DEFAULT_GEOCODER_URL,
        geocoder_user_agent=_opt(env, "FRIENDMAP_GEOCODER_USER_AGENT") or "friendmap/0.1",
        http_timeout=timeout,
        geocode_cache=cache_raw is None or cache_raw.lower() in _TRUE,
        default_phone_region=region.upper() if region else None,
    )


def load_env_file(*candidates: Path) -> Path | None:
    """Load the first existing .env among candidates. Returns the path loaded, or None."""
    for path in candidates:
        if path.exists():
            load_dotenv(path)
            return path
    return None
