# freshcart/config.py
import logging
import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv, find_dotenv
from rich.logging import RichHandler

_env_path = find_dotenv(usecwd=True)
if _env_path:
    load_dotenv(_env_path)


def _get_env(*keys: str, default: Optional[str] = None) -> Optional[str]:
    for k in keys:
        v = os.getenv(k)
        if v is not None and str(v).strip() != "":
            return v.strip()
    return default


def _get_int(*keys: str, default: int) -> int:
    v = _get_env(*keys)
    if v is None:
        return default
    return int(v)


@dataclass(frozen=True)
class Settings:
    api_base_url: str
    socket_url: str
    token_file: str
    token: Optional[str]
    timeout: int
    cart_debounce: float
    search_debounce: float
    page_size: int
    log_level: str


def load_settings() -> Settings:
    return Settings(
        api_base_url=_get_env("FRESHCART_API_BASE_URL", default="http://127.0.0.1:8085").rstrip("/"),
        socket_url=_get_env("FRESHCART_SOCKET_URL", default="http://127.0.0.1:5001").rstrip("/"),
        token_file=_get_env("FRESHCART_TOKEN_FILE", default=str(Path.home() / ".freshcart" / "token")),
        token=_get_env("FRESHCART_TOKEN"),
        timeout=_get_int("FRESHCART_TIMEOUT", default=10),
        cart_debounce=_get_int("FRESHCART_CART_DEBOUNCE_MS", default=500) / 1000,
        search_debounce=_get_int("FRESHCART_SEARCH_DEBOUNCE_MS", default=300) / 1000,
        page_size=_get_int("FRESHCART_PAGE_SIZE", default=24),
        log_level=_get_env("FRESHCART_LOG_LEVEL", default="WARNING").upper(),
    )


@lru_cache
def get_settings() -> Settings:
    return load_settings()


def configure_logging(level: Optional[str] = None):
    level = level or get_settings().log_level
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
    )
