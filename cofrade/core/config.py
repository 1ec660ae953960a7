# core/config.py

import os
from dataclasses import dataclass
from typing import Optional

DEFAULT_MODEL = "gemini-3-flash-preview"
DEFAULT_TIMEOUT = 120.0

_TRUE = {"1", "true", "yes", "on", "si", "sí"}


@dataclass
class Settings:
    api_key: Optional[str] = None
    model: str = DEFAULT_MODEL
    proxy_url: Optional[str] = None
    timeout: float = DEFAULT_TIMEOUT
    debug: bool = False
    log_level: str = "INFO"

    @property
    def proxy_mode(self) -> bool:
        return bool(self.proxy_url)


def _float(value: Optional[str], default: float) -> float:
    try:
        return float(value) if value else default
    except ValueError:
        return default


def load_settings() -> Settings:
    """
    Read the settings from the environment.
    Entry points call load_dotenv() first, so .env values are visible here.
    """
    return Settings(
        api_key=os.getenv("GEMINI_API_KEY") or os.getenv("API_KEY") or None,
        model=os.getenv("GEMINI_MODEL") or DEFAULT_MODEL,
        proxy_url=os.getenv("COFRADE_PROXY_URL") or None,
        timeout=_float(os.getenv("COFRADE_TIMEOUT"), DEFAULT_TIMEOUT),
        debug=(os.getenv("COFRADE_DEBUG", "").strip().lower() in _TRUE),
        log_level=(os.getenv("LOG_LEVEL") or "INFO").upper(),
    )
