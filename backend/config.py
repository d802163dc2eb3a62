"""Centralised settings for the Page Binder backend.

All runtime configuration is resolved here in one place.  Values can be
overridden via environment variables or a `.env` file in the project root
(loaded automatically when this module is imported).
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env from the project root (two levels up from this file)
_env_path = Path(__file__).resolve().parent.parent / ".env"
load_dotenv(_env_path, override=False)


def _env_bool(name: str, default: str) -> bool:
    return os.environ.get(name, default).strip().lower() in ("1", "true", "yes", "on")


@dataclass
class Settings:
    # ------------------------------------------------------------------
    # CLI storage
    # ------------------------------------------------------------------
    cli_config_dir: Path = field(
        default_factory=lambda: Path(
            os.environ.get("BINDER_CLI_DIR", Path.home() / ".page_binder_cli")
        )
    )

    # ------------------------------------------------------------------
    # Source-page fetcher
    # ------------------------------------------------------------------
    request_timeout: float = field(
        default_factory=lambda: float(os.environ.get("REQUEST_TIMEOUT", "30.0"))
    )

    # ------------------------------------------------------------------
    # Capture pacing (host allows ~2 visible-area captures per second)
    # ------------------------------------------------------------------
    capture_settle_delay: float = field(
        default_factory=lambda: float(os.environ.get("CAPTURE_SETTLE_DELAY", "0.6"))
    )
    capture_retry_delay: float = field(
        default_factory=lambda: float(os.environ.get("CAPTURE_RETRY_DELAY", "1.0"))
    )
    capture_max_attempts: int = field(
        default_factory=lambda: int(os.environ.get("CAPTURE_MAX_ATTEMPTS", "3"))
    )
    captures_per_second: int = field(
        default_factory=lambda: int(os.environ.get("CAPTURES_PER_SECOND", "2"))
    )

    # ------------------------------------------------------------------
    # Hidden page loading
    # ------------------------------------------------------------------
    page_load_timeout: float = field(
        default_factory=lambda: float(os.environ.get("PAGE_LOAD_TIMEOUT", "30.0"))
    )
    post_load_delay: float = field(
        default_factory=lambda: float(os.environ.get("POST_LOAD_DELAY", "1.0"))
    )

    # ------------------------------------------------------------------
    # Browser surface
    # ------------------------------------------------------------------
    viewport_width: int = field(
        default_factory=lambda: int(os.environ.get("VIEWPORT_WIDTH", "1280"))
    )
    viewport_height: int = field(
        default_factory=lambda: int(os.environ.get("VIEWPORT_HEIGHT", "800"))
    )
    headless: bool = field(
        default_factory=lambda: _env_bool("BROWSER_HEADLESS", "true")
    )
    surface_create_retries: int = field(
        default_factory=lambda: int(os.environ.get("SURFACE_CREATE_RETRIES", "1"))
    )

    # ------------------------------------------------------------------
    # PDF output
    # ------------------------------------------------------------------
    default_paper_size: str = field(
        default_factory=lambda: os.environ.get("DEFAULT_PAPER_SIZE", "A4")
    )
    default_orientation: str = field(
        default_factory=lambda: os.environ.get("DEFAULT_ORIENTATION", "portrait")
    )


# Module-level singleton; import this everywhere:
#   from backend.config import settings
settings = Settings()
