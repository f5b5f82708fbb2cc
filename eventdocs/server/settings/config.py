import os
import sys
from datetime import timezone, tzinfo
from typing import List, Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from dotenv import load_dotenv
from pydantic import BaseModel

load_dotenv()


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        print(f"[settings] {name}={raw!r} is not a number, using {default}", file=sys.stderr)
        return default


class Settings(BaseModel):
    app_name: str = "Eventdocs - document codes & totals"
    environment: str = os.getenv("ENVIRONMENT", "dev")
    database_url: str = os.getenv("DATABASE_URL", "sqlite:///./eventdocs.db")
    debug: bool = os.getenv("DEBUG", "0") == "1"

    # Money
    base_currency: str = os.getenv("BASE_CURRENCY", "MXN").upper()
    exchange_rates_path: Optional[str] = os.getenv("EXCHANGE_RATES_PATH") or None
    retainer_ratio: float = _env_float("RETAINER_RATIO", 0.35)
    balance_due_days: int = int(_env_float("BALANCE_DUE_DAYS", 10))

    # Timestamps are turned into calendar dates in this zone
    display_timezone: str = os.getenv("DISPLAY_TIMEZONE", "America/Mexico_City")

    log_dir: Optional[str] = os.getenv("LOG_DIR") or None

    cors_origins: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
        if origin.strip()
    ]

    def display_tz(self) -> tzinfo:
        try:
            return ZoneInfo(self.display_timezone)
        except (ZoneInfoNotFoundError, ValueError):
            print(
                f"[settings] Unknown timezone {self.display_timezone!r}, falling back to UTC",
                file=sys.stderr,
            )
            return timezone.utc


settings = Settings()
