"""Configuration management."""
import os

from dotenv import load_dotenv

load_dotenv()

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


class Config:
    def __init__(self):
        self._errors: list[str] = []
        self.SCAN_WORKERS: int = self._int("SCAN_WORKERS", 1)
        self.MAX_LISTINGS: int = self._int("MAX_LISTINGS", 0)  # 0 = unlimited
        self.SEASON_MONTH = self._int("SEASON_MONTH", None)
        self.DEFAULT_PLATFORM: str = os.environ.get("DEFAULT_PLATFORM", "etsy").lower()
        self.LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO").upper()

    def _int(self, name: str, default):
        # Parse errors are reported by validate(), not at import.
        raw = os.environ.get(name, "").strip()
        if not raw:
            return default
        try:
            return int(raw)
        except ValueError:
            self._errors.append(f"{name} must be an integer, got {raw!r}")
            return default

    def validate(self):
        if self._errors:
            raise ValueError(self._errors[0])
        if self.SCAN_WORKERS < 1:
            raise ValueError(f"SCAN_WORKERS must be >= 1, got {self.SCAN_WORKERS}")
        if self.MAX_LISTINGS < 0:
            raise ValueError(f"MAX_LISTINGS must be >= 0, got {self.MAX_LISTINGS}")
        if self.SEASON_MONTH is not None and not 1 <= self.SEASON_MONTH <= 12:
            raise ValueError(f"SEASON_MONTH must be 1-12, got {self.SEASON_MONTH}")
        if self.DEFAULT_PLATFORM not in ("etsy", "amazon"):
            raise ValueError(f"Unknown DEFAULT_PLATFORM: {self.DEFAULT_PLATFORM}")
        if self.LOG_LEVEL not in LOG_LEVELS:
            raise ValueError(f"Unknown LOG_LEVEL: {self.LOG_LEVEL}")


config = Config()
