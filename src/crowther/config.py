"""Configuration for Crowther's Adventure."""

import os
from dataclasses import dataclass
from pathlib import Path


def _flag(name: str) -> bool:
    return os.getenv(name, "").lower() in ("true", "1", "yes")


@dataclass
class Config:
    """Interpreter configuration."""

    data_file: Path | None = None
    seed: int | None = None
    strict_transfers: bool = False
    log_level: str = "WARNING"
    log_file: Path | None = None
    json_logs: bool = False

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        data_file = os.getenv("ADVENTURE_DATA_FILE")
        seed = os.getenv("ADVENTURE_SEED")
        log_file = os.getenv("ADVENTURE_LOG_FILE")

        return cls(
            data_file=Path(data_file) if data_file else None,
            seed=int(seed) if seed else None,
            strict_transfers=_flag("ADVENTURE_STRICT_TRANSFERS"),
            log_level=os.getenv("ADVENTURE_LOG_LEVEL", cls.log_level),
            log_file=Path(log_file) if log_file else None,
            json_logs=_flag("ADVENTURE_JSON_LOGS"),
        )
