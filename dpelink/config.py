import os
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Optional

from dotenv import load_dotenv

from .exceptions import ConfigError

ENV_PREFIX = "DPELINK_"


def load_env() -> None:
    """Load .env from the working directory if present."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


def _env(name: str, default, cast: Callable):
    raw = os.getenv(ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError:
        raise ConfigError(f"Invalid value for {ENV_PREFIX}{name}: {raw!r}") from None


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the matching engine and its SQLite store."""

    db_path: Path = Path("data/dpelink.db")
    max_candidates: int = 50
    max_links: int = 5
    square_footage_tolerance: float = 0.10
    log_level: str = "INFO"
    log_dir: Optional[Path] = None

    def __post_init__(self):
        if self.max_candidates < 1:
            raise ConfigError("max_candidates must be at least 1")
        if self.max_links < 1:
            raise ConfigError("max_links must be at least 1")
        if not 0 <= self.square_footage_tolerance < 1:
            raise ConfigError("square_footage_tolerance must be in [0, 1)")

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from DPELINK_* environment variables.

        Call load_env() first to pick up a .env file.
        """
        defaults = cls()
        return cls(
            db_path=_env("DB_PATH", defaults.db_path, Path),
            max_candidates=_env("MAX_CANDIDATES", defaults.max_candidates, int),
            max_links=_env("MAX_LINKS", defaults.max_links, int),
            square_footage_tolerance=_env(
                "SQUARE_FOOTAGE_TOLERANCE", defaults.square_footage_tolerance, float
            ),
            log_level=_env("LOG_LEVEL", defaults.log_level, str).upper(),
            log_dir=_env("LOG_DIR", defaults.log_dir, Path),
        )
