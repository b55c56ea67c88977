"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file. Defaults live in typed module constants;
`load_settings()` reads the current environment into a Settings.
"""

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DEFAULT_DB_HOST: str = "localhost"
DEFAULT_DB_PORT: str = "5432"
DEFAULT_DB_NAME: str = "robot_data"
DEFAULT_DB_USER: str = "postgres"
DEFAULT_DB_PASS: str = ""

# ── Robot telemetry API ───────────────────────────────────
DEFAULT_API_URL: str = "http://localhost:3000/filter/robots"
DEFAULT_HTTP_TIMEOUT_SECONDS: str = "30"

# ── Polling ───────────────────────────────────────────────
DEFAULT_POLL_INTERVAL_SECONDS: str = "10"

# ── Logging ───────────────────────────────────────────────
DEFAULT_LOG_LEVEL: str = "INFO"
LOG_LEVEL: str = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()


@dataclass(frozen=True)
class Settings:
    """
    Snapshot of the runtime configuration.

    Attributes:
        host: PostgreSQL host.
        port: PostgreSQL port.
        database: Database name.
        user: Database user.
        password: Database password.
        api_url: Endpoint returning a JSON array of robot records.
        poll_interval_seconds: Seconds between two poll ticks.
        http_timeout_seconds: Request timeout, or None to wait forever.
        log_level: Root logger level name.
    """
    host: str
    port: int
    database: str
    user: str
    password: str
    api_url: str
    poll_interval_seconds: float
    http_timeout_seconds: Optional[float]
    log_level: str = "INFO"

    @property
    def database_url(self) -> str:
        return (
            f"postgresql://{self.user}:{self.password}"
            f"@{self.host}:{self.port}/{self.database}"
        )


def load_settings() -> Settings:
    """
    Re-read the environment into a Settings object.

    Raises:
        ValueError: If a numeric variable cannot be parsed or the
            poll interval is not positive.
    """
    interval = float(os.getenv("POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS))
    if interval <= 0:
        raise ValueError(f"POLL_INTERVAL_SECONDS must be positive, got {interval}")

    timeout = float(os.getenv("HTTP_TIMEOUT_SECONDS", DEFAULT_HTTP_TIMEOUT_SECONDS))

    return Settings(
        host=os.getenv("DB_HOST", DEFAULT_DB_HOST),
        port=int(os.getenv("DB_PORT", DEFAULT_DB_PORT)),
        database=os.getenv("DB_NAME", DEFAULT_DB_NAME),
        user=os.getenv("DB_USER", DEFAULT_DB_USER),
        password=os.getenv("DB_PASS", DEFAULT_DB_PASS),
        api_url=os.getenv("API_URL", DEFAULT_API_URL),
        poll_interval_seconds=interval,
        # 0 keeps the request unbounded
        http_timeout_seconds=timeout if timeout > 0 else None,
        log_level=os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper(),
    )
