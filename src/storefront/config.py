"""Client settings, read from the environment."""

import os
from dataclasses import dataclass
from pathlib import Path

DEFAULT_API_URL = "http://localhost:8000"
DEFAULT_STORAGE_PATH = "~/.storefront/storage.json"
DEFAULT_TIMEOUT = 10.0


@dataclass(frozen=True)
class Settings:
    api_url: str = DEFAULT_API_URL
    storage_path: Path = Path(DEFAULT_STORAGE_PATH).expanduser()
    timeout: float = DEFAULT_TIMEOUT
    customer_id: str | None = None

    @classmethod
    def from_env(cls, environ=None) -> "Settings":
        env = os.environ if environ is None else environ
        return cls(
            api_url=env.get("STOREFRONT_API_URL", DEFAULT_API_URL).rstrip("/"),
            storage_path=Path(env.get("STOREFRONT_STORAGE_PATH", DEFAULT_STORAGE_PATH)).expanduser(),
            timeout=float(env.get("STOREFRONT_TIMEOUT", DEFAULT_TIMEOUT)),
            customer_id=env.get("STOREFRONT_CUSTOMER_ID") or None,
        )
