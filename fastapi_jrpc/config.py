"""Environment driven settings."""
import os
from dataclasses import dataclass

from .extractor import DEFAULT_MAX_BODY_SIZE


@dataclass(frozen=True)
class Settings:
    service_name: str = "fastapi-jrpc"
    max_body_size: int = DEFAULT_MAX_BODY_SIZE
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        """Read settings from ``JRPC_*`` environment variables."""
        max_body_size = int(os.getenv("JRPC_MAX_BODY_SIZE", str(DEFAULT_MAX_BODY_SIZE)))
        if max_body_size <= 0:
            raise ValueError(f"JRPC_MAX_BODY_SIZE must be positive, got {max_body_size}")
        return cls(
            service_name=os.getenv("JRPC_SERVICE_NAME", cls.service_name),
            max_body_size=max_body_size,
            log_level=os.getenv("JRPC_LOG_LEVEL", cls.log_level).upper(),
        )
