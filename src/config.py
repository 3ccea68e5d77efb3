from __future__ import annotations

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Central configuration loaded from environment / .env file."""

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "extra": "ignore"}

    # API
    api_host: str = "0.0.0.0"
    port: int = 3001

    # Monitored servers (one env override per target)
    main_server_url: str = "https://gorr-main-server.onrender.com/ping"
    proxy_server_url: str = "https://gorr-proxy-server.onrender.com/ping"
    socket_server_url: str = "https://gorr-socket-server.onrender.com/ping"

    # Scheduling
    ping_interval_seconds: float = Field(default=300.0, gt=0)  # 5 minutes
    overlap_policy: Literal["allow", "skip"] = "allow"

    # Logging
    log_level: str = "INFO"


settings = Settings()
