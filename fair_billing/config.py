"""Application configuration loaded from environment variables.

The defaults reproduce the reference billing behaviour, so no variable
has to be set for a normal run.
"""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    app_name: str = "fair-billing"
    log_level: str = "WARNING"

    # Start/End tokens are matched exactly unless this is turned off
    case_sensitive_kind: bool = True

    encoding: str = "utf-8"

    model_config = {"env_prefix": "FAIRBILL_"}


settings = Settings()
