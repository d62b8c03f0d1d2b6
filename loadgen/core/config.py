# loadgen/core/config.py

from typing import Optional

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

KB = 1024
MB = KB * KB


class Settings(BaseSettings):
    PROJECT_NAME: str = "k8s Log Load Generator"
    VERSION: str = "0.3.0"
    LOG_LEVEL: str = "INFO"

    # Target
    TENANT_ID: Optional[str] = None
    BASE_URL: Optional[str] = None  # falls back to the scenario default
    TIMEOUT_MS: int = Field(10_000, ge=1)
    USER_AGENT: str = (
        "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_4) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/81.0.4044.138 Safari/537.36"
    )

    # Batch shape
    BATCH_SIZE: int = Field(1000, ge=1)
    FIELD_COUNT: int = Field(24, ge=0)

    # Executor overrides (None keeps the scenario's own numbers)
    VUS: Optional[int] = Field(None, ge=1)
    ITERATIONS: Optional[int] = Field(None, ge=1)
    SLEEP_SECONDS: Optional[float] = Field(None, ge=0)

    # OpenObserve bulk ingest
    OPENOBSERVE_ORG: str = "default"
    OPENOBSERVE_STREAM: str = "quickstart1"
    OPENOBSERVE_USER: str = "root@example.com"
    OPENOBSERVE_PASSWORD: str = "Complexpass#123"

    # Loki parameterized push
    LOKI_STREAMS: int = Field(10, ge=1)
    LOKI_MIN_BATCH_BYTES: int = Field(800 * KB, ge=1)
    LOKI_MAX_BATCH_BYTES: int = Field(2 * MB, ge=1)

    @model_validator(mode="after")
    def check_byte_range(self):
        if self.LOKI_MIN_BATCH_BYTES > self.LOKI_MAX_BATCH_BYTES:
            raise ValueError("LOKI_MIN_BATCH_BYTES must not exceed LOKI_MAX_BATCH_BYTES")
        return self

    @property
    def timeout_seconds(self) -> float:
        return self.TIMEOUT_MS / 1000

    class Config:
        env_prefix = "LOADGEN_"
        env_file = ".env"  # Load variables from .env file
        env_file_encoding = "utf-8"


settings = Settings()
