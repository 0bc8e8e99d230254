from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field


class CipherSettings(BaseSettings):
    CRYPTR_SECRET: str = Field(..., min_length=1)  # required, no dev fallback
    CIPHER_KDF_ITERATIONS: int = Field(default=100_000, gt=0)

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
