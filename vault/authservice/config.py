from __future__ import annotations
from pydantic_settings import BaseSettings
from pydantic import Field


class AuthSettings(BaseSettings):
    JWT_SECRET: str = Field(..., min_length=1)  # required, no dev fallback
    JWT_ALG: str = Field(default="HS256")
    AUTH_ISSUER: str = Field(default="lucasnerism")
    AUTH_AUDIENCE: str = Field(default="users")
    ACCESS_TTL_SECONDS: int = Field(default=7 * 24 * 3600, gt=0)  # 7 days
    BCRYPT_ROUNDS: int = Field(default=10, ge=4, le=31)

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"
