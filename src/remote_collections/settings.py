"""Application settings using Pydantic Settings."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Remote collections configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_prefix="REMOTE_COLLECTIONS_",
        case_sensitive=False,
        extra="ignore",
    )

    # Redis
    redis_url: str = Field(default="redis://localhost:6379/0", description="Redis URL")
    decode_responses: bool = Field(
        default=False,
        description="Ask the Redis client to decode replies to str (serializers accept bytes or str)",
    )

    # Keys
    key_prefix: str = Field(
        default="",
        description="Prefix prepended to every namespace key (e.g. 'myapp:'). "
        "Lets several applications share one Redis database.",
    )

    # Enumeration
    scan_count: int = Field(
        default=250,
        gt=0,
        description="COUNT hint passed to HSCAN when enumerating a dictionary",
    )


settings = Settings()
