"""Configuration for tool-protocol using Pydantic settings."""

from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration, read from ``TOOL_PROTOCOL_*`` environment variables."""

    # Host environment used to pick hashing/encoding/random-id primitives.
    # "auto" probes the interpreter once at first use.
    environment: Literal["auto", "server", "client"] = Field(
        default="auto",
        description="Force the host primitives provider instead of probing",
    )

    log_level: str = Field(default="INFO", description="Log level for initialize_logging()")
    log_tool_params: bool = Field(
        default=False,
        description="Log normalized parameters at DEBUG before each execution",
    )
    received_preview_length: int = Field(
        default=50,
        ge=8,
        description="Max characters of a rejected value echoed back in a field error",
    )

    model_config = SettingsConfigDict(
        env_prefix="TOOL_PROTOCOL_",
        env_file=".env",
        extra="ignore",  # Ignore unrelated keys from a shared .env file
    )


settings = Settings()
