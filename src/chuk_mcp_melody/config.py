"""
Melody service configuration.

Settings are read from environment variables and an optional .env file
in the working directory.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from chuk_mcp_melody.constants import (
    DEFAULT_LLM_MODEL,
    DEFAULT_LLM_TEMPERATURE,
    DEFAULT_OPENAI_BASE_URL,
    OUTPUT_DIR_NAME,
)


class Settings(BaseSettings):
    """
    Settings for the composition pipeline.

    Only the API key is required for real generations; everything else
    has a working default.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        populate_by_name=True,
    )

    # ---- Completion service ----
    openai_api_key: str | None = Field(default=None, validation_alias="OPENAI_API_KEY")
    openai_base_url: str = Field(
        default=DEFAULT_OPENAI_BASE_URL,
        validation_alias=AliasChoices("OPENAI_BASE_URL", "MELODY_LLM_BASE_URL"),
    )
    llm_model: str = Field(default=DEFAULT_LLM_MODEL, validation_alias="MELODY_LLM_MODEL")
    llm_temperature: float = Field(
        default=DEFAULT_LLM_TEMPERATURE, validation_alias="MELODY_LLM_TEMPERATURE"
    )
    # None waits forever; the hosting service owns request deadlines
    llm_timeout: float | None = Field(default=None, validation_alias="MELODY_LLM_TIMEOUT")

    # ---- Paths ----
    output_dir: Path = Field(default=Path(OUTPUT_DIR_NAME), validation_alias="MELODY_OUTPUT_DIR")

    def resolved_output_dir(self) -> Path:
        """Output directory, relative paths taken from the working directory."""
        if self.output_dir.is_absolute():
            return self.output_dir
        return Path.cwd() / self.output_dir


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
