"""Runner configuration using Pydantic Settings."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Settings loaded from ASM_RUNNER_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="ASM_RUNNER_",
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Folder holding nasm/ and ollydbg/ (asm_tools)
    toolchain_root: Path | None = None

    # Link debug builds as console programs so the target gets a terminal
    show_terminal_in_debug_mode: bool = True

    entry_point: str = "start"
    terminal_title: str = "Assembly"

    # Timeouts
    build_timeout_seconds: float = Field(default=60.0, ge=1.0, le=600.0)
    process_query_timeout_seconds: float = Field(default=10.0, ge=1.0, le=120.0)
    stop_wait_seconds: float = Field(default=5.0, ge=0.0, le=60.0)

    log_level: str = "INFO"


# Global settings instance
settings = Settings()
